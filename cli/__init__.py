import click

from cli.get_token_data import get_token_data


@click.group()
@click.version_option(version="0.1.0")
@click.pass_context
def cli(ctx):
    pass


# Token standard detection + metadata
cli.add_command(get_token_data, "get_token_data")
