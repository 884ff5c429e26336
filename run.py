try:
    import uvloop
except ImportError:
    uvloop = None

from cli import cli
from utils.logger_utils import configure_logging, get_logger

configure_logging()
logger = get_logger("Run Entry Point")


def main():
    if uvloop:
        uvloop.install()
        logger.debug("uvloop installed successfully.")
    cli()


if __name__ == "__main__":
    main()
