from typing import Optional

from constants.constants import UNSUPPORTED_TOKEN_TYPE_MESSAGE


class TokenDataError(Exception):
    """Base class for errors surfaced by token_data()."""


class UnsupportedTokenType(TokenDataError):
    """No ERC165 interface matched and the contract does not read as an ERC20."""

    def __init__(self, address: Optional[str] = None):
        super().__init__(UNSUPPORTED_TOKEN_TYPE_MESSAGE)
        self.address = address


class RequiredFieldFetchError(TokenDataError):
    """A call needed to populate a field of an already detected token type failed."""

    def __init__(self, field: str, address: str, message: Optional[str] = None):
        super().__init__(message or f"Failed to fetch required field '{field}' for {address}")
        self.field = field
        self.address = address


class MetadataFetchError(TokenDataError):
    """Metadata was requested but the URI could not be normalized, fetched or parsed."""

    def __init__(self, message: str, uri: Optional[str] = None):
        super().__init__(message)
        self.uri = uri
