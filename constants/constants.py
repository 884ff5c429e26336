DEFAULT_IPFS_GATEWAY = "https://ipfs.io"
DEFAULT_ARWEAVE_GATEWAY = "https://arweave.net"

IPFS_SCHEME = "ipfs://"
ARWEAVE_SCHEME = "ar://"
HTTP_SCHEMES = ("http://", "https://")

# data:application/json;base64,... / data:application/json;utf8,... / data:application/json,...
JSON_DATA_URI_PREFIX = "data:application/json"

UNSUPPORTED_TOKEN_TYPE_MESSAGE = "Unsupported token type"

# ERC20 decimals is a uint8
MAX_ERC20_DECIMALS = 255
