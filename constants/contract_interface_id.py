# ERC-165 interface ids (XOR of the interface's function selectors)
ERC165_ID = "0x01ffc9a7"

ERC721_ID = "0x80ac58cd"
ERC721_METADATA_ID = "0x5b5e139f"
ERC721_ENUMERABLE_ID = "0x780e9d63"

ERC1155_ID = "0xd9b67a26"
ERC1155_METADATA_URI_ID = "0x0e89341c"
