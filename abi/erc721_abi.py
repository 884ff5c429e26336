ERC721_ABI = [
    {
        "constant": True,
        "inputs": [{"name": "tokenId", "type": "uint256"}],
        "name": "ownerOf",
        "outputs": [{"name": "", "type": "address"}],
        "type": "function"
    },
    # IERC721Metadata
    {
        "constant": True,
        "inputs": [{"name": "tokenId", "type": "uint256"}],
        "name": "tokenURI",
        "outputs": [{"name": "", "type": "string"}],
        "type": "function"
    },
    # Not part of ERC721, but widely used by marketplaces for collection-level metadata
    {
        "constant": True,
        "inputs": [],
        "name": "contractURI",
        "outputs": [{"name": "", "type": "string"}],
        "type": "function"
    }
]
