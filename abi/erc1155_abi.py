# --- ERC-1155 (Multi-Token) ---
ERC1155_ABI = [
    # IERC1155MetadataURI
    {
        "constant": True,
        "inputs": [{"name": "_id", "type": "uint256"}],
        "name": "uri",
        "outputs": [{"name": "", "type": "string"}],
        "payable": False,
        "stateMutability": "view",
        "type": "function"
    }
]
