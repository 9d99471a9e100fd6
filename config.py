"""
Application Configuration
"""
import os

# Solana network configuration
SOLANA_RPC_URL = os.getenv('SOLANA_RPC_URL', 'https://api.devnet.solana.com')
SOLANA_CLUSTER = os.getenv('SOLANA_CLUSTER', 'devnet')

# Minimum percentage required to mint a degree
PASS_THRESHOLD = int(os.getenv('PASS_THRESHOLD', 70))

def get_explorer_url(signature):
    """Get Solana explorer link for a transaction signature"""
    if SOLANA_CLUSTER == 'mainnet-beta':
        return f"https://explorer.solana.com/tx/{signature}"
    return f"https://explorer.solana.com/tx/{signature}?cluster={SOLANA_CLUSTER}"

# ============================
# Degree Mint Settings
# ============================
MINT_CONFIG = {
    # Metadata descriptor for every minted degree
    'DEGREE_NAME': 'Sol Edu Badges Degree',
    'DEGREE_SYMBOL': '',
    'DEGREE_METADATA_URI': 'https://raw.githubusercontent.com/solana-developers/opos-asset/main/assets/DeveloperPortal/metadata.json',
    'SELLER_FEE_BASIS_POINTS': 0,

    # Seconds before an RPC request to the Solana node is abandoned
    'RPC_TIMEOUT': 30,
}

def get_mint_config():
    """Read mint settings and issuer credentials from the environment.

    Called once per mint request so rotated keys are picked up without a restart.
    """
    return {
        'rpc_url': os.getenv('SOLANA_RPC_URL', SOLANA_RPC_URL),
        'server_private_key': os.getenv('SERVER_PRIVATE_KEY'),
        'merkle_tree': os.getenv('MERKLE_TREE_ADDRESS'),
        'collection_mint': os.getenv('COLLECTION_ADDRESS'),
        'name': os.getenv('DEGREE_NAME', MINT_CONFIG['DEGREE_NAME']),
        'symbol': os.getenv('DEGREE_SYMBOL', MINT_CONFIG['DEGREE_SYMBOL']),
        'uri': os.getenv('DEGREE_METADATA_URI', MINT_CONFIG['DEGREE_METADATA_URI']),
        'seller_fee_basis_points': MINT_CONFIG['SELLER_FEE_BASIS_POINTS'],
        'rpc_timeout': float(os.getenv('SOLANA_RPC_TIMEOUT', MINT_CONFIG['RPC_TIMEOUT'])),
    }
