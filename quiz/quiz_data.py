"""
Static quiz content.

Every topic has five questions so that 4/5 correct (80%) clears the
70% mint threshold while 3/5 (60%) does not.
"""

TOPICS = [
    {
        'id': 'solana-fundamentals',
        'title': 'Solana Fundamentals',
        'description': 'Blocks, fees and signatures: the basics every Solana developer needs.',
        'questions': [
            {
                'id': 1,
                'text': 'Which data structure is essential for linking blocks in a blockchain?',
                'options': ['Merkle Tree', 'Linked List', 'Hash Map', 'Binary Heap'],
                'correct': 'Linked List'
            },
            {
                'id': 2,
                'text': "What is the primary benefit of 'Compressed NFTs' on Solana?",
                'options': ['Higher storage costs', 'Drastically lower minting costs', 'Slower transaction speeds', 'Centralized storage'],
                'correct': 'Drastically lower minting costs'
            },
            {
                'id': 3,
                'text': 'What mechanism does Solana use to order transactions?',
                'options': ['Proof of Work', 'Proof of History (PoH)', 'Proof of Stake', 'Round Robin'],
                'correct': 'Proof of History (PoH)'
            },
            {
                'id': 4,
                'text': 'Who signs a transaction to authorize a token transfer?',
                'options': ['The Miner', 'The Wallet Owner (Private Key)', 'The Node Validator', 'The API Provider'],
                'correct': 'The Wallet Owner (Private Key)'
            },
            {
                'id': 5,
                'text': 'What is the native token used for transaction fees on Solana?',
                'options': ['ETH', 'BTC', 'SOL', 'USDC'],
                'correct': 'SOL'
            }
        ]
    },
    {
        'id': 'compressed-nfts',
        'title': 'Compressed NFTs',
        'description': 'How Bubblegum stores ownership in concurrent Merkle trees.',
        'questions': [
            {
                'id': 1,
                'text': 'Where is the ownership record of a compressed NFT stored?',
                'options': ['In its own token account', 'As a leaf in a concurrent Merkle tree', 'In an off-chain database only', 'Inside the collection mint'],
                'correct': 'As a leaf in a concurrent Merkle tree'
            },
            {
                'id': 2,
                'text': 'Which Metaplex program mints and transfers compressed NFTs?',
                'options': ['Candy Machine', 'Bubblegum', 'Auction House', 'Token Metadata'],
                'correct': 'Bubblegum'
            },
            {
                'id': 3,
                'text': 'What is the noop program used for when minting a compressed NFT?',
                'options': ['Paying transaction fees', 'Logging leaf data so indexers can rebuild the tree', 'Verifying the collection', 'Burning old leaves'],
                'correct': 'Logging leaf data so indexers can rebuild the tree'
            },
            {
                'id': 4,
                'text': 'Which API do wallets and explorers use to read compressed NFTs?',
                'options': ['The Digital Asset Standard (DAS) API', 'The getTokenAccountsByOwner RPC only', 'The Solana CLI', 'The SPL Token program'],
                'correct': 'The Digital Asset Standard (DAS) API'
            },
            {
                'id': 5,
                'text': 'What determines how many compressed NFTs a tree can hold?',
                'options': ['The collection size field', 'The tree max depth', 'The payer balance', 'The metadata URI length'],
                'correct': 'The tree max depth'
            }
        ]
    },
    {
        'id': 'wallets-and-keys',
        'title': 'Wallets & Keys',
        'description': 'Keypairs, addresses and what a wallet actually signs.',
        'questions': [
            {
                'id': 1,
                'text': 'Which signature scheme do Solana keypairs use?',
                'options': ['ECDSA secp256k1', 'Ed25519', 'RSA-2048', 'BLS12-381'],
                'correct': 'Ed25519'
            },
            {
                'id': 2,
                'text': 'How is a Solana public key usually displayed?',
                'options': ['Hex with a 0x prefix', 'Base58', 'Base64', 'Decimal'],
                'correct': 'Base58'
            },
            {
                'id': 3,
                'text': 'What is a Program Derived Address (PDA)?',
                'options': ['An address with no private key, derived from seeds and a program id', 'A hardware wallet address', 'A multisig wallet', 'A vanity address'],
                'correct': 'An address with no private key, derived from seeds and a program id'
            },
            {
                'id': 4,
                'text': 'What should you never share with anyone?',
                'options': ['Your public key', 'Your transaction signatures', 'Your seed phrase', 'Your NFT metadata'],
                'correct': 'Your seed phrase'
            },
            {
                'id': 5,
                'text': 'What does a recent blockhash in a transaction protect against?',
                'options': ['High fees', 'Replay of old transactions', 'Phishing sites', 'Lost keys'],
                'correct': 'Replay of old transactions'
            }
        ]
    }
]

_TOPICS_BY_ID = {topic['id']: topic for topic in TOPICS}


def get_topic(topic_id):
    """Look up a topic by id, None if unknown"""
    return _TOPICS_BY_ID.get(topic_id)


def list_topics():
    """Topic summaries for the topic-select screen (no questions or answers)"""
    return [
        {
            'id': topic['id'],
            'title': topic['title'],
            'description': topic['description'],
            'total_questions': len(topic['questions'])
        }
        for topic in TOPICS
    ]
