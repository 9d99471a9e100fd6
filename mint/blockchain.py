"""
Degree Mint Service

Mints compressed NFT degrees with the Metaplex Bubblegum program on Solana.

Uses SERVER_PRIVATE_KEY as payer, tree delegate and collection authority
to sign every mint transaction.
"""

import json
import logging

from borsh_construct import CStruct, String, U8, U16, U64, Bool, Option, Vec
from construct import Bytes
from solders.instruction import AccountMeta, Instruction
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey
from solders.transaction import Transaction
from solana.rpc.api import Client
from solana.rpc.commitment import Confirmed
from solana.rpc.types import TxOpts

from config import get_mint_config, get_explorer_url

logger = logging.getLogger(__name__)

BUBBLEGUM_PROGRAM_ID = Pubkey.from_string('BGUMAp9Gq7iTEuizy4pqaxsTyUCBK68MDfK752saRPUY')
TOKEN_METADATA_PROGRAM_ID = Pubkey.from_string('metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s')
SPL_NOOP_PROGRAM_ID = Pubkey.from_string('noopb9bkMVfRPU8AsbpTUg8AQkHtKwMYZiFUjNRtMmV')
SPL_ACCOUNT_COMPRESSION_PROGRAM_ID = Pubkey.from_string('cmtDvXumGCrqC1Age74AVPhSRVXJMd8PJS91L8KbNCK')
SYSTEM_PROGRAM_ID = Pubkey.from_string('11111111111111111111111111111111')

MINT_TO_COLLECTION_V1_DISCRIMINATOR = bytes([153, 18, 178, 47, 197, 158, 86, 15])

TOKEN_STANDARD_NON_FUNGIBLE = 0
TOKEN_PROGRAM_VERSION_ORIGINAL = 0

Collection = CStruct(
    "verified" / Bool,
    "key" / Bytes(32)
)

Creator = CStruct(
    "address" / Bytes(32),
    "verified" / Bool,
    "share" / U8
)

Uses = CStruct(
    "use_method" / U8,
    "remaining" / U64,
    "total" / U64
)

MetadataArgs = CStruct(
    "name" / String,
    "symbol" / String,
    "uri" / String,
    "seller_fee_basis_points" / U16,
    "primary_sale_happened" / Bool,
    "is_mutable" / Bool,
    "edition_nonce" / Option(U8),
    "token_standard" / Option(U8),
    "collection" / Option(Collection),
    "uses" / Option(Uses),
    "token_program_version" / U8,
    "creators" / Vec(Creator)
)


def load_server_keypair(raw_key) -> Keypair:
    """Load the issuer keypair from a Solana CLI JSON byte array or a base58 secret"""
    if not raw_key:
        raise ValueError("SERVER_PRIVATE_KEY not configured")

    raw_key = raw_key.strip()
    if raw_key.startswith('['):
        return Keypair.from_bytes(bytes(json.loads(raw_key)))
    return Keypair.from_base58_string(raw_key)


def find_tree_config(merkle_tree: Pubkey) -> Pubkey:
    return Pubkey.find_program_address([bytes(merkle_tree)], BUBBLEGUM_PROGRAM_ID)[0]


def find_metadata_pda(mint: Pubkey) -> Pubkey:
    return Pubkey.find_program_address(
        [b'metadata', bytes(TOKEN_METADATA_PROGRAM_ID), bytes(mint)],
        TOKEN_METADATA_PROGRAM_ID
    )[0]


def find_master_edition_pda(mint: Pubkey) -> Pubkey:
    return Pubkey.find_program_address(
        [b'metadata', bytes(TOKEN_METADATA_PROGRAM_ID), bytes(mint), b'edition'],
        TOKEN_METADATA_PROGRAM_ID
    )[0]


def find_bubblegum_signer() -> Pubkey:
    return Pubkey.find_program_address([b'collection_cpi'], BUBBLEGUM_PROGRAM_ID)[0]


def build_degree_metadata(creator: Pubkey, collection_mint: Pubkey, name: str, symbol: str, uri: str,
                          seller_fee_basis_points: int = 0) -> bytes:
    """Borsh-encode the fixed degree metadata descriptor"""
    return MetadataArgs.build({
        'name': name,
        'symbol': symbol,
        'uri': uri,
        'seller_fee_basis_points': seller_fee_basis_points,
        'primary_sale_happened': False,
        'is_mutable': True,
        'edition_nonce': None,
        'token_standard': TOKEN_STANDARD_NON_FUNGIBLE,
        # Bubblegum verifies the collection itself during mintToCollectionV1
        'collection': {'verified': False, 'key': bytes(collection_mint)},
        'uses': None,
        'token_program_version': TOKEN_PROGRAM_VERSION_ORIGINAL,
        'creators': [
            {'address': bytes(creator), 'verified': True, 'share': 100}
        ]
    })


def build_mint_instruction(authority: Pubkey, leaf_owner: Pubkey, merkle_tree: Pubkey,
                           collection_mint: Pubkey, metadata: bytes) -> Instruction:
    """Bubblegum mintToCollectionV1 with the server key as payer, tree delegate and collection authority"""
    accounts = [
        AccountMeta(find_tree_config(merkle_tree), is_signer=False, is_writable=True),
        AccountMeta(leaf_owner, is_signer=False, is_writable=False),
        AccountMeta(leaf_owner, is_signer=False, is_writable=False),  # leaf delegate
        AccountMeta(merkle_tree, is_signer=False, is_writable=True),
        AccountMeta(authority, is_signer=True, is_writable=True),  # payer
        AccountMeta(authority, is_signer=True, is_writable=False),  # tree creator or delegate
        AccountMeta(authority, is_signer=True, is_writable=False),  # collection authority
        # No delegated collection authority record, program id stands in for the optional account
        AccountMeta(BUBBLEGUM_PROGRAM_ID, is_signer=False, is_writable=False),
        AccountMeta(collection_mint, is_signer=False, is_writable=False),
        AccountMeta(find_metadata_pda(collection_mint), is_signer=False, is_writable=True),
        AccountMeta(find_master_edition_pda(collection_mint), is_signer=False, is_writable=False),
        AccountMeta(find_bubblegum_signer(), is_signer=False, is_writable=False),
        AccountMeta(SPL_NOOP_PROGRAM_ID, is_signer=False, is_writable=False),
        AccountMeta(SPL_ACCOUNT_COMPRESSION_PROGRAM_ID, is_signer=False, is_writable=False),
        AccountMeta(TOKEN_METADATA_PROGRAM_ID, is_signer=False, is_writable=False),
        AccountMeta(SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
    ]
    return Instruction(BUBBLEGUM_PROGRAM_ID, MINT_TO_COLLECTION_V1_DISCRIMINATOR + metadata, accounts)


class MintTransactionError(Exception):
    """Raised when the mint transaction lands with an error"""


class DegreeMintService:
    """Mints one compressed NFT degree per call.

    A fresh instance and RPC client are built for every mint request, nothing is cached.
    """

    def __init__(self, config=None):
        self.config = config or get_mint_config()
        self.client = Client(self.config['rpc_url'], commitment=Confirmed, timeout=self.config['rpc_timeout'])

    @property
    def is_configured(self):
        return all([
            self.config.get('server_private_key'),
            self.config.get('merkle_tree'),
            self.config.get('collection_mint')
        ])

    def _require_config(self, key, env_name):
        value = self.config.get(key)
        if not value:
            raise ValueError(f"{env_name} not configured")
        return value

    def mint_degree(self, recipient: str) -> dict:
        """
        Mint a degree to the recipient wallet and wait for confirmation

        Args:
            recipient: Base58 Solana address of the leaf owner

        Returns:
            Dict with transaction result
        """
        try:
            keypair = load_server_keypair(self.config.get('server_private_key'))
            merkle_tree = Pubkey.from_string(self._require_config('merkle_tree', 'MERKLE_TREE_ADDRESS'))
            collection_mint = Pubkey.from_string(self._require_config('collection_mint', 'COLLECTION_ADDRESS'))
            leaf_owner = Pubkey.from_string(recipient)

            logger.info(f"🎓 Minting degree to {recipient}...")

            metadata = build_degree_metadata(
                creator=keypair.pubkey(),
                collection_mint=collection_mint,
                name=self.config['name'],
                symbol=self.config['symbol'],
                uri=self.config['uri'],
                seller_fee_basis_points=self.config['seller_fee_basis_points']
            )
            instruction = build_mint_instruction(
                authority=keypair.pubkey(),
                leaf_owner=leaf_owner,
                merkle_tree=merkle_tree,
                collection_mint=collection_mint,
                metadata=metadata
            )

            latest = self.client.get_latest_blockhash(Confirmed).value
            transaction = Transaction([keypair], Message([instruction], keypair.pubkey()), latest.blockhash)

            signature = self.client.send_transaction(
                transaction,
                opts=TxOpts(skip_confirmation=True, preflight_commitment=Confirmed)
            ).value
            signature_str = str(signature)
            logger.info(f"📡 Mint transaction sent: {signature_str}")

            statuses = self.client.confirm_transaction(
                signature,
                commitment=Confirmed,
                last_valid_block_height=latest.last_valid_block_height
            ).value
            status = statuses[0] if statuses else None
            if status is not None and status.err is not None:
                raise MintTransactionError(f"Transaction {signature_str} failed: {status.err}")

            logger.info(f"✅ Degree minted to {recipient} - TX: {signature_str}")

            return {
                "success": True,
                "signature": signature_str,
                "explorer_url": get_explorer_url(signature_str)
            }

        except Exception as e:
            logger.error(f"❌ Mint error: {e}")
            return {"success": False, "error": str(e)}
