from __future__ import annotations

import json
from types import SimpleNamespace

import pytest
from solana.rpc.api import Client
from solana.rpc.core import RPCException
from solders.hash import Hash
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from config import get_mint_config
from mint.blockchain import (
    BUBBLEGUM_PROGRAM_ID,
    MINT_TO_COLLECTION_V1_DISCRIMINATOR,
    DegreeMintService,
    build_degree_metadata,
    build_mint_instruction,
    find_tree_config,
    load_server_keypair,
)


class FakeClient:
    """Stands in for solana.rpc.api.Client."""

    def __init__(self, fail_on: str | None = None, status_err=None) -> None:
        self.fail_on = fail_on
        self.status_err = status_err
        self.sent = []
        self.confirmed = []

    def get_latest_blockhash(self, commitment=None):
        return SimpleNamespace(value=SimpleNamespace(blockhash=Hash.default(), last_valid_block_height=1234))

    def send_transaction(self, txn, opts=None):
        if self.fail_on == "send":
            raise RPCException("Transaction simulation failed: insufficient funds")
        self.sent.append((txn, opts))
        return SimpleNamespace(value=txn.signatures[0])

    def confirm_transaction(self, tx_sig, commitment=None, sleep_seconds=0.5, last_valid_block_height=None):
        self.confirmed.append((tx_sig, last_valid_block_height))
        return SimpleNamespace(value=[SimpleNamespace(err=self.status_err, confirmation_status="confirmed")])


def test_load_server_keypair_from_json_array(server_keypair) -> None:
    loaded = load_server_keypair(json.dumps(list(bytes(server_keypair))))
    assert loaded.pubkey() == server_keypair.pubkey()


def test_load_server_keypair_from_base58(server_keypair) -> None:
    loaded = load_server_keypair(str(server_keypair))
    assert loaded.pubkey() == server_keypair.pubkey()


def test_load_server_keypair_requires_value() -> None:
    with pytest.raises(ValueError, match="SERVER_PRIVATE_KEY not configured"):
        load_server_keypair(None)


def test_degree_metadata_layout(server_keypair) -> None:
    collection = Keypair().pubkey()
    data = build_degree_metadata(server_keypair.pubkey(), collection, "Degree", "", "https://x/y.json")

    assert data[:4] == (6).to_bytes(4, "little")
    assert data[4:10] == b"Degree"
    # creators vec: one entry, verified, 100% share
    assert data[-38:-34] == (1).to_bytes(4, "little")
    assert data[-34:-2] == bytes(server_keypair.pubkey())
    assert data[-2:] == bytes([1, 100])
    assert bytes(collection) in data


def test_mint_instruction_accounts(server_keypair) -> None:
    authority = server_keypair.pubkey()
    leaf_owner, tree, collection = (Keypair().pubkey() for _ in range(3))

    ix = build_mint_instruction(authority, leaf_owner, tree, collection, b"meta")

    assert ix.program_id == BUBBLEGUM_PROGRAM_ID
    assert bytes(ix.data) == MINT_TO_COLLECTION_V1_DISCRIMINATOR + b"meta"
    assert len(ix.accounts) == 16

    tree_config, owner, delegate, merkle_tree, payer = ix.accounts[:5]
    assert tree_config.pubkey == find_tree_config(tree) and tree_config.is_writable
    assert owner.pubkey == delegate.pubkey == leaf_owner
    assert merkle_tree.pubkey == tree and merkle_tree.is_writable
    assert payer.pubkey == authority and payer.is_signer and payer.is_writable
    assert ix.accounts[8].pubkey == collection
    assert [a.pubkey for a in ix.accounts if a.is_signer] == [authority] * 3


def test_tree_config_is_a_bubblegum_pda() -> None:
    tree = Keypair().pubkey()
    expected, _bump = Pubkey.find_program_address([bytes(tree)], BUBBLEGUM_PROGRAM_ID)
    assert find_tree_config(tree) == expected


def test_service_builds_solana_client(mint_env) -> None:
    assert isinstance(DegreeMintService().client, Client)


def test_mint_degree_signs_and_confirms(mint_env, server_keypair, wallet) -> None:
    service = DegreeMintService()
    service.client = FakeClient()

    result = service.mint_degree(wallet)

    assert result["success"] is True
    assert result["explorer_url"].startswith("https://explorer.solana.com/tx/")
    tx, opts = service.client.sent[0]
    assert tx.message.account_keys[0] == server_keypair.pubkey()
    assert opts.skip_confirmation is True
    assert result["signature"] == str(tx.signatures[0])
    assert service.client.confirmed == [(tx.signatures[0], 1234)]


def test_mint_degree_reports_rpc_errors(mint_env, wallet) -> None:
    service = DegreeMintService()
    service.client = FakeClient(fail_on="send")

    result = service.mint_degree(wallet)

    assert result["success"] is False
    assert "insufficient funds" in result["error"]


def test_mint_degree_reports_failed_transaction(mint_env, wallet) -> None:
    service = DegreeMintService()
    service.client = FakeClient(status_err="InstructionError(0, Custom(6001))")

    result = service.mint_degree(wallet)

    assert result["success"] is False
    assert "InstructionError" in result["error"]


def test_mint_degree_rejects_invalid_wallet(mint_env) -> None:
    service = DegreeMintService()
    service.client = FakeClient()

    result = service.mint_degree("not-a-wallet")

    assert result["success"] is False
    assert service.client.sent == []


def test_is_configured_reads_env(mint_env, monkeypatch) -> None:
    assert DegreeMintService().is_configured
    monkeypatch.delenv("MERKLE_TREE_ADDRESS")
    assert not DegreeMintService(get_mint_config()).is_configured


def test_degree_name_defaults_and_env_override(monkeypatch) -> None:
    monkeypatch.delenv("DEGREE_NAME", raising=False)
    assert get_mint_config()["name"] == "Sol Edu Badges Degree"

    monkeypatch.setenv("DEGREE_NAME", "SolPol Degree")
    assert get_mint_config()["name"] == "SolPol Degree"
