from __future__ import annotations

import json
import os
import socket
from typing import Any

import pytest
from solders.keypair import Keypair

os.environ.setdefault("SECRET_KEY", "test-secret")


class NetworkBlockedError(RuntimeError):
    pass


def _blocked(*_args: Any, **_kwargs: Any) -> Any:
    raise NetworkBlockedError("Network access is disabled during tests.")


@pytest.fixture(autouse=True)
def _disable_network(monkeypatch: pytest.MonkeyPatch) -> None:
    """Prevent accidental outbound RPC calls in unit tests."""
    monkeypatch.setattr(socket, "create_connection", _blocked)
    monkeypatch.setattr(socket, "getaddrinfo", _blocked)


@pytest.fixture
def app():
    from main import create_app

    return create_app({"TESTING": True})


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def server_keypair() -> Keypair:
    return Keypair()


@pytest.fixture
def wallet() -> str:
    return str(Keypair().pubkey())


@pytest.fixture
def mint_env(monkeypatch: pytest.MonkeyPatch, server_keypair: Keypair) -> dict:
    """Issuer credentials and tree/collection ids as the server reads them."""
    env = {
        "SOLANA_RPC_URL": "http://rpc.invalid",
        "SERVER_PRIVATE_KEY": json.dumps(list(bytes(server_keypair))),
        "MERKLE_TREE_ADDRESS": str(Keypair().pubkey()),
        "COLLECTION_ADDRESS": str(Keypair().pubkey()),
    }
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    return env


class StubMintService:
    """Stands in for DegreeMintService at the SDK boundary."""

    calls: list[str] = []
    result: dict = {"success": True, "signature": "5igStub", "explorer_url": "https://explorer.solana.com/tx/5igStub"}

    def __init__(self, config=None) -> None:
        self.config = config

    def mint_degree(self, recipient: str) -> dict:
        StubMintService.calls.append(recipient)
        return dict(StubMintService.result)


@pytest.fixture
def stub_mint(monkeypatch: pytest.MonkeyPatch):
    import mint.mint_gate

    StubMintService.calls = []
    StubMintService.result = {
        "success": True,
        "signature": "5igStub",
        "explorer_url": "https://explorer.solana.com/tx/5igStub",
    }
    monkeypatch.setattr(mint.mint_gate, "DegreeMintService", StubMintService)
    return StubMintService
