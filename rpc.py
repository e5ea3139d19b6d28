# rpc.py
from typing import Optional, Any
from base64 import b64decode
import logging

import requests
from solana.rpc.api import Client
from solders.pubkey import Pubkey

from config import DEFAULT_RPC, HTTP_TIMEOUT
from errors import RpcError

logger = logging.getLogger(__name__)

METAPLEX_PROGRAM_ID = "metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s"


def get_client(rpc_url: str = DEFAULT_RPC) -> Client:
    logger.debug("rpc.get_client creating Client for %s", rpc_url)
    return Client(rpc_url)


def find_metadata_pda(mint: str) -> Pubkey:
    """Derive the metadata account address for `mint`.

    Seeds are `b"metadata"`, the metadata program id and the mint. Raises
    ValueError when `mint` is not a valid base58 public key.
    """
    try:
        mint_pk = Pubkey.from_string(str(mint))
    except Exception as e:
        raise ValueError(f"Invalid mint address {mint!r}: {e}") from e
    program_pk = Pubkey.from_string(METAPLEX_PROGRAM_ID)
    pda, _bump = Pubkey.find_program_address([b"metadata", bytes(program_pk), bytes(mint_pk)], program_pk)
    return pda


def _account_bytes(data: Any) -> bytes:
    """Normalize the account `data` shapes RPC layers return to raw bytes.

    An existing account without data yields b"", never None.
    """
    if data is None:
        return b""
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    # JSON-RPC returns data as [base64, encoding]
    if isinstance(data, (list, tuple)):
        if not data:
            return b""
        data = data[0]
    if isinstance(data, str):
        return b64decode(data)
    return bytes(data)


class AccountFetcher:
    """Fetches raw account contents from some transport.

    `get_account_data` returns the account bytes, or None when the account
    does not exist. One request per call; no retries.
    """

    def get_account_data(self, address: Pubkey) -> Optional[bytes]:
        raise NotImplementedError


class ClientAccountFetcher(AccountFetcher):
    """AccountFetcher backed by a solana-py `Client`."""

    def __init__(self, client: Client):
        self.client = client

    def get_account_data(self, address: Pubkey) -> Optional[bytes]:
        resp = self.client.get_account_info(address)
        val = resp.value
        if not val:
            logger.debug("rpc.get_account_data no account at %s", address)
            return None
        raw = _account_bytes(getattr(val, "data", None))
        logger.debug("rpc.get_account_data %s len=%s", address, len(raw))
        return raw


class JsonRpcAccountFetcher(AccountFetcher):
    """AccountFetcher speaking raw JSON-RPC `getAccountInfo` over HTTP."""

    def __init__(self, rpc_url: str = DEFAULT_RPC, session=None, timeout: float = HTTP_TIMEOUT):
        self.rpc_url = rpc_url
        self.session = session or requests.Session()
        self.timeout = timeout

    def get_account_data(self, address: Pubkey) -> Optional[bytes]:
        payload = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": "getAccountInfo",
            "params": [str(address), {"encoding": "base64"}],
        }
        resp = self.session.post(self.rpc_url, json=payload, timeout=self.timeout)
        resp.raise_for_status()
        body = resp.json()
        if body.get("error"):
            raise RpcError("getAccountInfo", body["error"])

        value = (body.get("result") or {}).get("value")
        if not value:
            logger.debug("rpc.get_account_data no account at %s", address)
            return None
        return _account_bytes(value.get("data"))
