"""Metadata sources and the order they are consulted in.

Each source answers `lookup(mint) -> TokenMetadata` or raises a not-found
error (`AccountNotFound`, `TokenNotListed`) so the next source can be tried.
Any other error aborts the lookup.
"""
from dataclasses import dataclass
from typing import Optional, List, Dict, Any
import logging

import requests

from config import SOLANA_RPC_URL, DAS_RPC_URL, TOKEN_LIST_URL, USE_TOKEN_LIST, HTTP_TIMEOUT
from decoder import decode, METADATA_V1_KEY
from errors import AccountNotFound, MalformedAccountData, TokenNotListed, RpcError, UpstreamFormatError
from metadata import resolve_logo
from rpc import AccountFetcher, ClientAccountFetcher, find_metadata_pda, get_client

logger = logging.getLogger(__name__)

SOURCE_ONCHAIN = "onchain"
SOURCE_DAS = "das"
SOURCE_TOKEN_LIST = "token_list"

# ENV.MainnetBeta in the solana-labs token list
MAINNET_BETA_CHAIN_ID = 101


@dataclass(frozen=True)
class TokenMetadata:
    mint: str
    name: str
    symbol: str
    source: str                 # which strategy produced the record
    uri: Optional[str] = None   # absent for registry entries
    logo: Optional[str] = None


class OnChainSource:
    """Reads the Metaplex metadata account derived from the mint."""

    name = SOURCE_ONCHAIN

    def __init__(self, fetcher: AccountFetcher, resolve_logos: bool = True, session=None):
        self.fetcher = fetcher
        self.resolve_logos = resolve_logos
        self.session = session

    def lookup(self, mint: str) -> TokenMetadata:
        pda = find_metadata_pda(mint)
        raw = self.fetcher.get_account_data(pda)
        if raw is None:
            raise AccountNotFound(str(pda))

        # empty or short data is left to decode()
        if raw and raw[0] != METADATA_V1_KEY:
            raise MalformedAccountData(f"Unexpected metadata account key {raw[0]} at {pda}")

        record = decode(raw)
        logger.debug("sources.onchain mint=%s name=%r symbol=%r uri=%r", mint, record.name, record.symbol, record.uri)

        logo = None
        if self.resolve_logos:
            logo = resolve_logo(record.uri, session=self.session)
        return TokenMetadata(
            mint=mint,
            name=record.name,
            symbol=record.symbol,
            uri=record.uri,
            logo=logo,
            source=self.name,
        )


class TokenListSource:
    """Looks the mint up in a solana-labs style token list.

    The list is downloaded on every lookup.
    """

    name = SOURCE_TOKEN_LIST

    def __init__(self, url: str = TOKEN_LIST_URL, chain_id: int = MAINNET_BETA_CHAIN_ID, session=None, timeout: float = HTTP_TIMEOUT):
        self.url = url
        self.chain_id = chain_id
        self.session = session or requests.Session()
        self.timeout = timeout

    def _fetch_tokens(self) -> List[Dict[str, Any]]:
        resp = self.session.get(self.url, timeout=self.timeout)
        resp.raise_for_status()
        obj = resp.json()
        # solana.tokenlist.json => {"tokens": [...]}, mirrors => list[dict]
        if isinstance(obj, dict):
            obj = obj.get("tokens")
        if not isinstance(obj, list):
            raise UpstreamFormatError(f"Unexpected token list format from {self.url}: {type(obj)}")
        return [t for t in obj if isinstance(t, dict)]

    def token_map(self) -> Dict[str, Dict[str, Any]]:
        tokens = self._fetch_tokens()
        out: Dict[str, Dict[str, Any]] = {}
        for t in tokens:
            if self.chain_id is not None and t.get("chainId") not in (None, self.chain_id):
                continue
            address = t.get("address")
            if address:
                out[address] = t
        logger.debug("sources.token_list loaded %d tokens from %s", len(out), self.url)
        return out

    def lookup(self, mint: str) -> TokenMetadata:
        token = self.token_map().get(str(mint))
        if token is None:
            raise TokenNotListed(mint, self.name)
        return TokenMetadata(
            mint=mint,
            name=token.get("name") or "",
            symbol=token.get("symbol") or "",
            logo=token.get("logoURI") or None,
            source=self.name,
        )


class DasAssetSource:
    """Reads asset metadata through the DAS `getAsset` JSON-RPC method."""

    name = SOURCE_DAS

    def __init__(self, rpc_url: str, session=None, timeout: float = HTTP_TIMEOUT):
        self.rpc_url = rpc_url
        self.session = session or requests.Session()
        self.timeout = timeout

    def lookup(self, mint: str) -> TokenMetadata:
        payload = {
            "jsonrpc": "2.0",
            "id": "token-metadata",
            "method": "getAsset",
            "params": {"id": str(mint)},
        }
        resp = self.session.post(self.rpc_url, json=payload, timeout=self.timeout)
        resp.raise_for_status()
        body = resp.json()

        err = body.get("error")
        if err:
            message = err.get("message", "") if isinstance(err, dict) else str(err)
            if "not found" in message.lower():
                raise TokenNotListed(mint, self.name)
            raise RpcError("getAsset", err)

        asset = body.get("result")
        if not asset:
            raise TokenNotListed(mint, self.name)

        content = asset.get("content") or {}
        meta = content.get("metadata") or {}
        links = content.get("links") or {}
        return TokenMetadata(
            mint=mint,
            name=meta.get("name") or "",
            symbol=meta.get("symbol") or "",
            uri=content.get("json_uri") or None,
            logo=links.get("image") or None,
            source=self.name,
        )


def resolve_token_metadata(mint: str, sources: list) -> TokenMetadata:
    """Try each source in order and return the first record found.

    Not-found errors fall through to the next source; anything else (including
    `MalformedAccountData`) propagates. Raises `AccountNotFound` when no source
    knows the mint.
    """
    tried = []
    for source in sources:
        label = getattr(source, "name", type(source).__name__)
        try:
            res = source.lookup(mint)
            logger.info("Resolved %s via %s: %s (%s)", mint, label, res.name, res.symbol)
            return res
        except (AccountNotFound, TokenNotListed) as e:
            logger.info("No metadata for %s in %s: %s", mint, label, e)
            tried.append(label)

    raise AccountNotFound(mint, f"No metadata found for {mint} (tried: {', '.join(tried) or 'no sources'})")


def default_sources(rpc_url: Optional[str] = None, use_token_list: Optional[bool] = None, resolve_logos: bool = True) -> list:
    """On-chain record first, then DAS when configured, then the token list."""
    sources = [OnChainSource(ClientAccountFetcher(get_client(rpc_url or SOLANA_RPC_URL)), resolve_logos=resolve_logos)]
    if DAS_RPC_URL:
        sources.append(DasAssetSource(DAS_RPC_URL))
    if use_token_list is None:
        use_token_list = USE_TOKEN_LIST
    if use_token_list:
        sources.append(TokenListSource())
    return sources
