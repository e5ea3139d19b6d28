from typing import Optional
import logging

import requests

from config import HTTP_TIMEOUT
from errors import LogoUnavailable

logger = logging.getLogger(__name__)


def fetch_logo(uri: str, session=None, timeout: float = HTTP_TIMEOUT) -> str:
    """Fetch the JSON document at `uri` and return its `image` field.

    Makes exactly one request. Raises `LogoUnavailable` with a reason telling
    apart a missing uri, a failed request, a non-JSON body and a document
    without an image.
    """
    if not uri:
        raise LogoUnavailable(uri, LogoUnavailable.NO_URI)

    http = session or requests
    try:
        resp = http.get(uri, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise LogoUnavailable(uri, LogoUnavailable.FETCH_FAILED, repr(e)) from e

    try:
        doc = resp.json()
    except ValueError as e:
        raise LogoUnavailable(uri, LogoUnavailable.NOT_JSON, repr(e)) from e

    image = doc.get("image") if isinstance(doc, dict) else None
    if not isinstance(image, str) or not image:
        raise LogoUnavailable(uri, LogoUnavailable.NO_IMAGE)
    return image


def resolve_logo(uri: str, session=None, timeout: float = HTTP_TIMEOUT) -> Optional[str]:
    """Best-effort logo lookup: the `image` of the document at `uri`, or None.

    Never raises; the logo is optional and must not fail the metadata lookup.
    """
    try:
        return fetch_logo(uri, session=session, timeout=timeout)
    except LogoUnavailable as e:
        logger.debug("metadata.resolve_logo %s", e)
        return None


def get_token_metadata(mint: str, rpc_url: Optional[str] = None, use_token_list: Optional[bool] = None, resolve_logos: bool = True):
    """Resolve display metadata for `mint` using the default source chain.

    The on-chain metadata account is tried first, then the token-list registry
    when enabled. Returns a `sources.TokenMetadata`; raises `AccountNotFound`
    when no source knows the mint and `MalformedAccountData` when the on-chain
    account cannot be decoded.
    """
    from sources import default_sources, resolve_token_metadata

    sources = default_sources(rpc_url=rpc_url, use_token_list=use_token_list, resolve_logos=resolve_logos)
    return resolve_token_metadata(mint, sources)
