"""Exceptions raised while looking up token metadata."""
from typing import Optional


class MetadataError(Exception):
    """Base class for metadata lookup failures."""


class AccountNotFound(MetadataError):
    """The derived metadata account (or every configured source) has no record for the mint."""

    def __init__(self, address: str, message: Optional[str] = None):
        self.address = str(address)
        super().__init__(message or f"No metadata account found: {self.address}")


class MalformedAccountData(MetadataError):
    """Account bytes do not follow the metadata account layout."""


class TokenNotListed(MetadataError):
    """A registry-style source has no entry for the mint."""

    def __init__(self, mint: str, source: str):
        self.mint = mint
        self.source = source
        super().__init__(f"{mint} not listed in {source}")


class RpcError(MetadataError):
    """A JSON-RPC endpoint answered with an `error` object."""

    def __init__(self, method: str, error):
        self.method = method
        self.error = error
        super().__init__(f"{method} failed: {error}")


class LogoUnavailable(MetadataError):
    """The logo could not be resolved from the metadata URI.

    `reason` is one of `no_uri`, `fetch_failed`, `not_json`, `no_image`.
    """

    NO_URI = "no_uri"
    FETCH_FAILED = "fetch_failed"
    NOT_JSON = "not_json"
    NO_IMAGE = "no_image"

    def __init__(self, uri: str, reason: str, detail: Optional[str] = None):
        self.uri = uri
        self.reason = reason
        msg = f"logo unavailable for {uri!r}: {reason}"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)


class UpstreamFormatError(MetadataError):
    """An upstream document (e.g. the token list) is not in the expected shape."""
