"""Decoder for the Metaplex token-metadata account.

Only the display fields are decoded: name, symbol and uri. The first 65 bytes
(key, update authority, mint) are skipped, and everything after the uri slot
(seller fee, creators, collection, ...) is ignored.

Each field is a little-endian u32 length followed by UTF-8 bytes, stored in a
fixed slot that always reserves the maximum width:

    offset  65  name    4 + 32 bytes
    offset 101  symbol  4 + 10 bytes
    offset 115  uri     4 + 200 bytes   (slot ends at 319)

The length prefix is authoritative; a field never has to fill its slot.
"""
from __future__ import annotations
import struct
from dataclasses import dataclass
from typing import Optional

from errors import MalformedAccountData

# Key::MetadataV1 discriminator stored in byte 0
METADATA_V1_KEY = 4

MAX_NAME_LENGTH = 32
MAX_SYMBOL_LENGTH = 10
MAX_URI_LENGTH = 200

_LEN_PREFIX = 4
_OFF_NAME = 65
_OFF_SYMBOL = _OFF_NAME + _LEN_PREFIX + MAX_NAME_LENGTH      # 101
_OFF_URI = _OFF_SYMBOL + _LEN_PREFIX + MAX_SYMBOL_LENGTH     # 115
_END = _OFF_URI + _LEN_PREFIX + MAX_URI_LENGTH               # 319

WINDOW_START = _OFF_NAME
WINDOW_END = _END
WINDOW_SIZE = WINDOW_END - WINDOW_START                      # 254

# (field, slot offset relative to the window, max length)
_FIELDS = (
    ("name", _OFF_NAME - WINDOW_START, MAX_NAME_LENGTH),
    ("symbol", _OFF_SYMBOL - WINDOW_START, MAX_SYMBOL_LENGTH),
    ("uri", _OFF_URI - WINDOW_START, MAX_URI_LENGTH),
)


@dataclass(frozen=True)
class MetadataRecord:
    name: str
    symbol: str
    uri: str
    logo: Optional[str] = None  # only ever set from the uri document, never by decode()


def _read_string(window: bytes, field: str, offset: int, max_len: int) -> str:
    (length,) = struct.unpack_from("<I", window, offset)
    if length > max_len:
        raise MalformedAccountData(f"{field} length {length} exceeds maximum {max_len}")
    start = offset + _LEN_PREFIX
    raw = window[start:start + length]
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedAccountData(f"{field} is not valid UTF-8: {e}") from e
    # Names and symbols are commonly padded to full width with NULs
    return text.rstrip("\x00")


def decode(raw: bytes) -> MetadataRecord:
    """Decode name, symbol and uri from raw metadata account bytes.

    Raises `MalformedAccountData` when the account is shorter than the uri
    slot end (319 bytes), a length prefix exceeds its field maximum, or a field
    is not valid UTF-8. The returned record never carries a logo.

    Trailing NULs inside a field are stripped, so strings written by
    `encode_metadata_account` round-trip exactly unless they themselves end
    in "\x00".
    """
    if raw is None:
        raise MalformedAccountData("no account data")
    window = bytes(raw[WINDOW_START:WINDOW_END])
    if len(window) < WINDOW_SIZE:
        raise MalformedAccountData(
            f"account data too short: {len(raw)} bytes, need at least {WINDOW_END}"
        )

    values = {field: _read_string(window, field, off, max_len) for field, off, max_len in _FIELDS}
    return MetadataRecord(name=values["name"], symbol=values["symbol"], uri=values["uri"])


def encode_metadata_account(
    name: str,
    symbol: str,
    uri: str,
    key: int = METADATA_V1_KEY,
    update_authority: Optional[bytes] = None,
    mint: Optional[bytes] = None,
) -> bytes:
    """Construct account bytes in the fixed-slot layout read by `decode`.

    Unused slot space is zero filled. Primarily intended for unit tests and
    fixtures; raises ValueError when a field is longer than its slot.
    """
    b = bytearray(WINDOW_END)
    b[0] = key
    b[1:33] = (update_authority or bytes(32))[:32].ljust(32, b"\x00")
    b[33:65] = (mint or bytes(32))[:32].ljust(32, b"\x00")
    for (field, off, max_len), value in zip(_FIELDS, (name, symbol, uri)):
        data = value.encode("utf-8")
        if len(data) > max_len:
            raise ValueError(f"{field} is {len(data)} bytes, maximum is {max_len}")
        pos = WINDOW_START + off
        struct.pack_into("<I", b, pos, len(data))
        b[pos + _LEN_PREFIX:pos + _LEN_PREFIX + len(data)] = data
    return bytes(b)


if __name__ == '__main__':
    # Quick smoke test
    b = encode_metadata_account("Cool", "CLX", "http://x")
    print(decode(b))
