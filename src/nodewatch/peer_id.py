"""libp2p peer identifier decoding.

A peer ID on the wire is a multihash: `<varint code><varint length><digest>`.
Its canonical text form is the base58btc encoding of those raw bytes, e.g.
`12D3KooW...` for identity-hashed ed25519 keys or `Qm...` for sha2-256.
"""

import base58


class InvalidPeerIDError(ValueError):
    """Raised when bytes are not a well-formed multihash peer ID."""


_MAX_VARINT_LEN = 9


def _read_uvarint(buf: bytes, offset: int) -> tuple[int, int]:
    """Decode an unsigned varint at `offset`; return (value, next_offset)."""
    value = 0
    shift = 0
    for i in range(_MAX_VARINT_LEN):
        pos = offset + i
        if pos >= len(buf):
            raise InvalidPeerIDError("multihash too short: truncated varint")
        byte = buf[pos]
        value |= (byte & 0x7F) << shift
        if byte < 0x80:
            # Minimal encoding only, as in multiformats varint.
            if byte == 0 and i > 0:
                raise InvalidPeerIDError("multihash varint not minimally encoded")
            return value, pos + 1
        shift += 7
    raise InvalidPeerIDError("multihash varint too long")


def peer_id_from_bytes(raw: bytes) -> str:
    """Validate `raw` as a multihash and return its base58btc peer ID string.

    Raises:
        InvalidPeerIDError: empty input, truncated varints, or a digest whose
            size doesn't match the declared length.
    """
    if not raw:
        raise InvalidPeerIDError("empty peer ID")

    _, offset = _read_uvarint(raw, 0)
    length, offset = _read_uvarint(raw, offset)
    digest = raw[offset:]
    if len(digest) != length:
        raise InvalidPeerIDError(
            f"multihash length mismatch: declared {length}, got {len(digest)} bytes"
        )
    return base58.b58encode(bytes(raw)).decode("ascii")


__all__ = ["peer_id_from_bytes", "InvalidPeerIDError"]
