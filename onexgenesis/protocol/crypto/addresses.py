import bech32 # type: ignore
from .hash import sha256
from typing import Tuple, Optional

# Cosmos SDK account addresses are 20-byte hashes
ADDRESS_LENGTH = 20


def address_from_bytes(h20: bytes, prefix: str) -> str:
    """Encodes a 20-byte account hash as a Bech32 address."""
    five_bit_r = bech32.convertbits(h20, 8, 5)
    if five_bit_r is None:
        raise ValueError("Error converting to bech32 words")

    return bech32.bech32_encode(prefix, five_bit_r)


def module_address(module_name: str, prefix: str) -> str:
    """
    Address of a protocol module account.

    The SDK derives these as sha256(module_name)[:20], so the same module
    has the same address bytes on every chain and only the prefix differs.
    """
    return address_from_bytes(sha256(module_name.encode())[:ADDRESS_LENGTH], prefix)


def decode_address(addr: str) -> Tuple[str, bytes]:
    """Decodes Bech32 address to (prefix, h20_bytes)."""
    hrp, data = bech32.bech32_decode(addr)
    if hrp is None or data is None:
        raise ValueError(f"Invalid bech32 address: {addr!r}")

    decoded = bech32.convertbits(data, 5, 8, False)
    if decoded is None:
        raise ValueError("Error converting from bech32 words")

    return hrp, bytes(decoded)


def is_valid_address(addr: str, expected_prefix: Optional[str] = None) -> bool:
    try:
        hrp, _ = decode_address(addr)
        if expected_prefix and hrp != expected_prefix:
            return False
        return True
    except ValueError:
        return False


def reprefix_address(addr: str, prefix: str) -> str:
    """Re-encodes an address under a different human readable prefix."""
    _, h20 = decode_address(addr)
    return address_from_bytes(h20, prefix)
