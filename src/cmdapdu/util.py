"""Utility functions"""

from binascii import hexlify


def hex_str(data: bytes, sep: str = "") -> str:
    """Converts bytes to upper case hexadecimal representation"""
    s = hexlify(bytes(data)).decode().upper()
    if sep:
        return sep.join(s[i:i + 2] for i in range(0, len(s), 2))
    return s


def to_bytes(value) -> bytes:
    """Returns an owned copy of a byte sequence given as bytes-like object,
    list of integers, hex string or None.
    """
    if value is None:
        return b''
    if isinstance(value, int):
        raise TypeError("Expected a byte sequence, not an integer")
    if isinstance(value, str):
        try:
            return bytes.fromhex("".join(value.split()))
        except ValueError:
            raise ValueError("Invalid hex string")
    # bytes(b) may return the very same object, build a new one instead
    return bytes(bytearray(value))


def int_to_bytes_big_endian(x: int, n_bytes: int) -> bytearray:
    """Converts integer to bytes in big endian mode"""
    if x < 0 or x >= 256 ** n_bytes:
        raise ValueError("Conversion overflow")
    res = bytearray(n_bytes)
    shift = 0
    for i in range(n_bytes - 1, -1, -1):
        res[i] = (x >> shift) & 0xff
        shift += 8
    return res


def bytes_to_int_big_endian(data: bytes) -> int:
    """Converts bytes to integer in big endian mode"""
    res = 0
    for x in data:
        res = (res << 8) | x
    return res
