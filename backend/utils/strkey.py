"""
Stellar strkey encoding/decoding.

Format: base32( version_byte + 32-byte payload + crc16_xmodem (little-endian) )
- G...  - account public key   (version 6 << 3)
- C...  - contract id          (version 2 << 3)

Both encode to exactly 56 characters, no padding.
"""
import base64
import re
import struct

from .errors import ValidationError

VERSION_BYTES = {
    'account': 6 << 3,
    'contract': 2 << 3,
}

STRKEY_PATTERN = re.compile(r'^[A-Z2-7]{56}$')


def crc16_xmodem(data: bytes) -> int:
    """CRC16-XModem (poly 0x1021, init 0)"""
    crc = 0
    for byte in data:
        crc ^= byte << 8
        for _ in range(8):
            if crc & 0x8000:
                crc = ((crc << 1) ^ 0x1021) & 0xFFFF
            else:
                crc = (crc << 1) & 0xFFFF
    return crc


def encode(kind: str, payload: bytes) -> str:
    """
    Encode a 32-byte payload as a strkey.

    Args:
        kind: 'account' or 'contract'
        payload: Raw 32 bytes

    Returns:
        56-char strkey
    """
    if len(payload) != 32:
        raise ValidationError("strkey payload must be 32 bytes")
    body = bytes([VERSION_BYTES[kind]]) + payload
    checksum = struct.pack('<H', crc16_xmodem(body))
    return base64.b32encode(body + checksum).decode('ascii')


def decode(kind: str, value: str) -> bytes:
    """
    Decode and verify a strkey, returning the 32-byte payload.

    Raises:
        ValidationError: wrong length, alphabet, version byte or checksum
    """
    if not isinstance(value, str) or not STRKEY_PATTERN.match(value):
        raise ValidationError(f"Malformed {kind} address")

    raw = base64.b32decode(value)
    body, checksum = raw[:-2], raw[-2:]

    if body[0] != VERSION_BYTES[kind]:
        raise ValidationError(f"Malformed {kind} address")
    if struct.unpack('<H', checksum)[0] != crc16_xmodem(body):
        raise ValidationError(f"Malformed {kind} address")

    return body[1:]


def is_valid(kind: str, value: str) -> bool:
    try:
        decode(kind, value)
        return True
    except ValidationError:
        return False
