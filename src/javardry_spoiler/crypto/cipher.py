"""Scenario file decryption.

The scenario editor stores its data as DES-ECB ciphertext with PKCS#7
padding, keyed by the first eight bytes of the MD5 digest of a fixed
passphrase. This is a weak legacy scheme reproduced exactly as the editor
writes it.
"""

from __future__ import annotations

import hashlib

from Crypto.Cipher import DES
from Crypto.Util.Padding import unpad

from javardry_spoiler.core.constants import BLOCK_SIZE, PASSPHRASE
from javardry_spoiler.core.exceptions import BadLengthError, BadPaddingError, NotUtf8Error
from javardry_spoiler.core.logging import get_logger


logger = get_logger(__name__)


def make_key(passphrase: bytes = PASSPHRASE) -> bytes:
    """Derive the DES key from a passphrase.

    Args:
        passphrase: Passphrase bytes.

    Returns:
        The first eight bytes of the passphrase's MD5 digest.
    """
    return hashlib.md5(passphrase).digest()[:BLOCK_SIZE]


_KEY = make_key()


def decrypt(ciphertext: bytes) -> str:
    """Decrypt a scenario file into its plaintext.

    Args:
        ciphertext: The complete raw file contents.

    Returns:
        The decrypted UTF-8 text.

    Raises:
        BadLengthError: If the ciphertext is empty or not a multiple of 8 bytes.
        BadPaddingError: If the PKCS#7 padding is malformed.
        NotUtf8Error: If the unpadded bytes are not valid UTF-8.
    """
    size = len(ciphertext)
    if size == 0 or size % BLOCK_SIZE != 0:
        raise BadLengthError(
            f"ciphertext length must be a positive multiple of {BLOCK_SIZE}",
            size=size,
        )

    padded = DES.new(_KEY, DES.MODE_ECB).decrypt(ciphertext)

    try:
        data = unpad(padded, BLOCK_SIZE, style="pkcs7")
    except ValueError as exc:
        raise BadPaddingError(f"invalid padding: {exc}", size=size) from exc

    try:
        plaintext = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise NotUtf8Error(
            "decrypted data is not valid UTF-8",
            size=size,
            details={"position": exc.start},
        ) from exc

    logger.debug("Decrypted scenario data", ciphertext_size=size, plaintext_size=len(data))
    return plaintext


__all__ = [
    "decrypt",
    "make_key",
]
