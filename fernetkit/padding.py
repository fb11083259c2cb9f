"""
Block Padding
PKCS#7 padding to the AES block size.

Every message gets between 1 and 16 bytes of padding, each byte holding the
pad length, so an already aligned message still gains a full block and
unpadding is never ambiguous.
"""

from cryptography.hazmat.primitives import padding

from fernetkit.config import BLOCK_SIZE


def pkcs7_pad(data: bytes) -> bytes:
    """
    Pad data to the next multiple of the block size.

    Args:
        data: The raw bytes to pad.

    Returns:
        Padded bytes, always 1-16 bytes longer than the input.
    """
    padder = padding.PKCS7(BLOCK_SIZE * 8).padder()
    return padder.update(data) + padder.finalize()


def pkcs7_unpad(padded: bytes) -> bytes:
    """
    Strip PKCS#7 padding.

    Raises:
        ValueError: If the trailing bytes are not valid padding.
    """
    unpadder = padding.PKCS7(BLOCK_SIZE * 8).unpadder()
    return unpadder.update(padded) + unpadder.finalize()
