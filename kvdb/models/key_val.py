"""
KeyVal dataclass - the unit of storage.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class KeyVal:
    """
    A key/value pair as written by put() and returned by get().

    Attributes:
        key: Arbitrary bytes, unique within a store.
        val: Arbitrary bytes associated with the key.
    """

    key: bytes
    val: bytes

    def __bytes__(self) -> bytes:
        """
        Length-prefixed framing used for snapshot checksums.

        Format: [key_len:4][key][val_len:4][val]
        """
        return (
            len(self.key).to_bytes(4, "big")
            + self.key
            + len(self.val).to_bytes(4, "big")
            + self.val
        )


def as_bytes(data: object, name: str) -> bytes:
    """
    Normalise a bytes-like argument to bytes.

    Raises:
        TypeError: If data is not bytes, bytearray or memoryview.
    """
    if isinstance(data, bytes):
        return data
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"{name} must be bytes-like, got {type(data).__name__}")
