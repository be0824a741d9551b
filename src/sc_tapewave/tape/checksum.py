"""
Tape Record Checksum
====================

Every SC-3000 tape record ends with a parity byte. The loader sums every
byte of the record after the key code, adds the parity byte, and accepts
the record if the 8-bit result is zero. The parity byte is therefore the
two's complement of the 8-bit sum:

    parity = (-(b0 + b1 + ... + bn)) & 0xFF

The running sum is a property of bytes *on the wire*: every framed byte
the modulator writes is added, including key codes, length fields and
the dummy bytes. The assembler resets the accumulator right after each
key code, so the key code itself never counts toward a record.

Usage
-----
    from sc_tapewave.tape.checksum import Checksum, calculate_parity

    checksum = Checksum()
    checksum.add(0x01)
    checksum.add(0x02)
    checksum.parity()              # 0xFD
    calculate_parity(b"\\x01\\x02")  # 0xFD
"""

from dataclasses import dataclass
from typing import Final, Iterable

CHECKSUM_MASK: Final[int] = 0xFF


@dataclass
class Checksum:
    """
    8-bit wrapping accumulator for one tape record.

    Attributes:
        total: Sum of the bytes added since the last reset, modulo 256
    """
    total: int = 0

    def reset(self) -> None:
        """Start a new record."""
        self.total = 0

    def add(self, value: int) -> None:
        """Add one byte value (wraps at 8 bits)."""
        self.total = (self.total + value) & CHECKSUM_MASK

    def update(self, data: Iterable[int]) -> None:
        """Add every byte of data."""
        for value in data:
            self.add(value)

    def parity(self) -> int:
        """The parity byte for the bytes added so far."""
        return (-self.total) & CHECKSUM_MASK


def calculate_parity(data: bytes) -> int:
    """
    Calculate the parity byte for a record's payload.

    Args:
        data: The record bytes following the key code

    Returns:
        The byte that makes the 8-bit sum of data plus parity zero

    Example:
        >>> calculate_parity(bytes([0x01, 0x02]))
        253
        >>> calculate_parity(b"")
        0
    """
    return (-sum(data)) & CHECKSUM_MASK


def verify_parity(data: bytes, parity: int) -> bool:
    """Check a stored parity byte against the record payload."""
    return (sum(data) + parity) & CHECKSUM_MASK == 0
