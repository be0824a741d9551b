"""
SC-3000 Tape Record Definitions
===============================

This module defines the data structures that describe one SC-3000 tape file.

Tape File Structure
-------------------
A tape file is two records, each preceded by a leader tone:

**Header record**:
    Key code  (1 byte):  0x26 machine code, 0x16 BASIC
    Name      (16 bytes): space padded
    Length    (2 bytes):  big-endian program length
    Address   (2 bytes):  big-endian start address (machine code only)
    Parity    (1 byte):   two's complement of the byte sum after the key code
    Dummy     (2 bytes):  0x00 0x00

**Data record**:
    Key code  (1 byte):  0x27 machine code, 0x17 BASIC
    Program   (n bytes)
    Parity    (1 byte)
    Dummy     (2 bytes):  0x00 0x00

The two dummy bytes have no documented meaning; they are written as-is.

Tape Modes
----------
The mode is a tagged variant rather than an enum plus an optional address:
``MachineCode`` always carries a start address and ``Basic`` never does.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Optional, Union


# =============================================================================
# Field Limits
# =============================================================================

NAME_LENGTH = 16
NAME_PAD = 0x20
MAX_PROGRAM_LENGTH = 0xFFFF
MAX_START_ADDRESS = 0xFFFF
DUMMY_BYTES = bytes([0x00, 0x00])


# =============================================================================
# Key Codes
# =============================================================================

class KeyCode(IntEnum):
    """Record type identifiers written after each leader tone."""
    BASIC_HEADER = 0x16
    BASIC_DATA = 0x17
    MACHINE_CODE_HEADER = 0x26
    MACHINE_CODE_DATA = 0x27

    @classmethod
    def is_header(cls, value: int) -> bool:
        """Check if a byte is a header record key code."""
        return value in (cls.BASIC_HEADER, cls.MACHINE_CODE_HEADER)

    @classmethod
    def is_data(cls, value: int) -> bool:
        """Check if a byte is a data record key code."""
        return value in (cls.BASIC_DATA, cls.MACHINE_CODE_DATA)

    @classmethod
    def get_name(cls, value: int) -> str:
        """Get a human-readable name for a key code."""
        names = {
            0x16: "BASIC header",
            0x17: "BASIC data",
            0x26: "Machine code header",
            0x27: "Machine code data",
        }
        return names.get(value, f"Unknown (0x{value:02X})")


# =============================================================================
# Tape Modes
# =============================================================================

@dataclass(frozen=True)
class MachineCode:
    """
    Executable binary loaded at, and started from, start_address.

    Attributes:
        start_address: 16-bit load/execution address
    """
    start_address: int

    header_key: ClassVar[int] = KeyCode.MACHINE_CODE_HEADER
    data_key: ClassVar[int] = KeyCode.MACHINE_CODE_DATA

    @property
    def name(self) -> str:
        return "Machine code"


@dataclass(frozen=True)
class Basic:
    """Tokenized BASIC program. Defined for decoding; encoding is unsupported."""

    header_key: ClassVar[int] = KeyCode.BASIC_HEADER
    data_key: ClassVar[int] = KeyCode.BASIC_DATA

    @property
    def name(self) -> str:
        return "BASIC"


TapeMode = Union[MachineCode, Basic]


def mode_from_key(key_code: int, start_address: Optional[int] = None) -> TapeMode:
    """
    Build a TapeMode from a header key code.

    Args:
        key_code: Header record key code (0x26 or 0x16)
        start_address: Start address read from the header (machine code only)

    Returns:
        MachineCode or Basic

    Raises:
        ValueError: If key_code is not a header key code, or a machine
            code key code arrives without a start address
    """
    if key_code == KeyCode.MACHINE_CODE_HEADER:
        if start_address is None:
            raise ValueError("Machine code header requires a start address")
        return MachineCode(start_address)
    if key_code == KeyCode.BASIC_HEADER:
        return Basic()
    raise ValueError(f"Not a header key code: 0x{key_code:02X}")


# =============================================================================
# Name Field
# =============================================================================

def encode_name(name: Union[str, bytes]) -> bytes:
    """
    Build the 16-byte name field.

    Longer names are truncated, shorter names padded with spaces. No
    encoding validation is done: bytes are used as-is and str names are
    encoded as latin-1 with '?' for characters outside it.

    Example:
        >>> encode_name("TEST")
        b'TEST            '
    """
    if isinstance(name, str):
        name = name.encode("latin-1", errors="replace")
    return bytes(name[:NAME_LENGTH]).ljust(NAME_LENGTH, bytes([NAME_PAD]))


def decode_name(field: bytes) -> str:
    """Get a display string from a name field (trailing spaces stripped)."""
    return field.decode("latin-1").rstrip(" ")


# =============================================================================
# Header Record
# =============================================================================

@dataclass(frozen=True)
class TapeHeader:
    """
    Contents of a header record.

    Attributes:
        mode: MachineCode (with start address) or Basic
        name: The raw 16-byte name field
        program_length: Length of the data record payload
    """
    mode: TapeMode
    name: bytes
    program_length: int

    def fields(self) -> bytes:
        """
        The checksummed header bytes that follow the key code.

        Name, big-endian length and, for machine code, big-endian start
        address. Parity and dummy bytes are not included.
        """
        result = bytearray(encode_name(self.name))
        result.append(self.program_length >> 8)
        result.append(self.program_length & 0xFF)
        if isinstance(self.mode, MachineCode):
            result.append(self.mode.start_address >> 8)
            result.append(self.mode.start_address & 0xFF)
        return bytes(result)

    def get_display_name(self) -> str:
        """Get the name without trailing padding."""
        return decode_name(self.name)
