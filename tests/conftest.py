"""
Shared fixtures for the SC-TapeWave test suite.
"""

import pytest

from sc_tapewave.tape import MachineCode


@pytest.fixture
def sample_program() -> bytes:
    """
    A tiny Z80 program for testing.

        LD A,$41    ; 3E 41
        RET         ; C9
    """
    return bytes([0x3E, 0x41, 0xC9])


@pytest.fixture
def machine_code() -> MachineCode:
    """Machine-code mode with the usual SC-3000 RAM start address."""
    return MachineCode(0x9000)
