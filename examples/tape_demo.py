#!/usr/bin/env python3
"""
SC-3000 Tape Encoding Demo
==========================

This script demonstrates how to use the SC-TapeWave library to:
1. Encode a machine-code program as a tape WAV file
2. Read the tape back and check its checksums
3. Drive the modulator and assembler directly

Usage:
    source .venv/bin/activate
    python examples/tape_demo.py
"""

from pathlib import Path
import io

from sc_tapewave import (
    BitstreamModulator,
    MachineCode,
    TapeAssembler,
    decode_tape_file,
    write_tape_file,
)
from sc_tapewave.tape import describe_mode, expected_sample_count


def main():
    # Output directory for generated tapes
    output_dir = Path("trash")
    output_dir.mkdir(exist_ok=True)

    # ==========================================================================
    # 1. Encode a program
    # ==========================================================================
    # A short Z80 loop that fills the screen border colour register:
    #   LD A,$F1 / OUT ($BF),A / LD A,$87 / OUT ($BF),A / JR $

    program = bytes([0x3E, 0xF1, 0xD3, 0xBF, 0x3E, 0x87, 0xD3, 0xBF, 0x18, 0xFE])
    tape_path = output_dir / "border.wav"

    print(f"Encoding {len(program)} bytes to {tape_path}...")
    size = write_tape_file(tape_path, program, "BORDER", MachineCode(0x9000))
    print(f"  Wrote {size} bytes")

    # ==========================================================================
    # 2. Read it back
    # ==========================================================================

    image = decode_tape_file(tape_path)
    print(f"\nDecoded {tape_path.name}:")
    print(f"  Name: '{image.header.get_display_name()}'")
    print(f"  Mode: {describe_mode(image.header)}")
    print(f"  Length: {image.header.program_length} bytes")
    print(f"  Checksums: {'OK' if image.is_valid else 'BAD'}")

    # ==========================================================================
    # 3. Drive the engine directly
    # ==========================================================================
    # Without a WaveWriter the modulator produces bare samples, which is
    # handy for feeding an emulator's tape input.

    sink = io.BytesIO()
    modulator = BitstreamModulator(sink)
    TapeAssembler(modulator).write_tape(program, "BORDER", MachineCode(0x9000))

    samples = sink.getvalue()
    assert len(samples) == expected_sample_count(len(program), MachineCode(0x9000))
    print(f"\nRaw stream: {len(samples)} samples ({len(samples) / 19200:.2f} s)")


if __name__ == "__main__":
    main()
