"""
SC-3000 Tape Encoding
=====================

This package implements the SC-3000 cassette tape format: the bit-level
modulation, the record framing and the WAV container around them.

Components
----------
- **modulator**: Bitstream Modulator
    Turns bits, framed bytes, leader tones and silence into samples

- **assembler**: Tape Frame Assembler
    Sequences one header record and one data record through the modulator

- **container**: WAV Container
    Streams the samples into an 8-bit mono 19200 Hz PCM WAV file

- **decoder**: Tape Decoder
    Reads an encoded WAV back and verifies both record checksums
"""

# =============================================================================
# Public API Exports
# =============================================================================

# Record definitions
from sc_tapewave.tape.records import (
    KeyCode,
    MachineCode,
    Basic,
    TapeMode,
    TapeHeader,
    mode_from_key,
    encode_name,
    decode_name,
    NAME_LENGTH,
    MAX_PROGRAM_LENGTH,
    MAX_START_ADDRESS,
)

# Checksum
from sc_tapewave.tape.checksum import (
    Checksum,
    calculate_parity,
    verify_parity,
)

# Modulator
from sc_tapewave.tape.modulator import (
    BitstreamModulator,
    frame_bits,
    bit_samples,
    byte_samples,
    ONE_BIT_PATTERN,
    ZERO_BIT_PATTERN,
    SAMPLE_HIGH,
    SAMPLE_LOW,
    SAMPLE_SILENCE,
    SAMPLES_PER_BIT,
    SAMPLES_PER_BYTE,
)

# Container
from sc_tapewave.tape.container import (
    WaveWriter,
    WaveHeader,
    build_wave_header,
    parse_wave_header,
    HEADER_SIZE,
)

# Assembler
from sc_tapewave.tape.assembler import (
    TapeAssembler,
    encode_tape,
    write_tape_file,
    expected_sample_count,
    validate_program,
    validate_start_address,
    validate_mode,
    validate_output_path,
)

# Decoder
from sc_tapewave.tape.decoder import (
    TapeDecoder,
    TapeImage,
    decode_tape,
    decode_tape_file,
    describe_mode,
)

__all__ = [
    # Records
    "KeyCode",
    "MachineCode",
    "Basic",
    "TapeMode",
    "TapeHeader",
    "mode_from_key",
    "encode_name",
    "decode_name",
    "NAME_LENGTH",
    "MAX_PROGRAM_LENGTH",
    "MAX_START_ADDRESS",
    # Checksum
    "Checksum",
    "calculate_parity",
    "verify_parity",
    # Modulator
    "BitstreamModulator",
    "frame_bits",
    "bit_samples",
    "byte_samples",
    "ONE_BIT_PATTERN",
    "ZERO_BIT_PATTERN",
    "SAMPLE_HIGH",
    "SAMPLE_LOW",
    "SAMPLE_SILENCE",
    "SAMPLES_PER_BIT",
    "SAMPLES_PER_BYTE",
    # Container
    "WaveWriter",
    "WaveHeader",
    "build_wave_header",
    "parse_wave_header",
    "HEADER_SIZE",
    # Assembler
    "TapeAssembler",
    "encode_tape",
    "write_tape_file",
    "expected_sample_count",
    "validate_program",
    "validate_start_address",
    "validate_mode",
    "validate_output_path",
    # Decoder
    "TapeDecoder",
    "TapeImage",
    "decode_tape",
    "decode_tape_file",
    "describe_mode",
]
