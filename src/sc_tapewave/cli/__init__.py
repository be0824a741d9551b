"""
SC-TapeWave Command-Line Interface
==================================

This package provides the command-line tools:

- **sctapewave**: encode a program image as a tape WAV file
- **sctapeinfo**: decode and verify a tape WAV file

Each tool is a Click application with its own help and error reporting.
"""

__all__ = ["sctapewave", "sctapeinfo"]
