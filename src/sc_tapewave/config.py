"""
SC-TapeWave Configuration
=========================

Timing and audio-format settings for the tape encoder.

The SC-3000 loader locks onto a 1200 Hz / 2400 Hz square wave. At the
19200 Hz sample rate used here one tape bit is exactly 16 samples, which
is why both the modulator and the container derive everything from
``WaveFormat.sample_rate``:

- 19,200 samples per second = 19.2 samples per millisecond
- 10 ms of silence = 192 samples
- 1 second of silence = 19,200 samples

The defaults below are the only values real hardware is known to accept.
They are kept in dataclasses so tests and library callers can pass their
own, not so they can be tuned per run.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TapeTiming:
    """
    Record timing for one tape file.

    Attributes:
        lead_in_ms: Silence before the header leader (default: 10 ms)
        gap_ms: Silence between header and data records (default: 1 s)
        lead_out_ms: Silence after the data record (default: 10 ms)
        header_leader_bits: One-bits before the header key code (default: 3600)
        data_leader_bits: One-bits before the data key code (default: 3600)
    """
    lead_in_ms: int = 10
    gap_ms: int = 1000
    lead_out_ms: int = 10
    header_leader_bits: int = 3600
    data_leader_bits: int = 3600


@dataclass(frozen=True)
class WaveFormat:
    """
    PCM sample format of the output container.

    Attributes:
        sample_rate: Samples per second (default: 19200, 16 samples per tape bit)
        channels: Channel count (default: 1, mono)
        bits_per_sample: Sample width (default: 8, unsigned)
    """
    sample_rate: int = 19200
    channels: int = 1
    bits_per_sample: int = 8

    @property
    def block_align(self) -> int:
        """Bytes per sample frame (all channels)."""
        return self.channels * self.bits_per_sample // 8

    @property
    def byte_rate(self) -> int:
        """Bytes per second of audio."""
        return self.sample_rate * self.block_align

    def samples_for_ms(self, duration_ms: int) -> int:
        """
        Number of samples covering duration_ms milliseconds.

        Truncates, so at 19200 Hz this is ``duration_ms * 192 // 10``.
        """
        return duration_ms * self.sample_rate // 1000


DEFAULT_TIMING = TapeTiming()
DEFAULT_WAVE_FORMAT = WaveFormat()
