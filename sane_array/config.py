"""Central configuration for the SANE codec."""

from dataclasses import dataclass

TRANSCODERS = ("auto", "zero_copy", "portable")


@dataclass
class CodecConfig:
    """Knobs shared by every encode/decode call."""

    # 'auto' picks from the host byte order, 'zero_copy' reinterprets buffers
    # in place, 'portable' converts element by element.
    transcoder: str = "auto"

    # Reject headers whose payload length differs from prod(shape) * itemsize
    # before reading the payload.
    strict_length: bool = False

    # Payloads are read in chunks of at most this many bytes.
    read_chunk_size: int = 1 << 20

    def __post_init__(self):
        if self.transcoder not in TRANSCODERS:
            raise ValueError(
                f"Unknown transcoder {self.transcoder!r}, expected one of {TRANSCODERS}"
            )
        if self.read_chunk_size <= 0:
            raise ValueError("read_chunk_size must be positive")


DEFAULT_CONFIG = CodecConfig()
