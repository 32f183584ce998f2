from dataclasses import dataclass
from typing import Tuple


@dataclass
class CodecConfig:
    """
    Configuration for file and batch compression runs.
    """
    compressed_suffix: str = ".huf"
    decoded_suffix: str = "_decoded"
    # Decompress every compressed file again and record whether it matches.
    verify_roundtrip: bool = True
    report_formats: Tuple[str, ...] = ("csv", "json")
    # Baseline coder shown next to our sizes in reports: "dahuffman" or "none".
    baseline: str = "dahuffman"
