"""Configuration for action delivery mechanisms."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StdoutDeliveryConfig:
    """Configuration for stdout delivery."""
    format: str = "text"  # text, json
    include_session_time: bool = False


@dataclass(frozen=True)
class FileDeliveryConfig:
    """Configuration for the JSONL action journal."""
    output_path: str
    append_mode: bool = True
    create_dirs: bool = True
