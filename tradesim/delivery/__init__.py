"""
Action delivery module.

Publishes engine actions and the session summary to stdout or to a JSONL
journal file.
"""
from .base import BaseActionDelivery, DeliveryResult, DeliveryStatus
from .file_delivery import FileActionDelivery
from .stdout_delivery import StdoutActionDelivery

__all__ = [
    "BaseActionDelivery",
    "DeliveryResult",
    "DeliveryStatus",
    "FileActionDelivery",
    "StdoutActionDelivery",
]
