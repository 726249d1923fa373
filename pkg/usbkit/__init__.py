from __future__ import annotations

from .config import Settings
from .errors import UsbKitError, ExtractionError, ShapeError, IntegerParseError, DepthLimitError
from .extract import extract_storage_devices
from .models import StorageDevice, Medium, Volume, ScanResult, Artifact
from .session import Session

__all__ = [
    "Settings",
    "UsbKitError",
    "ExtractionError",
    "ShapeError",
    "IntegerParseError",
    "DepthLimitError",
    "extract_storage_devices",
    "StorageDevice",
    "Medium",
    "Volume",
    "ScanResult",
    "Artifact",
    "Session",
]
