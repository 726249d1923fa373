from __future__ import annotations

from dataclasses import dataclass, asdict, field
from datetime import datetime
from typing import Any

from .errors import UsbKitError


@dataclass(frozen=True, slots=True)
class Volume:
    """
    One filesystem volume on a medium.

    mount_point, free_bytes and writable are only set when mounted is True.
    """
    name: str
    dev_name: str
    size_bytes: int
    file_system: str
    uuid: str
    mounted: bool = False
    mount_point: str | None = None
    free_bytes: int | None = None
    writable: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class Medium:
    name: str
    dev_name: str
    partition_scheme: str
    size_bytes: int
    volumes: tuple[Volume, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class StorageDevice:
    name: str
    product_id: int
    vendor_id: int
    serial: str
    manufacturer: str
    media: tuple[Medium, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class ScanResult:
    """Outcome of extracting one inventory input."""
    source: str
    devices: list[StorageDevice] = field(default_factory=list)
    error: UsbKitError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class Artifact:
    kind: str
    path: str
    sha256: str
    meta: dict[str, Any]
    created_at: datetime | None = None
