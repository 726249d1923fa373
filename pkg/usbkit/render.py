from __future__ import annotations

from typing import Iterable, List

from .models import Medium, StorageDevice, Volume

INDENT = "  "


def render_volume(v: Volume, prefix: str = "") -> str:
    lines = [
        f'{prefix}Volume "{v.name}":',
        f"{prefix}  Device: /dev/{v.dev_name}",
        f"{prefix}  Size: {v.size_bytes}",
        f"{prefix}  Filesystem: {v.file_system}",
        f"{prefix}  Volume UUID: {v.uuid}",
        f"{prefix}  Mounted: {str(v.mounted).lower()}",
    ]
    if v.mounted:
        lines += [
            f"{prefix}  Mount point: {v.mount_point}",
            f"{prefix}  Free space: {v.free_bytes}",
            f"{prefix}  Writable: {str(v.writable).lower()}",
        ]
    return "\n".join(lines) + "\n"


def render_medium(m: Medium, prefix: str = "") -> str:
    lines = [
        f'{prefix}Media "{m.name}":',
        f"{prefix}  Device: /dev/{m.dev_name}",
        f"{prefix}  Partition: {m.partition_scheme}",
        f"{prefix}  Size: {m.size_bytes}",
        f"{prefix}  Number of Volumes: {len(m.volumes) or 'none'}",
    ]
    out = "\n".join(lines) + "\n"
    for v in m.volumes:
        out += render_volume(v, prefix + INDENT * 2) + "\n"
    return out


def render_device(d: StorageDevice, prefix: str = "") -> str:
    lines = [
        f'{prefix}USB Storage "{d.name}":',
        f"{prefix}  Product ID: 0x{d.product_id:04x}",
        f"{prefix}  Vendor ID: 0x{d.vendor_id:04x}",
        f"{prefix}  Serial Number: {d.serial}",
        f"{prefix}  Manufacturer: {d.manufacturer}",
        f"{prefix}  Number of Media: {len(d.media) or 'none'}",
    ]
    out = "\n".join(lines) + "\n"
    for m in d.media:
        out += render_medium(m, prefix + INDENT * 2) + "\n"
    return out


def render_devices(devices: Iterable[StorageDevice]) -> str:
    devices = list(devices)
    chunks: List[str] = []
    for i, d in enumerate(devices, start=1):
        chunks.append(f"USB Storages[{i}/{len(devices)}]:\n{render_device(d, INDENT)}")
    return "\n".join(chunks)
