"""
Pull USB mass-storage devices out of a ``system_profiler SPUSBDataType`` tree.

The inventory nests hubs and devices under ``_items`` to arbitrary depth.
Any entry carrying a ``Media`` key is a storage device; everything else
(hubs, displays, keyboards, idle bus slots) is walked through or skipped.
Extraction is all-or-nothing: the first malformed value raises and no
partial list is returned.
"""
from __future__ import annotations

import logging
from typing import Any, List

from .config import DATA_TYPE, MAX_DEPTH_LIMIT
from .errors import DepthLimitError, IntegerParseError, UsbKitError
from .models import Medium, StorageDevice, Volume
from .shape import JsonNode

log = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 64


def extract_storage_devices(
    root: Any,
    *,
    data_type: str = DATA_TYPE,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> List[StorageDevice]:
    """
    Return every storage device in ``root`` in depth-first, left-to-right order.

    Raises ShapeError if ``root`` is not an object, lacks ``data_type`` or
    that value is not an array, and for any malformed entry below it.
    """
    if not 1 <= max_depth <= MAX_DEPTH_LIMIT:
        raise UsbKitError("BAD_CONFIG", f"max_depth must be between 1 and {MAX_DEPTH_LIMIT}, got {max_depth}")
    data = JsonNode.root(root)
    data.as_object()
    buses = data.child(data_type)
    buses.as_array()
    log.debug("Find USB storage in %s", buses.path)
    devices = find_in_items(buses, max_depth=max_depth)
    log.debug("Found %d USB storage device(s)", len(devices))
    return devices


def find_in_items(items: JsonNode, *, max_depth: int = DEFAULT_MAX_DEPTH) -> List[StorageDevice]:
    if items.depth > max_depth:
        raise DepthLimitError(items.path, max_depth)
    log.debug("-> Find items in %s", items.path)
    found: List[StorageDevice] = []
    for entry in items.elements():
        entry.as_object()
        if entry.has("_items"):
            found.extend(find_in_items(entry.child("_items"), max_depth=max_depth))
        # not elif: an entry may carry both keys
        if entry.has("Media"):
            found.append(extract_device(entry))
    return found


def extract_device(entry: JsonNode) -> StorageDevice:
    name = entry.string("_name")
    serial = entry.string("serial_num")
    manufacturer = entry.string("manufacturer")
    product_id = _read_id(entry, "product_id", parse_usb_id)
    vendor_id = _read_id(entry, "vendor_id", parse_vendor_id)
    media = extract_media(entry.child("Media"))
    log.info("Found USB storage %r at %s", name, entry.path)
    return StorageDevice(
        name=name,
        product_id=product_id,
        vendor_id=vendor_id,
        serial=serial,
        manufacturer=manufacturer,
        media=tuple(media),
    )


def parse_usb_id(text: str) -> int:
    """
    Parse a product/vendor id literal such as ``0x0917`` or ``2327``.

    Accepts Python integer-literal forms without sign or surrounding
    whitespace and narrows the value to 16 bits.  Zero-padded decimals such
    as ``0407`` are rejected, not read as octal; octal needs ``0o407``.
    """
    if not text or text[0] in "+-" or text != text.strip():
        raise ValueError(f"invalid integer literal {text!r}")
    return int(text, 0) & 0xFFFF


def parse_vendor_id(text: str) -> int:
    """``"0x1f75  (Innostor Co., Ltd.)"`` -> 0x1f75; the vendor name is dropped."""
    return parse_usb_id(text.split(" ", 1)[0])


def _read_id(entry: JsonNode, key: str, parse) -> int:
    raw = entry.string(key)
    try:
        return parse(raw)
    except ValueError as exc:
        raise IntegerParseError(f"{entry.path}[{key}]", key, raw) from exc


def extract_media(media: JsonNode) -> List[Medium]:
    log.debug("-> Find media in %s", media.path)
    result: List[Medium] = []
    for m in media.elements():
        m.as_object()
        name = m.string("_name")
        dev_name = m.string("bsd_name")
        partition_scheme = m.string("partition_map_type")
        size_bytes = m.integer("size_in_bytes")
        volumes: List[Volume] = []
        if m.has("volumes"):
            volumes = extract_volumes(m.child("volumes"))
        result.append(Medium(name, dev_name, partition_scheme, size_bytes, tuple(volumes)))
    return result


def extract_volumes(volumes: JsonNode) -> List[Volume]:
    log.debug("-> Find volumes in %s", volumes.path)
    result: List[Volume] = []
    for v in volumes.elements():
        v.as_object()
        fields = dict(
            name=v.string("_name"),
            dev_name=v.string("bsd_name"),
            size_bytes=v.integer("size_in_bytes"),
            file_system=v.string("file_system"),
            uuid=v.string("volume_uuid"),
        )
        # mount_point is the only evidence of a mount
        if v.has("mount_point"):
            fields.update(
                mounted=True,
                mount_point=v.string("mount_point"),
                free_bytes=v.integer("free_space_in_bytes"),
                writable=v.string("writable") == "yes",
            )
        result.append(Volume(**fields))
    return result
