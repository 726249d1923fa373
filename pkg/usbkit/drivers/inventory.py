"""Sources of raw SPUSBDataType inventory: the live profiler or a saved capture."""
from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path
from typing import Any, List

from ..config import Settings
from ..errors import UsbKitError
from ..extract import extract_storage_devices
from ..models import StorageDevice

log = logging.getLogger(__name__)


def parse_inventory(text: str, source: str = "<input>") -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise UsbKitError("BAD_JSON", f"{source}: {exc}") from exc
    except RecursionError as exc:
        raise UsbKitError("BAD_JSON", f"{source}: nested too deeply to decode") from exc


def load_inventory(path: str | Path) -> Any:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise UsbKitError("SOURCE_UNREADABLE", f"{path}: {exc.strerror or exc}") from exc
    return parse_inventory(text, str(path))


def run_profiler(settings: Settings | None = None) -> Any:
    settings = settings or Settings()
    cmd = settings.probe_command
    log.debug("Running %s", " ".join(cmd))
    try:
        proc = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=settings.probe_timeout_s,
            check=True,
        )
    except FileNotFoundError as exc:
        raise UsbKitError("PROBE_FAILED", f"{cmd[0]} not found", recoverable=True) from exc
    except subprocess.TimeoutExpired as exc:
        raise UsbKitError(
            "PROBE_FAILED", f"{cmd[0]} timed out after {settings.probe_timeout_s}s", recoverable=True
        ) from exc
    except subprocess.CalledProcessError as exc:
        detail = (exc.stderr or "").strip() or f"exit status {exc.returncode}"
        raise UsbKitError("PROBE_FAILED", f"{cmd[0]}: {detail}", recoverable=True) from exc
    return parse_inventory(proc.stdout, cmd[0])


def probe_devices(settings: Settings | None = None) -> List[StorageDevice]:
    settings = settings or Settings()
    return extract_storage_devices(
        run_profiler(settings),
        data_type=settings.data_type,
        max_depth=settings.max_depth,
    )
