from __future__ import annotations

import hashlib
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, List, Tuple

from .config import Settings
from .errors import UsbKitError
from .extract import extract_storage_devices
from .logging import Logger
from .models import Artifact, ScanResult, StorageDevice
from .drivers.inventory import run_profiler


class Session:
    """
    Runs extraction over one or more inventory inputs and keeps an audit log.
    """

    @staticmethod
    def discover(settings: Settings | None = None) -> Tuple[str, Any]:
        settings = settings or Settings()
        return settings.probe_command[0], run_profiler(settings)

    def __init__(self, workdir: str | Path | None = None, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self.workdir = Path(workdir) if workdir is not None else self.settings.workdir
        self.workdir.mkdir(parents=True, exist_ok=True)
        self._logger = Logger(self.workdir / "log.jsonl")
        self._exported: set[Path] = set()

    def extract(self, source: str, data: Any) -> List[StorageDevice]:
        """Extract one input. Raises on the first shape problem."""
        self._logger.event("scan_start", {"source": source})
        try:
            devices = extract_storage_devices(
                data,
                data_type=self.settings.data_type,
                max_depth=self.settings.max_depth,
            )
        except UsbKitError as exc:
            self._logger.event("scan_error", {"source": source, "code": exc.code, "error": str(exc)})
            raise
        self._logger.event(
            "scan_end",
            {"source": source, "devices": [d.name for d in devices]},
        )
        return devices

    def scan(self, sources: Iterable[Tuple[str, Any]]) -> List[ScanResult]:
        """
        Extract each (label, data) input independently.

        A failing input is recorded on its ScanResult; the rest still run.
        """
        results: List[ScanResult] = []
        for source, data in sources:
            try:
                devices = self.extract(source, data)
            except UsbKitError as exc:
                results.append(ScanResult(source=source, error=exc))
            else:
                results.append(ScanResult(source=source, devices=devices))
        return results

    def export(self, result: ScanResult) -> Artifact:
        if not result.ok:
            raise UsbKitError("NOTHING_TO_EXPORT", f"{result.source} failed: {result.error}")
        stem = Path(result.source).stem or "inventory"
        # same stem from different directories must not collide
        tag = hashlib.sha256(result.source.encode("utf-8")).hexdigest()[:8]
        out = self.workdir / f"{stem}-{tag}.json"
        if out in self._exported:
            raise UsbKitError("EXPORT_EXISTS", f"{result.source} already exported to {out}")
        self._exported.add(out)
        facts = {
            "source": result.source,
            "devices": [d.to_dict() for d in result.devices],
        }
        out.write_text(json.dumps(facts, indent=2), encoding="utf-8")
        sha = hashlib.sha256(out.read_bytes()).hexdigest()
        self._logger.event("export", {"source": result.source, "path": str(out), "sha256": sha})
        return Artifact(
            kind="storage_inventory",
            path=str(out),
            sha256=sha,
            meta={"devices": len(result.devices)},
            created_at=datetime.now(),
        )

    def log(self) -> Logger:
        return self._logger
