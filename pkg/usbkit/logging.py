from __future__ import annotations

import json
import hashlib
import time
from pathlib import Path
from typing import Any


class Logger:
    """
    Append-only JSONL audit log with a simple hash chain.

    Each line stores the sha256 of the previous line under "prev", so an
    edited or dropped line breaks the chain for every line after it.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._prev = self._last_hash()

    def _last_hash(self) -> str:
        if not self.path.exists():
            return ""
        last = ""
        with self.path.open("r", encoding="utf-8") as f:
            for line in f:
                line = line.rstrip("\n")
                if line:
                    last = hashlib.sha256(line.encode("utf-8")).hexdigest()
        return last

    def event(self, kind: str, data: dict[str, Any]) -> None:
        ts = int(time.time())
        payload = {"ts": ts, "kind": kind, "data": data, "prev": self._prev}
        line = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
        h = hashlib.sha256(line.encode("utf-8")).hexdigest()
        self._prev = h
        with self.path.open("a", encoding="utf-8") as f:
            f.write(line + "\n")
            f.flush()

    def events(self) -> list[dict[str, Any]]:
        if not self.path.exists():
            return []
        with self.path.open("r", encoding="utf-8") as f:
            return [json.loads(line) for line in f if line.strip()]

    def verify(self) -> bool:
        """Recompute the chain; False on the first line whose prev does not match."""
        if not self.path.exists():
            return True
        prev = ""
        with self.path.open("r", encoding="utf-8") as f:
            for line in f:
                line = line.rstrip("\n")
                if not line:
                    continue
                try:
                    entry = json.loads(line)
                except json.JSONDecodeError:
                    return False
                if entry.get("prev") != prev:
                    return False
                prev = hashlib.sha256(line.encode("utf-8")).hexdigest()
        return True
