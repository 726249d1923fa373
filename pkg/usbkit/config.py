"""
Runtime settings for usbkit.

Defaults suit a macOS host; every value can be overridden from the
environment with a ``USBKIT_`` variable.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping

from .errors import UsbKitError

DATA_TYPE = "SPUSBDataType"
# keeps the recursive _items walk well inside the interpreter recursion limit
MAX_DEPTH_LIMIT = 256


@dataclass(slots=True)
class Settings:
    max_depth: int = 64
    data_type: str = DATA_TYPE
    probe_command: List[str] = field(
        default_factory=lambda: ["system_profiler", "-json", DATA_TYPE]
    )
    probe_timeout_s: int = 10
    workdir: Path = Path(".usbkit")

    def __post_init__(self) -> None:
        self.workdir = Path(self.workdir)
        if not 1 <= self.max_depth <= MAX_DEPTH_LIMIT:
            raise UsbKitError(
                "BAD_CONFIG", f"max_depth must be between 1 and {MAX_DEPTH_LIMIT}, got {self.max_depth}"
            )
        if self.probe_timeout_s < 1:
            raise UsbKitError("BAD_CONFIG", f"probe_timeout_s must be positive, got {self.probe_timeout_s}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        kwargs: dict = {}
        if "USBKIT_MAX_DEPTH" in env:
            kwargs["max_depth"] = _env_int(env, "USBKIT_MAX_DEPTH")
        if "USBKIT_PROBE_TIMEOUT" in env:
            kwargs["probe_timeout_s"] = _env_int(env, "USBKIT_PROBE_TIMEOUT")
        if env.get("USBKIT_WORKDIR"):
            kwargs["workdir"] = Path(env["USBKIT_WORKDIR"])
        return cls(**kwargs)


def _env_int(env: Mapping[str, str], name: str) -> int:
    raw = env[name]
    try:
        return int(raw)
    except ValueError as exc:
        raise UsbKitError("BAD_CONFIG", f"{name}={raw!r} is not an integer") from exc
