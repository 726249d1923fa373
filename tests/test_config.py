from pathlib import Path

import pytest
from pkg.usbkit import Settings, UsbKitError
from pkg.usbkit.config import MAX_DEPTH_LIMIT


def test_defaults():
    s = Settings()
    assert s.max_depth == 64
    assert s.data_type == "SPUSBDataType"
    assert s.probe_command == ["system_profiler", "-json", "SPUSBDataType"]


def test_from_env():
    s = Settings.from_env({"USBKIT_MAX_DEPTH": "12", "USBKIT_PROBE_TIMEOUT": "3", "USBKIT_WORKDIR": "/tmp/x"})
    assert s.max_depth == 12
    assert s.probe_timeout_s == 3
    assert s.workdir == Path("/tmp/x")


def test_from_env_bad_integer():
    with pytest.raises(UsbKitError) as ei:
        Settings.from_env({"USBKIT_MAX_DEPTH": "deep"})
    assert ei.value.code == "BAD_CONFIG"


def test_rejects_non_positive_depth():
    with pytest.raises(UsbKitError):
        Settings(max_depth=0)


def test_rejects_depth_above_limit():
    with pytest.raises(UsbKitError) as ei:
        Settings(max_depth=MAX_DEPTH_LIMIT + 1)
    assert ei.value.code == "BAD_CONFIG"
    with pytest.raises(UsbKitError):
        Settings.from_env({"USBKIT_MAX_DEPTH": "10000"})
    assert Settings(max_depth=MAX_DEPTH_LIMIT).max_depth == MAX_DEPTH_LIMIT
