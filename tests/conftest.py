import json
from pathlib import Path

import pytest

FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def fixture_path():
    def _path(name: str) -> Path:
        return FIXTURES / f"{name}.json"
    return _path


@pytest.fixture
def inventory(fixture_path):
    def _load(name: str):
        return json.loads(fixture_path(name).read_text(encoding="utf-8"))
    return _load
