import sys
from pathlib import Path

import pytest

# Add src to sys.path so we can import slotreflect without installing
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())


@pytest.fixture
def work_dir(tmp_path, monkeypatch):
    """Point configuration lookups at an empty temporary working directory."""
    monkeypatch.setenv("SLOTREFLECT_WORK_DIR", tmp_path.as_posix())
    monkeypatch.delenv("SLOTREFLECT_LOG_LEVEL", raising=False)
    return tmp_path
