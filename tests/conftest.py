"""Test configuration ensuring the project root is importable."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent

root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from dumpkit.config import RUN_ID_ENV  # noqa: E402
from dumpkit import utils  # noqa: E402


@pytest.fixture
def isolated_logging(tmp_path, monkeypatch):
    """Point init_logging at a temp dir and undo its handlers afterwards."""
    log_dir = tmp_path / "log"
    monkeypatch.setattr(utils, "LOG_DIR", str(log_dir))
    monkeypatch.setattr(utils, "_RUN_ID", "")
    monkeypatch.delenv(RUN_ID_ENV, raising=False)
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    yield log_dir
    for h in list(root.handlers):
        if h not in before:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)


@pytest.fixture
def write_dump(tmp_path):
    def _write(data: bytes, name: str = "in.sql") -> Path:
        p = tmp_path / name
        p.write_bytes(data)
        return p

    return _write
