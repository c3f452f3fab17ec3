"""Utility helpers kept dependency-free.

- init_logging: configure console + file logging with run-id.
- status_pass/status_fail: concise console status lines (with run-id).
- log: debug-level logger for normal status lines (file-oriented).
- require: log-and-return-bool guard for soft preconditions.
- same_path: compare two paths after resolving them.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Union

from dumpkit.config import LOG_BACKUP_COUNT, LOG_DIR, LOG_MAX_BYTES, RUN_ID_ENV


_RUN_ID = ""

PathLike = Union[str, "os.PathLike[str]"]


def _gen_run_id() -> str:
    try:
        import uuid

        return uuid.uuid4().hex[:8]
    except Exception:
        return "00000000"


def init_logging(run_id: str | None = None, log_dir: str | None = None) -> str:
    """Initialize logging with console + rotating file handlers.

    - Console: minimal, CRITICAL only; status lines go through print.
    - File: DEBUG+, rich format, written to <log_dir>/movedump-<rid>.log
    Returns the run-id used.
    """
    global _RUN_ID
    if _RUN_ID:
        return _RUN_ID

    rid = run_id or os.environ.get(RUN_ID_ENV) or _gen_run_id()
    _RUN_ID = rid

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    try:
        target_dir = log_dir or LOG_DIR
        os.makedirs(target_dir, exist_ok=True)
        logfile = os.path.join(target_dir, f"movedump-{rid}.log")
    except OSError:
        logfile = os.path.abspath(f"movedump-{rid}.log")

    # Quiet any pre-existing console handlers
    for h in list(root.handlers):
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler):
            h.setLevel(logging.CRITICAL)

    has_file = False
    for h in root.handlers:
        if isinstance(h, RotatingFileHandler) and getattr(h, "baseFilename", "").endswith(
            os.path.basename(logfile)
        ):
            has_file = True
            break
    if not has_file:
        fh = RotatingFileHandler(
            logfile, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT
        )
        fh.setLevel(logging.DEBUG)
        ffmt = logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
        fh.setFormatter(ffmt)
        root.addHandler(fh)

    # Add a super-quiet console handler if none exist
    has_console = any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        for h in root.handlers
    )
    if not has_console:
        ch = logging.StreamHandler()
        ch.setLevel(logging.CRITICAL)
        ch.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        root.addHandler(ch)

    logging.debug("Logging initialized. run_id=%s file=%s", rid, logfile)
    os.environ[RUN_ID_ENV] = rid
    return rid


def _rid() -> str:
    return _RUN_ID or os.environ.get(RUN_ID_ENV, "--------")


def status_pass(msg: str) -> None:
    print(f"PASS: {msg} [{_rid()}]")


def status_fail(msg: str) -> None:
    print(f"FAIL: {msg} [{_rid()}]", flush=True)


def log(msg: str) -> None:
    # File-oriented normal progress; stays out of console noise.
    logging.debug(msg)


def require(condition: bool, message: str, level: str = "info") -> bool:
    if condition:
        return True

    if level == "error":
        logging.error(f"SKIP: {message}")
    elif level == "warning":
        logging.warning(f"SKIP: {message}")
    else:
        log(f"SKIP: {message}")

    return False


def same_path(a: PathLike, b: PathLike) -> bool:
    if os.fspath(a) == os.fspath(b):
        return True
    try:
        return Path(a).resolve() == Path(b).resolve()
    except OSError:
        return False
