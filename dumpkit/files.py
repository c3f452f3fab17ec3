"""Search/replace across the text files of a directory tree.

Used on wp-content after a sync so hardcoded site URLs follow the move.
Only files with a known text extension and no NUL byte in their first
chunk are touched.
"""

from __future__ import annotations

import logging
from pathlib import Path

from dumpkit.config import TEXT_EXTENSIONS, TEXT_SNIFF_BYTES
from dumpkit.utils import PathLike, log, require


def _is_text_file(path: Path) -> bool:
    try:
        with open(path, "rb") as fh:
            chunk = fh.read(TEXT_SNIFF_BYTES)
    except OSError:
        return False
    return b"\0" not in chunk


def _iter_candidates(root: Path):
    for p in sorted(root.rglob("*")):
        if not p.is_file():
            continue
        if p.suffix.lower().lstrip(".") not in TEXT_EXTENSIONS:
            continue
        yield p


def replace_in_path(
    path: PathLike, search: str | bytes, replace: str | bytes
) -> dict[str, int]:
    """Replace search with replace in every text file under path.

    Returns {"files_checked": n, "files_modified": m}. Unreadable files are
    skipped; a failed write raises.
    """
    root = Path(path)
    if not root.is_dir():
        raise FileNotFoundError(f"Path not found: {root}")
    if isinstance(search, str):
        search = search.encode("utf-8")
    if isinstance(replace, str):
        replace = replace.encode("utf-8")

    checked = 0
    modified = 0
    for p in _iter_candidates(root):
        if not require(_is_text_file(p), f"binary or unreadable {p}"):
            continue
        checked += 1
        try:
            contents = p.read_bytes()
        except OSError as err:
            require(False, f"could not read {p}: {err}", "warning")
            continue
        if not search or search not in contents:
            continue
        try:
            p.write_bytes(contents.replace(search, replace))
        except OSError as err:
            logging.error("Failed to write updated contents to %s: %s", p, err)
            raise
        modified += 1
        log(f"PASS: Updated {p}")

    log(f"PASS: text replace under {root} checked={checked} modified={modified}")
    return {"files_checked": checked, "files_modified": modified}
