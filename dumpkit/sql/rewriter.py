"""Stream a SQL dump file through the line rewriter into another file."""

from __future__ import annotations

import logging
import shutil
import time
from dataclasses import dataclass
from typing import Any, Iterable

from dumpkit.config import COPY_CHUNK_SIZE
from dumpkit.utils import PathLike, log, same_path
from .replacer import rewrite_line
from .rules import ConfigurationError, normalize_rules


@dataclass
class RewriteStats:
    lines: int = 0
    rewritten: int = 0
    abandoned: int = 0
    copied: bool = False
    skipped: bool = False


def _copy_file(input_path: PathLike, output_path: PathLike) -> None:
    with open(input_path, "rb") as src, open(output_path, "wb") as dst:
        shutil.copyfileobj(src, dst, COPY_CHUNK_SIZE)


def replace_in_file(
    input_path: PathLike, output_path: PathLike, rules: Iterable[Any] | None
) -> RewriteStats:
    """Run replacements against a SQL file and write the result to another file.

    Rules are validated before any file is opened. With no usable rules the
    input is copied byte for byte, or left alone when both paths match.
    Memory use is bounded by the longest line, not the file size. I/O errors
    propagate; the output is then an incomplete prefix and must not be
    imported.
    """
    normalized = normalize_rules(rules)
    stats = RewriteStats()
    if not normalized:
        if same_path(input_path, output_path):
            stats.skipped = True
            log(f"PASS: no replacements; {input_path} left as is")
            return stats
        try:
            _copy_file(input_path, output_path)
        except OSError as err:
            logging.error("Unable to copy %s to %s: %s", input_path, output_path, err)
            raise
        stats.copied = True
        log(f"PASS: no replacements; copied {input_path} -> {output_path}")
        return stats

    if same_path(input_path, output_path):
        raise ConfigurationError(
            f"Input and output must be different files: {input_path}"
        )

    t0 = time.monotonic()
    try:
        with open(input_path, "rb") as src, open(output_path, "wb") as dst:
            for line in src:
                stats.lines += 1
                result = rewrite_line(line, normalized)
                if result.abandoned:
                    logging.debug(
                        "%s line %d: malformed serialized string, treated as text",
                        input_path,
                        stats.lines,
                    )
                stats.rewritten += result.rewritten
                stats.abandoned += result.abandoned
                dst.write(result.text)
    except OSError as err:
        logging.error(
            "Rewrite %s -> %s failed after %d lines: %s",
            input_path,
            output_path,
            stats.lines,
            err,
        )
        raise

    dt = time.monotonic() - t0
    log(
        f"PASS: rewrote {input_path} -> {output_path} "
        f"lines={stats.lines} tokens={stats.rewritten} "
        f"abandoned={stats.abandoned} rules={len(normalized)} ({dt:.1f}s)"
    )
    return stats
