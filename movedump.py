#!/usr/bin/env python3
"""CLI to rewrite a WordPress SQL dump or a file tree for a site move.

Inputs: paths and FROM TO pairs via CLI.
Side effects: --sql writes OUTPUT (INPUT is never modified); --files edits
text files under PATH in place. Compression and the database export/import
happen around these steps, not inside them.
"""
import os
import sys

from dumpkit.config import RUN_ID_ENV
from dumpkit.files import replace_in_path
from dumpkit.sql.__main__ import run as run_sql
from dumpkit.utils import init_logging, log, status_fail, status_pass

# ─── CONFIG ──────────────────────────────────────────────────────────────
FLAG_SQL = "--sql"
FLAG_FILES = "--files"
USAGE = (
    "usage: --sql INPUT OUTPUT [--urls] [--] FROM TO [FROM TO ...] | "
    "--files PATH FROM TO"
)


# ─── Steps ───────────────────────────────────────────────────────────────
def step_sql(args: list[str]) -> bool:
    return run_sql(args) == 0


def step_files(args: list[str]) -> bool:
    if len(args) != 3:
        status_fail("usage: --files PATH FROM TO")
        return False
    path, search, replace = args
    try:
        result = replace_in_path(path, search, replace)
    except OSError as err:
        status_fail(f"text replace {path}: {err}")
        return False
    log(f"PASS: files step {result}")
    status_pass(
        f"updated {result['files_modified']} files "
        f"(checked {result['files_checked']})"
    )
    return True


def main(argv: list[str]) -> int:
    # Initialize logging and run-id
    rid = init_logging(None)
    os.environ[RUN_ID_ENV] = rid
    if not argv:
        status_fail(USAGE)
        return 1
    action, rest = argv[0], argv[1:]
    if action == FLAG_SQL:
        return 0 if step_sql(rest) else 1
    if action == FLAG_FILES:
        return 0 if step_files(rest) else 1
    status_fail(f"must specify {FLAG_SQL} or {FLAG_FILES}")
    return 1


def cli() -> int:
    return main(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(cli())
