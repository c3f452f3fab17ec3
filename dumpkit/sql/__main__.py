"""Module entry point: python -m dumpkit.sql [--urls] INPUT OUTPUT [--] FROM TO [FROM TO ...]"""

from __future__ import annotations

import sys

from dumpkit.utils import init_logging, status_fail, status_pass
from .rewriter import replace_in_file
from .rules import ConfigurationError, rules_from_pairs

FLAG_URLS = "--urls"
END_OF_FLAGS = "--"
USAGE = "usage: [--urls] INPUT OUTPUT [--] FROM TO [FROM TO ...]"


def _split_argv(argv: list[str]) -> tuple[list[str], list[str]]:
    # Everything after a bare "--" is positional, so values like --old-slug work.
    flags: list[str] = []
    args: list[str] = []
    for i, a in enumerate(argv):
        if a == END_OF_FLAGS:
            args.extend(argv[i + 1 :])
            break
        if a.startswith("--"):
            flags.append(a)
            continue
        args.append(a)
    return flags, args


def run(argv: list[str]) -> int:
    """Parse argv and rewrite one dump; returns a process exit code."""
    flags, args = _split_argv(argv)
    unknown = [f for f in flags if f != FLAG_URLS]
    if unknown:
        status_fail(f"unknown flag {unknown[0]} (use -- before FROM/TO values starting with --)")
        return 1
    if len(args) < 2:
        status_fail(USAGE)
        return 1
    input_path, output_path = args[0], args[1]
    try:
        rules = rules_from_pairs(args[2:], urls=FLAG_URLS in flags)
        stats = replace_in_file(input_path, output_path, rules)
    except ConfigurationError as err:
        status_fail(str(err))
        return 1
    except OSError as err:
        # replace_in_file already logged it
        status_fail(f"rewrite {input_path}: {err}")
        return 1
    if stats.skipped:
        status_pass(f"no replacements; {input_path} unchanged")
        return 0
    if stats.copied:
        status_pass(f"no replacements; copied to {output_path}")
        return 0
    status_pass(
        f"rewrote {output_path} ({stats.rewritten} serialized, "
        f"{stats.abandoned} left as text)"
    )
    return 0


def main() -> int:
    init_logging(None)
    return run(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main())
