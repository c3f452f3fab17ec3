"""Serialization-aware search/replace for SQL dump files.

Submodules:
- escape: mysqldump backslash escapes (decode/encode, length counting)
- scanner: find and bound s:N:\\"...\\"; tokens in a line
- rules: rule validation, cascading replace, URL rule helper
- replacer: per-line token/literal rewrite
- rewriter: file-to-file streaming driver
"""

from .replacer import process_line
from .rewriter import RewriteStats, replace_in_file
from .rules import ConfigurationError, ReplacementRule, url_rules

__all__ = [
    "ConfigurationError",
    "ReplacementRule",
    "RewriteStats",
    "process_line",
    "replace_in_file",
    "url_rules",
]
