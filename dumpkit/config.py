"""Shared configuration constants for movedump.

Centralizes paths and tunables used by modules.
"""

import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
LOG_DIR = os.environ.get("MOVEDUMP_LOG_DIR", str(PROJECT_ROOT / "log"))
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 3
RUN_ID_ENV = "MOVEDUMP_RID"

# Buffer for the zero-rule copy path
COPY_CHUNK_SIZE = int(os.environ.get("MOVEDUMP_COPY_CHUNK", str(1024 * 1024)))

# Text-tree replace: which files count as text
TEXT_SNIFF_BYTES = 2048
TEXT_EXTENSIONS = (
    "php",
    "phtml",
    "html",
    "htm",
    "css",
    "scss",
    "less",
    "js",
    "jsx",
    "ts",
    "tsx",
    "json",
    "xml",
    "yml",
    "yaml",
    "md",
    "txt",
    "twig",
    "mustache",
    "vue",
)
