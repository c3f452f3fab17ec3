"""movedump package: SQL dump rewriting and text-tree replacement.

Submodules:
- utils: logging, status lines, small helpers
- sql: serialization-aware search/replace over SQL dump files
- files: plain search/replace across a directory of text files
"""

# Intentionally minimal; logic lives in submodules.
