"""
Pytest configuration: ensure project root is on sys.path for imports, and keep
the service off the network.

The modules live flat in the repository root (pali_grammar, numeral_composer, ...).
Turso credentials are blanked before pali_grammar is imported so that the
irregular-noun source resolves to the local fallback (or nothing).
"""

from __future__ import annotations

import os
import sys
from pathlib import Path


def _add_repo_root_to_sys_path() -> None:
    # tests/ -> repo root
    root = Path(__file__).resolve().parents[1]
    root_str = str(root)
    if root_str not in sys.path:
        sys.path.insert(0, root_str)


_add_repo_root_to_sys_path()

os.environ['TURSO_DATABASE_URL'] = ''
os.environ['TURSO_AUTH_TOKEN'] = ''
os.environ['CPED_DB_PATH'] = str(Path(__file__).resolve().parent / 'no-such-cped.db')
