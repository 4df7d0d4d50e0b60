"""Shared bootstrap for session-store benchmarks."""
from __future__ import annotations

import sys
from pathlib import Path

_REPO_ROOT = Path(__file__).parent.parent
_SRC = _REPO_ROOT / "src"

if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from session_store.store.memory import MemoryStore

__all__ = ["MemoryStore"]
