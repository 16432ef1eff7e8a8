from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def clear_repokit_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer ``REPOKIT_*`` and ``NODE_ENV`` overrides out of the tests."""

    for key in [key for key in os.environ if key.startswith("REPOKIT_")]:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("NODE_ENV", raising=False)
