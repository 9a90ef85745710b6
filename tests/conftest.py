from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
SANDBOX_HOME = Path(tempfile.gettempdir()) / "foldercommander-pytest" / "home"
os.environ.setdefault("FOLDERCOMMANDER_HOME", str(SANDBOX_HOME))
os.environ.setdefault("FOLDERCOMMANDER_TELEMETRY", "0")
SANDBOX_HOME.mkdir(parents=True, exist_ok=True)
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))
