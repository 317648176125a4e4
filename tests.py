"""
Run the tarot-odds test suite from the project root: ``python tests.py``.

pytest and numpy come from the ``dev`` extra; if they (or the package itself)
cannot be imported, ``pip install -e .[dev]`` runs first. Extra arguments are
handed to pytest, e.g. ``python tests.py -k classify``.
"""
from __future__ import annotations

import subprocess
import sys
from pathlib import Path


ROOT = Path(__file__).resolve().parent


def _missing_test_requirements() -> list[str]:
    missing = []
    for name in ("pytest", "numpy", "tarot_odds"):
        try:
            __import__(name)
        except ImportError:
            missing.append(name)
    return missing


def main(argv: list[str]) -> int:
    missing = _missing_test_requirements()
    if missing:
        print(f"Missing {', '.join(missing)}; installing .[dev] ...")
        subprocess.check_call(
            [sys.executable, "-m", "pip", "install", "-e", ".[dev]"],
            cwd=str(ROOT),
        )
    return subprocess.call([sys.executable, "-m", "pytest", *argv], cwd=str(ROOT))


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
