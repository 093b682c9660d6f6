"""Run the tictactoe-llm CLI from a checkout, without installing it.

`python -m main serve` starts the move API (POST /move) and
`python -m main move "X,-,-,-,O,-,-,-,-" --offline` resolves one board with
the fallback heuristic. After `pip install -e .` the same commands are
available as `tictactoe-llm ...`.
"""

from __future__ import annotations

import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent / "src"


def main() -> None:
    if str(SRC_DIR) not in sys.path:
        sys.path.insert(0, str(SRC_DIR))

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
