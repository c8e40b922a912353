"""
main.py — Entry point.

Run with:
    python main.py

Requires:
    pip install pygame httpx
"""

import logging

from snakolek.config import LOG_LEVEL
from snakolek.controller import GameController


def main() -> None:
    logging.basicConfig(
        level=LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    GameController().run()


if __name__ == "__main__":
    main()
