"""
Sales assistant entry point.

Usage:
    Console mode: python main.py console [--tenant A|B|C] [--lang es|en] [--scenario NAME]
    Replay mode:  python main.py replay [--tenant A|B|C] [--lang es|en] [--questions FILE] [--out DIR]
"""

import logging
import sys

from salesbot.config import settings

logger = logging.getLogger(__name__)

USAGE = "Usage: python main.py {console|replay} [options]"


def _run_console_mode(argv: list[str]) -> None:
    """Start the offline console demo (no API keys required)."""
    from console_demo import main as console_main

    console_main(argv)


def _run_replay_mode(argv: list[str]) -> None:
    """Replay scripted questions and write a log file."""
    from salesbot.evaluation.replay import main as replay_main

    replay_main(argv)


if __name__ == "__main__":
    modes = {"console": _run_console_mode, "replay": _run_replay_mode}
    if len(sys.argv) < 2 or sys.argv[1] not in modes:
        sys.stderr.write(USAGE + "\n")
        sys.exit(2)
    logger.debug("Starting %s mode (model=%s)", sys.argv[1], settings.model.chat_model)
    modes[sys.argv[1]](sys.argv[2:])
