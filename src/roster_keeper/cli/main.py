# src/roster_keeper/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (which starts the worker thread), runs the
console REPL in the main thread and always joins the worker before exiting.
"""

from __future__ import annotations

import logging
import signal

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import print_task_result, run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings, on_result=print_task_result)

    def _handle_signal(signum, _frame) -> None:
        # input() is blocking; turning the signal into KeyboardInterrupt lets the loop exit.
        logger.info("Signal %s received, shutting down...", signum)
        raise KeyboardInterrupt

    try:
        signal.signal(signal.SIGTERM, _handle_signal)
    except (ValueError, OSError, AttributeError):
        # Not in the main thread, or the platform lacks SIGTERM.
        pass

    try:
        run_console_loop(state)
    finally:
        state.shutdown()
        logger.info("Bye.")


if __name__ == "__main__":
    main()
