# src/roster_keeper/connectors/console_connector.py

from __future__ import annotations

import getpass
import logging
from collections.abc import Callable
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.dispatch import handle_request
from ..core.errors import InvalidRecordError
from ..core.requests import OperationRequest
from ..core.state import AppState
from ..tasks.task_models import TaskResult

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


def print_task_result(result: TaskResult) -> None:
    """Result sink for the worker: print each finished task as it arrives."""
    tag = "WORKER" if result.ok else "WORKER][ERROR"
    _print_ts(f"[{tag}] {result.render()}")


def prompt_add_request(read: InputFn = input, read_secret: InputFn = getpass.getpass) -> OperationRequest | None:
    """Ask for name, age and secret one by one (bare /add or menu choice 1)."""
    name = read("Enter name: ").strip()
    raw_age = read("Enter age: ").strip()
    if not name or not raw_age.isdigit():
        return None
    secret = read_secret("Enter secret: ")
    return OperationRequest.add(name, int(raw_age), secret)


def run_console_loop(state: AppState, *, read: InputFn = input, read_secret: InputFn = getpass.getpass) -> None:
    logger.info("Console started (file=%s).", state.store.path)
    _print_ts("[CONSOLE] Use /help for commands, /exit to quit.\n")

    def emit(text: str) -> None:
        _print_ts(text)

    while True:
        try:
            user_input = read(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        # Bare menu numbers behave like their slash commands ("3" -> "/3").
        if user_input.isdigit():
            user_input = "/" + user_input

        name = command_registry.resolve(user_input)

        try:
            if name == "add" and len(user_input.split()) == 1:
                request = prompt_add_request(read, read_secret)
                reply = handle_request(state, request) if request else "Invalid name or age."
            else:
                reply = command_registry.handle(state, user_input, emit=emit)
        except InvalidRecordError as e:
            reply = f"Invalid record: {e}"
        except (EOFError, KeyboardInterrupt):
            logger.info("Console input closed during prompt, exiting.")
            break
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is None:
            reply = "Commands start with '/'. Use /help to list available commands."
        _print_ts(reply)

        if name == "exit":
            logger.info("Console exit command received.")
            break

    logger.info("Console finished.")
