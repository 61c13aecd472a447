# src/tasktalk/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.state import AppState
from ..intent.intent_models import Command

logger = logging.getLogger(__name__)

LineReader = Callable[[str], str]
LineWriter = Callable[[str], None]


def run_console_loop(
    state: AppState,
    *,
    read_line: LineReader = input,
    write: LineWriter = print,
) -> None:
    """
    Read a line, parse it, dispatch it, print the result. Repeat until the exit word.

    Every failure inside one iteration is reported as a line of text; the loop
    only ends on the exit word, EOF or Ctrl+C.
    """
    exit_word = str(getattr(state.settings, "exit_word", "exit")).strip().lower()
    app_name = str(getattr(state.settings, "app_name", "tasktalk"))

    logger.info("Console connector started (offline=%s).", state.offline)
    write(f"Welcome to {app_name}, your AI task manager!")
    if state.offline:
        write("[offline] No language model configured; every request lists your tasks.")
    write(f"Type '{exit_word}' to quit.\n")

    while True:
        try:
            user_input = read_line("Enter a command: ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            write("")
            break

        if not user_input:
            continue

        if user_input.lower() == exit_word:
            logger.info("Console exit command received.")
            write("Goodbye!")
            break

        try:
            intent = state.parser.parse(user_input)
            if intent.command == Command.SUMMARY:
                write("Generating summary...")
            reply = state.dispatcher.dispatch(intent)
        except Exception:
            logger.exception("Console handler crashed.")
            reply = "Internal error while handling your request."

        write(reply)

    logger.info("Console connector finished.")
