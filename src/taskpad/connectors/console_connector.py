# src/taskpad/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import add_from_text
from ..cli.commands import registry as command_registry
from ..core.notices import Notice, NoticeSeverity
from ..core.state import AppState
from ..tasks.task_api import render_view
from ..tasks.task_errors import TaskError

logger = logging.getLogger(__name__)

_NOTICE_PREFIX = {
    NoticeSeverity.ERROR: "[!] ",
    NoticeSeverity.SUCCESS: "✓ ",
}


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def _print_notice(notice: Notice) -> None:
    _print_ts(_NOTICE_PREFIX.get(notice.severity, "") + notice.message)


def ask_yes_no(question: str) -> bool:
    try:
        answer = input(f"{question} [y/N]: ").strip().lower()
    except (EOFError, KeyboardInterrupt):
        print()
        return False
    return answer in ("y", "yes")


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    state.notices.subscribe(_print_notice)

    _print_ts("[CONSOLE] Type a task to add it. Use /help for commands. Use /exit to quit.\n")
    print(render_view(state))

    while True:
        try:
            user_input = input("\n> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = command_registry.handle(state, user_input, confirm=ask_yes_no)
            if reply is None:
                reply = add_from_text(state, user_input)
        except TaskError as e:
            state.notices.error(str(e))
            continue
        except Exception:
            logger.exception("Command handler crashed.")
            _print_ts("Internal error while handling a command.")
            continue

        if reply:
            print(reply)

    logger.info("Console connector finished.")
