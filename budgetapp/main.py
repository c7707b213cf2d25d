#!/usr/bin/env python3
"""
Budget Buddy CLI

Interactive expense and budget tracker. Type 'help' at the prompt for the command list.
"""
import argparse
import sys
from pathlib import Path
from typing import Iterable, Optional, TextIO

from budgetcore.ledger import BudgetLedger

from budgetapp import config, presenter
from budgetapp.dispatch import CommandDispatcher


def run(lines: Iterable[str], out: TextIO, dispatcher: Optional[CommandDispatcher] = None) -> BudgetLedger:
    """Feed command lines to a dispatcher until 'bye' or the input runs out."""
    dispatcher = dispatcher or CommandDispatcher(BudgetLedger(), config.get_max_amount())
    print(presenter.welcome(), file=out)
    for line in lines:
        if not line.strip():
            continue
        reply = dispatcher.handle_line(line)
        print(reply.text, file=out)
        if reply.exit:
            break
    return dispatcher.ledger


def _prompt_lines():
    while True:
        try:
            yield input("> ")
        except EOFError:
            return


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Track expenses against budgets from the command line")
    ap.add_argument("--env-file", type=Path, help="Read settings from this .env file")
    ap.add_argument("--log-level", help="Logging level (default from BUDGETBUDDY_LOG_LEVEL)")
    ap.add_argument("--log-file", type=Path, help="Write logs to this file instead of stderr")
    args = ap.parse_args(argv)

    config.load_environment(args.env_file)
    config.configure_logging(args.log_level, args.log_file)

    try:
        run(_prompt_lines(), sys.stdout)
    except KeyboardInterrupt:
        print("\n" + presenter.goodbye())
    return 0


if __name__ == "__main__":
    sys.exit(main())
