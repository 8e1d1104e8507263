"""Console shell for the expense tracker.

Reads menu choices and raw values from a text stream, converts them with
``core.parsing`` and hands typed arguments to a :class:`core.ledger.Ledger`.
All printing lives here; the ledger only returns records and sequences.
"""

from __future__ import annotations

import sys
from typing import Callable, Iterable, TextIO

import typer

from core.config import load_settings
from core.domain import Category, Transaction
from core.events import TRANSACTION_ADDED, TRANSACTION_DELETED, Event, EventBus
from core.ledger import Ledger
from core.logging_setup import configure_logging, get_logger
from core.parsing import InputError, parse_amount, parse_date, parse_int, resolve_category
from core.render import format_summary_line, format_transaction

logger = get_logger("cli")

MENU = (
    "1) Add transaction",
    "2) View all transactions",
    "3) Search by category",
    "4) Search by date range",
    "5) Monthly summary",
    "6) Category summary",
    "7) Delete by ID",
    "8) Exit",
)
EXIT_CHOICE = 8


class Shell:

    def __init__(self, ledger: Ledger, stdin: TextIO, stdout: TextIO):
        self.ledger = ledger
        self._in = stdin
        self._out = stdout
        self._actions: dict[int, Callable[[], None]] = {
            1: self.add_transaction,
            2: self.show_all,
            3: self.search_category,
            4: self.search_date_range,
            5: self.show_monthly_summary,
            6: self.show_category_summary,
            7: self.delete_by_id,
        }

    # --- io helpers

    def say(self, text: str = "", end: str = "\n") -> None:
        self._out.write(text + end)

    def ask(self, prompt: str = "") -> str:
        if prompt:
            self.say(prompt, end="")
        self._out.flush()
        line = self._in.readline()
        if not line:
            raise EOFError
        return line.rstrip("\r\n")

    def read_int(self) -> int:
        line = self.ask()
        while True:
            try:
                return parse_int(line)
            except InputError:
                line = self.ask("Enter a number: ")

    def read_amount(self):
        line = self.ask()
        while True:
            try:
                return parse_amount(line)
            except InputError:
                line = self.ask("Enter a decimal: ")

    def choose_category(self, title: str) -> Category:
        self.say(title)
        for i, c in enumerate(Category, start=1):
            self.say(f"{i}. {c}")
        return resolve_category(self.read_int())

    def print_transactions(self, trans: Iterable[Transaction], empty_message: str) -> None:
        shown = 0
        for t in trans:
            self.say(format_transaction(t))
            shown += 1
        if not shown:
            self.say(empty_message)

    # --- menu loop

    def run(self) -> int:
        try:
            while True:
                self.say()
                self.say("=== Expense Tracker ===")
                for line in MENU:
                    self.say(line)
                self.say("Pick option: ", end="")
                option = self.read_int()
                if option == EXIT_CHOICE:
                    self.say("Goodbye!")
                    return 0
                action = self._actions.get(option)
                if action is None:
                    self.say("Invalid choice.")
                else:
                    action()
        except EOFError:
            logger.debug("input closed, leaving menu loop")
            return 0

    # --- actions

    def add_transaction(self) -> None:
        try:
            on = parse_date(self.ask("Enter date (YYYY-MM-DD): "))
        except InputError as e:
            logger.info("rejected date: %s", e)
            self.say("Invalid date format.")
            return

        self.say("Amount: ", end="")
        amount = self.read_amount()
        category = self.choose_category("Choose category:")
        note = self.ask("Description: ")

        t = self.ledger.add(on, amount, category, note)
        self.say(f"Added transaction with id {t.id}")

    def show_all(self) -> None:
        self.print_transactions(self.ledger.all(), "No data yet.")

    def search_category(self) -> None:
        category = self.choose_category("Pick a category:")
        self.print_transactions(self.ledger.by_category(category), f"No records for {category}")

    def search_date_range(self) -> None:
        try:
            start = parse_date(self.ask("Start date: "))
            end = parse_date(self.ask("End date: "))
        except InputError as e:
            logger.info("rejected date: %s", e)
            self.say("Bad date input.")
            return
        self.print_transactions(self.ledger.by_date_range(start, end), "No records in range.")

    def show_monthly_summary(self) -> None:
        rows = list(self.ledger.monthly_summary())
        if not rows:
            self.say("Nothing recorded.")
            return
        for ym, total in rows:
            self.say(format_summary_line(ym, total))

    def show_category_summary(self) -> None:
        for category, total in self.ledger.category_summary():
            self.say(format_summary_line(category, total))

    def delete_by_id(self) -> None:
        self.say("Enter id to delete: ", end="")
        tx_id = self.read_int()
        result = self.ledger.delete_by_id(tx_id)
        if result.is_none():
            logger.info("delete of unknown id %s", tx_id)
            self.say("Not found.")
            return
        self.say(f"Deleted {tx_id}")


def log_event(event: Event) -> None:
    t = event.payload["transaction"]
    logger.debug("%s %s", event.name, format_transaction(t))


def build_ledger() -> Ledger:
    events = EventBus()
    events.subscribe(TRANSACTION_ADDED, log_event)
    events.subscribe(TRANSACTION_DELETED, log_event)
    return Ledger(events)


app = typer.Typer(
    add_completion=False,
    help="Record expenses and browse them by date, category and month.",
)


@app.command()
def run(
    log_level: str | None = typer.Option(
        None, "--log-level", help="Logging level (falls back to EXPENSE_TRACKER_LOG_LEVEL)."
    ),
) -> None:
    """Start the interactive menu."""
    settings = load_settings()
    configure_logging(log_level or settings.log_level)
    shell = Shell(build_ledger(), sys.stdin, sys.stdout)
    raise typer.Exit(shell.run())


def main() -> None:
    app()


if __name__ == "__main__":
    main()
