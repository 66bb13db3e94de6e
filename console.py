#!/usr/bin/env python3
"""
Interactive console for the record store.

Usage:
    record-trie [--data PATH] [--seed N] [--log-level LEVEL]

Menu:
    1. Add new record
    2. Search record (full identifier or prefix)
    3. Update existing record
    4. Remove record
    5. List all records
    0. Quit
"""
import argparse
import logging
import sys

from components.config import StoreConfig
from components.record import Record, RecordStoreError, parse_score
from components.record_store import RecordStore
from components.work_loads import WorkLoad

logger = logging.getLogger(__name__)

MENU = """
--- Record Management Menu ---
1. Add new record
2. Search record
3. Update existing record
4. Remove record
5. List all records
0. Quit"""


class Console:
    def __init__(self, store: RecordStore, stdin=None, stdout=None):
        self.store = store
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def say(self, text=""):
        print(text, file=self.stdout)

    def ask(self, prompt):
        """Prompt and return the stripped reply; None at end of input."""
        self.stdout.write(prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            return None
        return line.strip()

    def show(self, record: Record):
        self.say()
        self.say(f"Identifier: {record.identifier}")
        self.say(f"Name:       {record.name}")
        self.say(f"Category:   {record.category}")
        self.say(f"Score:      {record.score}")
        self.say()

    def choose(self, text, action):
        """Map user input to a stored identifier, offering prefix suggestions.

        Returns the chosen identifier, or None if nothing was chosen (a message
        has already been shown in that case).
        """
        result = self.store.resolve(text) if text else []
        if isinstance(result, Record):
            return result.identifier
        if not text or not self.store.starts_with(text):
            self.say(f"Record with identifier {text} does not exist.")
            return None
        if not result:
            self.say("No records match the given prefix.")
            return None
        self.say("Did you mean one of the following?")
        for i, identifier in enumerate(result, start=1):
            self.say(f"{i}. {identifier}")
        reply = self.ask("Enter number of choice (or 0 to cancel): ")
        try:
            choice = int(reply or "")
        except ValueError:
            self.say("Invalid selection.")
            return None
        if 0 < choice <= len(result):
            return result[choice - 1]
        if choice == 0:
            self.say(f"{action} cancelled.")
        else:
            self.say("Invalid selection.")
        return None

    def done(self, message):
        """Report a finished mutation, or that it only lives in memory."""
        if self.store.unsaved:
            self.say(f"Warning: changes could not be written to {self.store.config.path}; "
                     "they are kept for this session only.")
        else:
            self.say(message)

    ## ----- Menu actions ----- ##

    def add_record(self):
        identifier = self.ask("Enter identifier: ") or ""
        if not identifier:
            self.say("Identifier cannot be empty.")
            return
        if identifier in self.store:
            self.say(f"A record with identifier {identifier} already exists.")
            return
        name = self.ask("Enter name: ") or ""
        if not name:
            self.say("Name cannot be empty.")
            return
        category = self.ask("Enter category: ") or ""
        try:
            score = parse_score(self.ask("Enter score (e.g. 17.5): ") or "")
        except ValueError:
            self.say("Invalid score. Please enter a numeric value.")
            return
        try:
            self.store.add(Record(identifier, name, category, score))
        except ValueError as e:
            self.say(f"Record not added: {e}.")
            return
        except RecordStoreError as e:
            self.say(str(e))
            return
        self.done("Record added successfully.")

    def search_record(self):
        text = self.ask("Enter identifier (full or prefix): ") or ""
        identifier = self.choose(text, "Search")
        if identifier is not None:
            self.show(self.store.get(identifier))

    def update_record(self):
        text = self.ask("Enter identifier to update (full or prefix): ") or ""
        identifier = self.choose(text, "Update")
        if identifier is None:
            return
        current = self.store.get(identifier)
        self.say(f"Updating record: {identifier}")
        name = self.ask(f"Enter new name (leave blank to keep current: {current.name}): ")
        category = self.ask(f"Enter new category (leave blank to keep current: {current.category}): ")
        score = self.ask(f"Enter new score (leave blank to keep current: {current.score}): ")
        if score:
            try:
                parse_score(score)
            except ValueError:
                self.say("Invalid score. Keeping current value.")
                score = None
        try:
            self.store.update(identifier, name=name, category=category, score=score)
        except ValueError as e:
            self.say(f"Record not updated: {e}.")
            return
        except RecordStoreError as e:
            self.say(str(e))
            return
        self.done("Record updated successfully.")

    def remove_record(self):
        text = self.ask("Enter identifier to remove (full or prefix): ") or ""
        identifier = self.choose(text, "Removal")
        if identifier is None:
            return
        try:
            self.store.remove(identifier)
        except RecordStoreError as e:
            self.say(str(e))
            return
        self.done("Record removed successfully.")

    def list_records(self):
        records = self.store.list_records()
        if not records:
            self.say("No records registered.")
            return
        self.say("--- Record List (sorted by identifier) ---")
        for record in records:
            self.show(record)

    def run(self):
        actions = {
            1: self.add_record,
            2: self.search_record,
            3: self.update_record,
            4: self.remove_record,
            5: self.list_records,
        }
        while True:
            self.say(MENU)
            reply = self.ask("Enter your choice: ")
            if reply is None:
                break
            try:
                choice = int(reply)
            except ValueError:
                self.say("Invalid input. Please enter a number from 0 to 5.")
                continue
            if choice == 0:
                break
            action = actions.get(choice)
            if action is None:
                self.say("Unknown choice. Please select between 0 and 5.")
                continue
            action()
        if not self.store.save():
            self.say(f"Warning: changes could not be written to {self.store.config.path}.")
        self.say("Goodbye!")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="record-trie",
        description="Manage records with prefix autocomplete on identifiers.")
    parser.add_argument("--data", default=StoreConfig.path,
                        help="data file (default: %(default)s)")
    parser.add_argument("--seed", type=int, default=0, metavar="N",
                        help="generate N sample records when the store is empty")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format='%(asctime)s %(levelname)s: %(message)s')
    try:
        store = RecordStore(StoreConfig(path=args.data))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    if args.seed > 0 and len(store) == 0:
        added = store.add_many(WorkLoad().records(args.seed))
        logger.info("Seeded %d sample records", added)
    Console(store).run()
    return 0


if __name__ == '__main__':
    sys.exit(main())
