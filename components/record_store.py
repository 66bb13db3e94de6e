"""
Record store: identifier -> Record map kept in sync with a PrefixIndex.

The map is authoritative for record contents; every prefix query is answered
by the index. Each successful mutation rewrites the whole data file.
"""
import logging
import os
from typing import Dict, List, Optional, Union

from components.config import StoreConfig
from components.record import (
    DuplicateRecordError,
    Record,
    RecordNotFoundError,
)
from components.record_file import check_record, read_records, write_records
from tries.prefix_index import PrefixIndex

logger = logging.getLogger(__name__)


class RecordStore:
    def __init__(self, config: Optional[StoreConfig] = None, autoload: bool = True):
        self.config = config or StoreConfig()
        self.records: Dict[str, Record] = {}
        self.index = PrefixIndex()
        self.unsaved = False
        if autoload:
            self.load()

    def __len__(self):
        return len(self.records)

    def __contains__(self, identifier):
        return identifier in self.records

    ## ----- Persistence ----- ##

    def load(self) -> int:
        """Replace in-memory state with the contents of the data file.

        A missing file leaves the store empty. Read failures are logged and the
        store keeps whatever was read before the failure.
        Returns the number of records loaded.
        """
        self.records = {}
        self.index.clear()
        path = self.config.path
        if not os.path.exists(path):
            logger.info("No data file at %s; starting empty", path)
            return 0
        try:
            for record in read_records(path, self.config):
                self.records[record.identifier] = record
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Error reading data file %s: %s", path, e)
        self.index.insert_many(self.records.keys())
        logger.info("Loaded %d records from %s", len(self.records), path)
        return len(self.records)

    def save(self) -> bool:
        """Rewrite the data file from memory. Returns False if the write failed.

        `unsaved` stays True until a later save succeeds.
        """
        try:
            write_records(self.config.path, self.list_records(), self.config)
        except OSError as e:
            logger.error("Error writing data file %s: %s", self.config.path, e)
            self.unsaved = True
            return False
        self.unsaved = False
        logger.debug("Saved %d records to %s", len(self.records), self.config.path)
        return True

    ## ----- Mutations ----- ##

    def add(self, record: Record) -> Record:
        if not record.identifier:
            raise ValueError("identifier must not be empty")
        if record.identifier in self.records:
            raise DuplicateRecordError(record.identifier)
        check_record(record, self.config)
        self.records[record.identifier] = record
        self.index.insert(record.identifier)
        self.save()
        logger.info("Added record %s", record.identifier)
        return record

    def add_many(self, records) -> int:
        """Add records in bulk with a single save.

        Identifiers already stored and records the data file cannot hold are skipped.
        """
        added = []
        for record in records:
            if record.identifier in self.records:
                logger.warning("Skipping duplicate identifier %s", record.identifier)
                continue
            try:
                check_record(record, self.config)
            except ValueError as e:
                logger.warning("Skipping record %r: %s", record.identifier, e)
                continue
            self.records[record.identifier] = record
            added.append(record.identifier)
        if added:
            self.index.insert_many(added)
            self.save()
        return len(added)

    def update(self, identifier: str, name=None, category=None, score=None) -> Record:
        """Replace the non-blank fields of an existing record. The identifier never changes."""
        current = self.records.get(identifier)
        if current is None:
            raise RecordNotFoundError(identifier)
        record = current.updated(name=name, category=category, score=score)
        check_record(record, self.config)
        self.records[identifier] = record
        self.save()
        logger.info("Updated record %s", identifier)
        return record

    def remove(self, identifier: str) -> Record:
        record = self.records.pop(identifier, None)
        if record is None:
            raise RecordNotFoundError(identifier)
        self.index.delete(identifier)
        self.save()
        logger.info("Removed record %s", identifier)
        return record

    ## ----- Queries ----- ##

    def get(self, identifier: str) -> Optional[Record]:
        return self.records.get(identifier)

    def starts_with(self, prefix: str) -> bool:
        return self.index.starts_with(prefix)

    def suggest(self, prefix: str, k: Optional[int] = None) -> List[str]:
        """Sorted identifiers starting with `prefix` that are present in the store."""
        matches = [i for i in self.index.enumerate_with_prefix(prefix) if i in self.records]
        matches.sort()
        return matches if k is None else matches[:k]

    def resolve(self, text: str) -> Union[Record, List[str]]:
        """Exact match first, then prefix suggestions.

        Returns the Record when `text` is a stored identifier, otherwise the
        sorted identifiers sharing the prefix (empty when nothing matches).
        """
        record = self.records.get(text)
        if record is not None:
            return record
        if self.index.starts_with(text):
            return self.suggest(text)
        return []

    def list_records(self) -> List[Record]:
        return [self.records[i] for i in sorted(self.records)]
