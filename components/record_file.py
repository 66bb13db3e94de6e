"""Line codec and whole-file reads/writes for the record data file.

File layout: one record per line, fields in the order
identifier, name, category, score, joined by `StoreConfig.delimiter`.
Blank lines, comment lines and malformed lines are skipped on read.
"""
import logging
import os

from components.config import StoreConfig
from components.record import Record

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = StoreConfig()


def parse_line(line, config=DEFAULT_CONFIG):
  """Return the Record encoded on `line`, or None when the line carries no record."""
  line = line.strip()
  if not line or line.startswith(config.comment):
    return None
  parts = line.split(config.delimiter)
  if len(parts) != len(config.fields):
    return None
  identifier, name, category, score = parts
  if not identifier:
    return None
  try:
    return Record(identifier, name, category, score)
  except ValueError:
    return None


def check_record(record, config=DEFAULT_CONFIG):
  """Raise ValueError if `record` would not survive a write followed by a read.

  The line format cannot hold the delimiter or line breaks inside a field,
  an identifier starting with the comment marker (read back as a comment),
  or an identifier with surrounding whitespace (stripped on read).
  """
  for field, value in zip(config.fields, (record.identifier, record.name, record.category)):
    if config.delimiter in value:
      raise ValueError(f"{field} must not contain {config.delimiter!r}")
    if "\n" in value or "\r" in value:
      raise ValueError(f"{field} must not contain line breaks")
  if record.identifier != record.identifier.strip():
    raise ValueError("identifier must not start or end with whitespace")
  if record.identifier.startswith(config.comment):
    raise ValueError(f"identifier must not start with {config.comment!r}")


def format_line(record, config=DEFAULT_CONFIG):
  return config.delimiter.join((
    record.identifier,
    record.name,
    record.category,
    f"{record.score:.{config.score_decimals}f}",
  ))


def read_records(path, config=DEFAULT_CONFIG):
  """Yield every parseable record in `path`, in file order.

  Raises
  ------
  OSError
      If the file cannot be opened or read. A missing file is the
      caller's concern (see `RecordStore.load`).
  """
  with open(path, "r", encoding="utf-8") as f:
    for lineno, line in enumerate(f, start=1):
      record = parse_line(line, config)
      if record is None:
        if line.strip() and not line.strip().startswith(config.comment):
          logger.debug("Skipping malformed line %d in %s", lineno, path)
        continue
      yield record


def write_records(path, records, config=DEFAULT_CONFIG):
  """Overwrite `path` with a header comment followed by one line per record."""
  directory = os.path.dirname(os.path.abspath(path))
  os.makedirs(directory, exist_ok=True)
  with open(path, "w", encoding="utf-8") as f:
    f.write(config.header + "\n")
    for record in records:
      f.write(format_line(record, config) + "\n")
