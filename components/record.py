from dataclasses import dataclass, replace
from typing import Optional


class RecordStoreError(Exception):
    """Base class for record store failures the caller can recover from."""


class DuplicateRecordError(RecordStoreError):
    def __init__(self, identifier):
        super().__init__(f"A record with identifier {identifier} already exists.")
        self.identifier = identifier


class RecordNotFoundError(RecordStoreError):
    def __init__(self, identifier):
        super().__init__(f"Record with identifier {identifier} does not exist.")
        self.identifier = identifier


def parse_score(text) -> float:
    """Parse a user or file supplied score, raising ValueError when it is not numeric."""
    if isinstance(text, (int, float)):
        return float(text)
    text = text.strip()
    if not text:
        raise ValueError("score must not be empty")
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"score must be numeric, got {text!r}") from None


@dataclass
class Record:
    """
    A single stored record.
        identifier: str, unique key indexed by the prefix tree
        name: str, display name
        category: str, free-form category label
        score: float, numeric score
    """
    identifier: str
    name: str
    category: str
    score: float

    def __post_init__(self):
        if not self.identifier:
            raise ValueError("identifier must not be empty")
        self.score = parse_score(self.score)

    def updated(self,
                name: Optional[str] = None,
                category: Optional[str] = None,
                score=None) -> "Record":
        """Return a copy with the given fields replaced; None or blank keeps the current value."""
        changes = {}
        if name is not None and name.strip():
            changes["name"] = name.strip()
        if category is not None and category.strip():
            changes["category"] = category.strip()
        if score is not None and str(score).strip():
            changes["score"] = parse_score(score)
        return replace(self, **changes)

    def as_row(self):
        return {"identifier": self.identifier,
                "name": self.name,
                "category": self.category,
                "score": self.score}
