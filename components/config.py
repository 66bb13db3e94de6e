from dataclasses import dataclass

## === Store Config === ##

@dataclass(frozen=True)
class StoreConfig:
    """
    Configuration for RecordStore
        path: str, flat file holding one record per line
        delimiter: str, single character separating the fields
        comment: str, marker for lines skipped on load
        score_decimals: int, digits after the decimal point when saving scores
    """
    path: str = "records.csv"
    delimiter: str = ";"
    comment: str = "#"
    score_decimals: int = 2

    def __post_init__(self):
        if not self.path:
            raise ValueError("path must not be empty")
        if len(self.delimiter) != 1:
            raise ValueError("delimiter must be a single character")
        if self.delimiter.isspace():
            raise ValueError("delimiter must not be whitespace")
        if not self.comment:
            raise ValueError("comment marker must not be empty")
        if self.score_decimals < 0:
            raise ValueError("score_decimals must be non-negative")

    @property
    def fields(self):
        return ("identifier", "name", "category", "score")

    @property
    def header(self):
        return f"{self.comment} {self.delimiter.join(self.fields)}"
