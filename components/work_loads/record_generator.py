import random
import string
from typing import Optional, Sequence, Tuple
from dataclasses import dataclass
from faker import Faker

from components.record import Record

## === Config Class === ##

DEFAULT_CATEGORIES = (
    "Computer Science", "Mathematics", "Physics",
    "Chemistry", "Biology", "Economics", "Literature",
)


@dataclass
class RecordConfig:
    """
    Configuration for RecordGenerator
        id_length: int, characters per identifier
        id_alphabet: str, characters identifiers are drawn from
        prefix_share: float, probability an identifier reuses a prefix of an earlier one
        categories: sequence of category labels to sample from
        score_range: (low, high) bounds for uniformly sampled scores
        seed: int, seed for random number generator
    """
    id_length: int = 8
    id_alphabet: str = string.digits
    prefix_share: float = 0.5
    categories: Optional[Sequence[str]] = None
    score_range: Tuple[float, float] = (0.0, 20.0)
    seed: Optional[int] = None

    def __post_init__(self):
        if self.id_length < 1:
            raise ValueError("id_length must be positive")
        if len(set(self.id_alphabet)) < 2:
            raise ValueError("id_alphabet needs at least two distinct characters")
        if not 0.0 <= self.prefix_share < 1.0:
            raise ValueError("prefix_share must be between 0 and 1")
        if self.categories is None:
            self.categories = DEFAULT_CATEGORIES
        elif not self.categories:
            raise ValueError("categories must not be empty")
        low, high = self.score_range
        if low > high:
            raise ValueError("score_range low bound exceeds high bound")

    @property
    def capacity(self):
        return len(set(self.id_alphabet)) ** self.id_length


class RecordGenerator:
    def __init__(self, config: RecordConfig):
        self.config = config
        self.rng = random.Random(self.config.seed)
        self.alphabet = sorted(set(self.config.id_alphabet))

        self.fake = Faker()
        if self.config.seed is not None:
            self.fake.seed_instance(self.config.seed)
        self.issued = []
        self.seen = set()

    def reserve(self, identifiers):
        """Mark identifiers as taken so they are never generated."""
        for identifier in identifiers:
            if identifier and identifier not in self.seen:
                self.seen.add(identifier)
                self.issued.append(identifier)

    def _identifier(self):
        n = self.config.id_length
        if n > 1 and self.issued and self.rng.random() < self.config.prefix_share:
            # share a leading run with an earlier identifier
            base = self.rng.choice(self.issued)[:n]
            keep = self.rng.randint(1, min(len(base), n - 1))
            head = base[:keep]
        else:
            head = ""
        tail = "".join(self.rng.choices(self.alphabet, k=n - len(head)))
        return head + tail

    def _unique_identifier(self, max_tries=1000):
        if len(self.seen) >= self.config.capacity:
            raise ValueError("identifier space exhausted")
        for _ in range(max_tries):
            identifier = self._identifier()
            if identifier and identifier not in self.seen:
                self.seen.add(identifier)
                self.issued.append(identifier)
                return identifier
        raise ValueError(f"no unused identifier found after {max_tries} tries")

    def single(self):
        low, high = self.config.score_range
        return Record(
            identifier=self._unique_identifier(),
            name=self.fake.name(),
            category=self.rng.choice(list(self.config.categories)),
            score=round(self.rng.uniform(low, high), 2),
        )

    def batch(self, n):
        if n <= 0:
            raise ValueError("n must be positive")
        return [self.single() for _ in range(n)]
