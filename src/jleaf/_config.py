"""Parse configuration and policy enums."""

from dataclasses import dataclass
from enum import Enum


class DuplicateKeyPolicy(Enum):
    """How an object resolves an attribute name that appears twice."""

    LAST_WINS = "last_wins"
    FIRST_WINS = "first_wins"
    REJECT = "reject"


class ParseStrategy(Enum):
    """Which parser turns the token stream into a tree."""

    RECURSIVE = "recursive"
    SINGLE_PASS = "single_pass"


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures parsing behavior with immutable settings.

    strict rejects non-whitespace content after the root object; the
    default ignores it. duplicate_keys picks the policy for repeated
    attribute names and strategy picks the parser implementation. Both
    strategies produce the same trees and the same error offsets.
    """

    strict: bool = False
    duplicate_keys: DuplicateKeyPolicy = DuplicateKeyPolicy.LAST_WINS
    strategy: ParseStrategy = ParseStrategy.RECURSIVE

    def __post_init__(self) -> None:
        if not isinstance(self.strict, bool):
            raise TypeError("strict must be a boolean")
        if not isinstance(self.duplicate_keys, DuplicateKeyPolicy):
            raise TypeError("duplicate_keys must be a DuplicateKeyPolicy")
        if not isinstance(self.strategy, ParseStrategy):
            raise TypeError("strategy must be a ParseStrategy")
