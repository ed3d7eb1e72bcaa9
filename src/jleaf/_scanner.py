"""
Character scanner for the restricted dialect.

Every input character becomes exactly one token. The scanner knows nothing
about the grammar; it only classifies characters and tracks offsets.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from ._errors import Position
from ._errors import UnexpectedCharacter
from ._errors import UnexpectedEndOfInput
from ._errors import describe_char
from ._profile import ProfileContext


class TokenKind(Enum):
    """Structural category of a single input character."""

    CURLY_OPEN = "{"
    CURLY_CLOSE = "}"
    SQUARE_OPEN = "["
    SQUARE_CLOSE = "]"
    QUOTE = '"'
    COMMA = ","
    COLON = ":"
    WHITESPACE = "whitespace"
    OTHER = "other"
    END = "end"


_STRUCTURAL_KINDS: dict[str, TokenKind] = {
    "{": TokenKind.CURLY_OPEN,
    "}": TokenKind.CURLY_CLOSE,
    "[": TokenKind.SQUARE_OPEN,
    "]": TokenKind.SQUARE_CLOSE,
    '"': TokenKind.QUOTE,
    ",": TokenKind.COMMA,
    ":": TokenKind.COLON,
    " ": TokenKind.WHITESPACE,
    "\t": TokenKind.WHITESPACE,
    "\n": TokenKind.WHITESPACE,
}


@dataclass(frozen=True)
class Token:
    """A classified character and its offset in the input."""

    kind: TokenKind
    char: str
    pos: Position


def classify(char: str) -> TokenKind:
    """Maps a character to its token kind; unknown characters are OTHER."""
    return _STRUCTURAL_KINDS.get(char, TokenKind.OTHER)


def iter_tokens(text: str) -> Iterator[Token]:
    """Lazily yields one token per character, without the END sentinel."""
    for pos, char in enumerate(text):
        yield Token(classify(char), char, pos)


def tokenize(text: str) -> list[Token]:
    """Classifies the whole input up front."""
    with ProfileContext("tokenize", len(text)):
        return list(iter_tokens(text))


class TokenStream:
    """
    Eager token stream with one token of lookahead.

    Reading past the last character yields an END token positioned at
    len(text). END never matches a structural expectation, so grammar code
    fails with UnexpectedEndOfInput instead of running off the input.
    """

    def __init__(self, text: str):
        self.text = text
        self.tokens = tokenize(text)
        self.pos = 0
        self._end = Token(TokenKind.END, "", len(text))

    @property
    def current_offset(self) -> Position:
        return self.pos

    def peek(self) -> Token:
        """Returns the next token without consuming it."""
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return self._end

    def advance(self) -> Token:
        """Consumes and returns the next token."""
        token = self.peek()
        if self.pos < len(self.tokens):
            self.pos += 1
        return token

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def skip_whitespace(self) -> None:
        """Consumes all immediately following whitespace tokens."""
        while (
            self.pos < len(self.tokens)
            and self.tokens[self.pos].kind is TokenKind.WHITESPACE
        ):
            self.pos += 1

    def expect(self, expected_char: str) -> Token:
        """Consumes one token, failing unless its character matches."""
        token = self.advance()
        if token.kind is TokenKind.END:
            raise UnexpectedEndOfInput(self.text, token.pos)
        if token.char != expected_char:
            raise UnexpectedCharacter(
                self.text, token.pos, describe_char(expected_char), token.char
            )
        return token
