"""Parse error taxonomy."""

from typing import TypeAlias

from ._utf8_mapper import UTF8PositionMapper

Position: TypeAlias = int


def describe_char(char: str) -> str:
    """Renders a raw character for error messages."""
    if not char:
        return "end of input"
    return repr(char)


class ParseError(ValueError):
    """
    Handles parsing failures with precise position and context information.

    Carries the character offset of the failure plus the line and column
    numbers and the UTF-8 byte offset derived from it, so callers can point
    at the offending input whichever form they hold it in.
    """

    def __init__(self, msg: str, doc: str = "", pos: Position = 0) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg
        self.doc = doc
        self.pos = pos

        self.lineno = doc.count("\n", 0, pos) + 1 if doc else 1
        self.colno = pos - doc.rfind("\n", 0, pos) if doc else pos + 1
        self.byte_pos = UTF8PositionMapper(doc).char_to_byte(pos)

        super().__init__(
            f"{msg} at line {self.lineno}, column {self.colno} (char {pos})"
        )


class UnexpectedCharacter(ParseError):
    """A structural character did not match what the grammar expects."""

    def __init__(
        self,
        doc: str,
        pos: Position,
        expected: str,
        actual: str,
        msg: str | None = None,
    ) -> None:
        self.expected = expected
        self.actual = actual
        if msg is None:
            msg = f"Expecting {expected}, got {describe_char(actual)}"
        super().__init__(msg, doc, pos)


class MissingAttributeName(UnexpectedCharacter):
    """A nested value opened where an object expects an attribute name."""

    def __init__(self, doc: str, pos: Position, actual: str) -> None:
        super().__init__(
            doc,
            pos,
            describe_char('"'),
            actual,
            msg="Missing attribute name before nested value",
        )


class UnexpectedEndOfInput(ParseError):
    """The input ended while a production was still incomplete."""

    def __init__(self, doc: str, pos: Position) -> None:
        super().__init__("Unexpected end of input", doc, pos)


class ExtraData(ParseError):
    """Non-whitespace content follows the root object in strict mode."""

    def __init__(self, doc: str, pos: Position) -> None:
        super().__init__("Extra data", doc, pos)


class DuplicateAttribute(ParseError):
    """An object repeats an attribute name under the REJECT policy."""

    def __init__(self, doc: str, pos: Position, name: str) -> None:
        self.name = name
        super().__init__(f"Duplicate attribute name {name!r}", doc, pos)
