"""
Parsers for the restricted dialect.

    json   := '{' ws ( member (',' ws member)* )? ws '}'
    member := ws string ws ':' ws value
    array  := '[' ws ( value (',' ws value)* )? ws ']'
    value  := json | array | string
    string := '"' char* '"'

RecursiveDescentParser maps each production to a method over an eager
TokenStream. SinglePassParser walks the characters once with an explicit
stack of open containers. Both produce the same trees and report the same
offsets; the single-pass form reports a container opened in place of an
attribute name as MissingAttributeName.
"""

from dataclasses import dataclass
from enum import Enum

from ._config import DuplicateKeyPolicy
from ._config import ParseConfig
from ._errors import DuplicateAttribute
from ._errors import ExtraData
from ._errors import MissingAttributeName
from ._errors import Position
from ._errors import UnexpectedCharacter
from ._errors import UnexpectedEndOfInput
from ._errors import describe_char
from ._profile import ProfileContext
from ._scanner import Token
from ._scanner import TokenKind
from ._scanner import TokenStream
from ._scanner import iter_tokens
from ._tree import ArrayBuilder
from ._tree import ArrayElement
from ._tree import Element
from ._tree import LeafElement
from ._tree import ObjectBuilder
from ._tree import ObjectElement

VALUE_START = "'{', '[' or '\"'"


class _TreeAssembler:
    """Builder bookkeeping shared by both parsers."""

    def __init__(self, text: str, config: ParseConfig):
        self.text = text
        self.config = config

    def _new_object(self) -> ObjectBuilder:
        return ObjectBuilder(self.config.duplicate_keys)

    def _add_member(
        self,
        builder: ObjectBuilder,
        name: str,
        name_pos: Position,
        child: Element,
    ) -> None:
        if (
            self.config.duplicate_keys is DuplicateKeyPolicy.REJECT
            and name in builder
        ):
            raise DuplicateAttribute(self.text, name_pos, name)
        builder.add(name, child)

    def _unexpected(self, token: Token, expected: str) -> Exception:
        if token.kind is TokenKind.END:
            return UnexpectedEndOfInput(self.text, token.pos)
        return UnexpectedCharacter(self.text, token.pos, expected, token.char)


class RecursiveDescentParser(_TreeAssembler):
    """
    Recursive descent over a token stream.

    Each grammar production is one method. Errors propagate immediately;
    there is no recovery and no partial tree.
    """

    def __init__(self, stream: TokenStream, config: ParseConfig):
        super().__init__(stream.text, config)
        self.stream = stream

    def parse(self) -> ObjectElement:
        """Parses the root object and applies the trailing content policy."""
        self.stream.skip_whitespace()
        root = self.parse_object()

        if self.config.strict:
            self.stream.skip_whitespace()
            if not self.stream.at_end():
                raise ExtraData(self.text, self.stream.pos)

        return root

    def parse_value(self) -> Element:
        """Dispatches on the next token to an object, array or leaf."""
        token = self.stream.peek()
        match token.kind:
            case TokenKind.CURLY_OPEN:
                return self.parse_object()
            case TokenKind.SQUARE_OPEN:
                return self.parse_array()
            case TokenKind.QUOTE:
                return LeafElement(self.parse_string())
            case _:
                raise self._unexpected(token, VALUE_START)

    def parse_object(self) -> ObjectElement:
        with ProfileContext("parse_object", cursor=self.stream):
            stream = self.stream
            stream.expect("{")
            builder = self._new_object()

            stream.skip_whitespace()
            if stream.peek().kind is TokenKind.CURLY_CLOSE:
                stream.advance()
                return builder.build()

            while True:
                stream.skip_whitespace()
                name_pos = stream.pos
                name = self.parse_string()
                stream.skip_whitespace()
                stream.expect(":")
                stream.skip_whitespace()
                child = self.parse_value()
                self._add_member(builder, name, name_pos, child)

                stream.skip_whitespace()
                if stream.peek().kind is TokenKind.CURLY_CLOSE:
                    stream.advance()
                    return builder.build()
                stream.expect(",")

    def parse_array(self) -> ArrayElement:
        with ProfileContext("parse_array", cursor=self.stream):
            stream = self.stream
            stream.expect("[")
            builder = ArrayBuilder()

            stream.skip_whitespace()
            if stream.peek().kind is TokenKind.SQUARE_CLOSE:
                stream.advance()
                return builder.build()

            while True:
                stream.skip_whitespace()
                builder.append(self.parse_value())

                stream.skip_whitespace()
                if stream.peek().kind is TokenKind.SQUARE_CLOSE:
                    stream.advance()
                    return builder.build()
                stream.expect(",")

    def parse_string(self) -> str:
        """Reads raw characters between two quotes; no escapes exist."""
        with ProfileContext("parse_string", cursor=self.stream):
            stream = self.stream
            stream.expect('"')
            chars: list[str] = []
            while True:
                token = stream.advance()
                if token.kind is TokenKind.QUOTE:
                    return "".join(chars)
                if token.kind is TokenKind.END:
                    raise UnexpectedEndOfInput(self.text, token.pos)
                chars.append(token.char)


class ParseState(Enum):
    """States of the single-pass parser."""

    START = "start"
    OBJECT_START = "object_start"
    OBJECT_KEY = "object_key"
    OBJECT_COLON = "object_colon"
    OBJECT_VALUE = "object_value"
    OBJECT_COMMA = "object_comma"
    ARRAY_START = "array_start"
    ARRAY_VALUE = "array_value"
    ARRAY_COMMA = "array_comma"
    STRING = "string"
    END = "end"


@dataclass
class _Frame:
    """An open container plus the attribute name waiting for its value."""

    builder: ObjectBuilder | ArrayBuilder
    pending_name: str | None = None
    pending_pos: Position = 0


class SinglePassParser(_TreeAssembler):
    """
    Single pass over lazily scanned characters.

    Nesting lives in an explicit stack of frames instead of the call stack,
    so depth is bounded only by memory.
    """

    def __init__(self, text: str, config: ParseConfig):
        super().__init__(text, config)
        self.state = ParseState.START
        self.stack: list[_Frame] = []
        self.root: ObjectElement | None = None
        self._chars: list[str] = []
        self._string_pos: Position = 0
        self._string_is_name = False

    def parse(self) -> ObjectElement:
        with ProfileContext("single_pass", len(self.text)):
            for token in iter_tokens(self.text):
                if self.state is ParseState.STRING:
                    self._on_string_char(token)
                elif token.kind is TokenKind.WHITESPACE:
                    continue
                elif self.state is ParseState.END:
                    if self.config.strict:
                        raise ExtraData(self.text, token.pos)
                    break
                else:
                    self._on_token(token)

        if self.state is not ParseState.END or self.root is None:
            raise UnexpectedEndOfInput(self.text, len(self.text))
        return self.root

    def _on_token(self, token: Token) -> None:  # noqa: PLR0912
        kind = token.kind
        match self.state:
            case ParseState.START:
                if kind is not TokenKind.CURLY_OPEN:
                    raise self._unexpected(token, describe_char("{"))
                self._open(self._new_object(), ParseState.OBJECT_START)

            case ParseState.OBJECT_START | ParseState.OBJECT_KEY:
                if kind is TokenKind.QUOTE:
                    self._begin_string(token, is_name=True)
                elif (
                    kind is TokenKind.CURLY_CLOSE
                    and self.state is ParseState.OBJECT_START
                ):
                    self._close()
                elif kind in (TokenKind.CURLY_OPEN, TokenKind.SQUARE_OPEN):
                    raise MissingAttributeName(
                        self.text, token.pos, token.char
                    )
                else:
                    raise self._unexpected(token, describe_char('"'))

            case ParseState.OBJECT_COLON:
                if kind is not TokenKind.COLON:
                    raise self._unexpected(token, describe_char(":"))
                self.state = ParseState.OBJECT_VALUE

            case (
                ParseState.OBJECT_VALUE
                | ParseState.ARRAY_START
                | ParseState.ARRAY_VALUE
            ):
                if kind is TokenKind.CURLY_OPEN:
                    self._open(self._new_object(), ParseState.OBJECT_START)
                elif kind is TokenKind.SQUARE_OPEN:
                    self._open(ArrayBuilder(), ParseState.ARRAY_START)
                elif kind is TokenKind.QUOTE:
                    self._begin_string(token, is_name=False)
                elif (
                    kind is TokenKind.SQUARE_CLOSE
                    and self.state is ParseState.ARRAY_START
                ):
                    self._close()
                else:
                    raise self._unexpected(token, VALUE_START)

            case ParseState.OBJECT_COMMA:
                if kind is TokenKind.COMMA:
                    self.state = ParseState.OBJECT_KEY
                elif kind is TokenKind.CURLY_CLOSE:
                    self._close()
                else:
                    raise self._unexpected(token, describe_char(","))

            case ParseState.ARRAY_COMMA:
                if kind is TokenKind.COMMA:
                    self.state = ParseState.ARRAY_VALUE
                elif kind is TokenKind.SQUARE_CLOSE:
                    self._close()
                else:
                    raise self._unexpected(token, describe_char(","))

            case ParseState.STRING | ParseState.END:
                raise AssertionError(f"{self.state} is handled by parse()")

    def _begin_string(self, token: Token, is_name: bool) -> None:
        self._chars = []
        self._string_pos = token.pos
        self._string_is_name = is_name
        self.state = ParseState.STRING

    def _on_string_char(self, token: Token) -> None:
        if token.kind is not TokenKind.QUOTE:
            self._chars.append(token.char)
            return

        text = "".join(self._chars)
        if self._string_is_name:
            frame = self.stack[-1]
            frame.pending_name = text
            frame.pending_pos = self._string_pos
            self.state = ParseState.OBJECT_COLON
        else:
            self._attach(LeafElement(text))

    def _open(
        self, builder: ObjectBuilder | ArrayBuilder, state: ParseState
    ) -> None:
        self.stack.append(_Frame(builder))
        self.state = state

    def _close(self) -> None:
        frame = self.stack.pop()
        element = frame.builder.build()
        if self.stack:
            self._attach(element)
            return

        if not isinstance(element, ObjectElement):
            raise AssertionError("the root container must be an object")
        self.root = element
        self.state = ParseState.END

    def _attach(self, child: Element) -> None:
        frame = self.stack[-1]
        if isinstance(frame.builder, ObjectBuilder):
            if frame.pending_name is None:
                raise AssertionError("object member has no attribute name")
            self._add_member(
                frame.builder, frame.pending_name, frame.pending_pos, child
            )
            frame.pending_name = None
            self.state = ParseState.OBJECT_COMMA
        else:
            frame.builder.append(child)
            self.state = ParseState.ARRAY_COMMA
