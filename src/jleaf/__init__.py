"""
Micro-parser for a restricted JSON dialect.

Documents are objects, arrays and double-quoted string leaves only. There
are no numbers, literals or escape sequences. parse() turns text into an
immutable element tree that can be navigated with get()/value() and
rendered back to canonical text with serialize().
"""

import logging
from typing import IO
from typing import Any

from ._config import DuplicateKeyPolicy
from ._config import ParseConfig
from ._config import ParseStrategy
from ._errors import DuplicateAttribute
from ._errors import ExtraData
from ._errors import MissingAttributeName
from ._errors import ParseError
from ._errors import UnexpectedCharacter
from ._errors import UnexpectedEndOfInput
from ._parser import ParseState
from ._parser import RecursiveDescentParser
from ._parser import SinglePassParser
from ._profile import HotPathStats
from ._profile import ProfileContext
from ._profile import clear_hot_path_stats
from ._profile import get_hot_path_stats
from ._scanner import Token
from ._scanner import TokenKind
from ._scanner import TokenStream
from ._scanner import classify
from ._scanner import iter_tokens
from ._scanner import tokenize
from ._tree import ArrayBuilder
from ._tree import ArrayElement
from ._tree import Element
from ._tree import LeafElement
from ._tree import ObjectBuilder
from ._tree import ObjectElement
from ._tree import PythonValue
from ._tree import from_python
from ._tree import render

__version__ = "0.1.0"

logger = logging.getLogger(__name__)


def _parse_document(text: str, config: ParseConfig) -> ObjectElement:
    with ProfileContext("parse", len(text)):
        if config.strategy is ParseStrategy.SINGLE_PASS:
            return SinglePassParser(text, config).parse()
        return RecursiveDescentParser(TokenStream(text), config).parse()


def parse(text: str, **kwargs: Any) -> ObjectElement:
    """
    Parses a document into an element tree.

    Keyword arguments configure a ParseConfig. Parsing is all-or-nothing:
    any structural error raises a ParseError subclass carrying the offset.
    """
    if not isinstance(text, str):
        msg = f"the document must be str, not {type(text).__name__}"
        raise TypeError(msg)

    config = ParseConfig(**kwargs)
    try:
        root = _parse_document(text, config)
    except ParseError as e:
        logger.debug("parse failed: %s", e)
        raise

    logger.debug(
        "parsed %d chars into %d members (%s)",
        len(text),
        len(root),
        config.strategy.value,
    )
    return root


def loads(text: str, **kwargs: Any) -> dict[str, PythonValue]:
    """Parses a document straight into dicts, lists and strings."""
    return parse(text, **kwargs).to_python()


def load(fp: IO[str], **kwargs: Any) -> dict[str, PythonValue]:
    """
    Parses a document from a text file-like object.
    """
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    return loads(fp.read(), **kwargs)


def dumps(obj: Any) -> str:
    """
    Renders an element, or plain Python data, in canonical form.

    Plain data goes through from_python, so non-string leaves and strings
    containing a double quote are rejected.
    """
    return render(from_python(obj))


def dump(obj: Any, fp: IO[str]) -> None:
    """
    Writes the canonical form of obj to a text file-like object.
    """
    if not hasattr(fp, "write"):
        raise TypeError("fp must have a write() method")

    fp.write(dumps(obj))


__all__ = [
    "ArrayBuilder",
    "ArrayElement",
    "DuplicateAttribute",
    "DuplicateKeyPolicy",
    "Element",
    "ExtraData",
    "HotPathStats",
    "LeafElement",
    "MissingAttributeName",
    "ObjectBuilder",
    "ObjectElement",
    "ParseConfig",
    "ParseError",
    "ParseState",
    "ParseStrategy",
    "RecursiveDescentParser",
    "SinglePassParser",
    "Token",
    "TokenKind",
    "TokenStream",
    "UnexpectedCharacter",
    "UnexpectedEndOfInput",
    "classify",
    "clear_hot_path_stats",
    "dump",
    "dumps",
    "from_python",
    "get_hot_path_stats",
    "iter_tokens",
    "load",
    "loads",
    "parse",
    "render",
    "tokenize",
]
