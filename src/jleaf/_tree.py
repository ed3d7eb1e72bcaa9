"""
Tree model for parsed documents.

An element is one of three frozen shapes: ObjectElement, ArrayElement or
LeafElement. Every consumer matches over the closed union, so adding a
shape means updating each match. Parsers assemble nodes through the
builders below; a builder is consumed by build() and the resulting
element can no longer change.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import TypeAlias
from typing import assert_never

from ._config import DuplicateKeyPolicy
from ._profile import ProfileContext

Key: TypeAlias = str | int
PythonValue: TypeAlias = str | list["PythonValue"] | dict[str, "PythonValue"]


@dataclass(frozen=True, eq=False)
class ObjectElement:
    """
    Mapping from attribute name to child element.

    Names are unique. Rendering follows insertion order, equality does not.
    Children are built before their parent, so the hash is computed once
    from the children's cached hashes.
    """

    members: tuple[tuple[str, "Element"], ...] = ()
    _index: dict[str, "Element"] = field(
        init=False, repr=False, compare=False
    )
    _hash: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index = dict(self.members)
        if len(index) != len(self.members):
            raise ValueError("attribute names must be unique")
        object.__setattr__(self, "_index", index)
        object.__setattr__(self, "_hash", hash(frozenset(index.items())))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ObjectElement):
            return NotImplemented
        return _same_tree(self, other)

    def __hash__(self) -> int:
        return self._hash

    def __len__(self) -> int:
        return len(self.members)

    def __iter__(self) -> Iterator[str]:
        return iter(self._index)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __str__(self) -> str:
        return self.serialize()

    def keys(self) -> list[str]:
        return [name for name, _ in self.members]

    def items(self) -> list[tuple[str, "Element"]]:
        return list(self.members)

    def get(self, key: Key) -> "Element | None":
        """Looks up a child by attribute name; positions never match."""
        if not isinstance(key, str):
            return None
        return self._index.get(key)

    def value(self) -> str | None:
        return None

    def serialize(self) -> str:
        return render(self)

    def to_python(self) -> dict[str, PythonValue]:
        return to_python(self)  # type: ignore[return-value]


@dataclass(frozen=True, eq=False)
class ArrayElement:
    """Ordered sequence of child elements."""

    children: tuple["Element", ...] = ()
    _hash: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_hash", hash(self.children))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ArrayElement):
            return NotImplemented
        return _same_tree(self, other)

    def __hash__(self) -> int:
        return self._hash

    def __len__(self) -> int:
        return len(self.children)

    def __iter__(self) -> Iterator["Element"]:
        return iter(self.children)

    def __str__(self) -> str:
        return self.serialize()

    def get(self, key: Key) -> "Element | None":
        """
        Looks up a child by position.

        Attribute names, booleans, negative and out of range positions are
        all "not found".
        """
        if isinstance(key, bool) or not isinstance(key, int):
            return None
        if 0 <= key < len(self.children):
            return self.children[key]
        return None

    def value(self) -> str | None:
        return None

    def serialize(self) -> str:
        return render(self)

    def to_python(self) -> list[PythonValue]:
        return to_python(self)  # type: ignore[return-value]


@dataclass(frozen=True)
class LeafElement:
    """A single string value with no children."""

    text: str

    def __str__(self) -> str:
        return self.serialize()

    def get(self, key: Key) -> "Element | None":
        return None

    def value(self) -> str | None:
        return self.text

    def serialize(self) -> str:
        return render(self)

    def to_python(self) -> str:
        return self.text


Element: TypeAlias = ObjectElement | ArrayElement | LeafElement

ELEMENT_TYPES = (ObjectElement, ArrayElement, LeafElement)


class ObjectBuilder:
    """Collects members for one object until build() freezes them."""

    def __init__(
        self, duplicate_keys: DuplicateKeyPolicy = DuplicateKeyPolicy.LAST_WINS
    ):
        self.duplicate_keys = duplicate_keys
        self._members: dict[str, Element] | None = {}

    def _live(self) -> dict[str, Element]:
        if self._members is None:
            raise RuntimeError("builder has already been built")
        return self._members

    def __contains__(self, name: str) -> bool:
        return name in self._live()

    def add(self, name: str, child: Element) -> None:
        """
        Stores a member, resolving repeated names by the builder's policy.

        LAST_WINS replaces the value but keeps the position of the first
        occurrence. REJECT raises ValueError; parsers check for duplicates
        first so they can raise DuplicateAttribute with the offset.
        """
        members = self._live()
        if name in members:
            if self.duplicate_keys is DuplicateKeyPolicy.FIRST_WINS:
                return
            if self.duplicate_keys is DuplicateKeyPolicy.REJECT:
                raise ValueError(f"Duplicate attribute name {name!r}")
        members[name] = child

    def build(self) -> ObjectElement:
        members = self._live()
        self._members = None
        return ObjectElement(tuple(members.items()))


class ArrayBuilder:
    """Collects children for one array until build() freezes them."""

    def __init__(self) -> None:
        self._children: list[Element] | None = []

    def _live(self) -> list[Element]:
        if self._children is None:
            raise RuntimeError("builder has already been built")
        return self._children

    def append(self, child: Element) -> None:
        self._live().append(child)

    def build(self) -> ArrayElement:
        children = self._live()
        self._children = None
        return ArrayElement(tuple(children))


def _same_tree(left: Element, right: Element) -> bool:
    """Compares two trees pairwise with an explicit stack of open nodes."""
    pending: list[tuple[Element, Element]] = [(left, right)]
    while pending:
        a, b = pending.pop()
        if a is b:
            continue
        if hash(a) != hash(b):
            return False
        match a:
            case LeafElement(text=text):
                if not isinstance(b, LeafElement) or text != b.text:
                    return False
            case ArrayElement(children=children):
                if not isinstance(b, ArrayElement):
                    return False
                if len(children) != len(b.children):
                    return False
                pending.extend(zip(children, b.children))
            case ObjectElement():
                if not isinstance(b, ObjectElement):
                    return False
                if a._index.keys() != b._index.keys():
                    return False
                pending.extend(
                    (child, b._index[name]) for name, child in a._index.items()
                )
            case _:
                assert_never(a)
    return True


def _render_into(element: Element, out: list[str]) -> None:
    # Separators and closing brackets wait on the stack beside the children
    pending: list[Element | str] = [element]
    while pending:
        item = pending.pop()
        match item:
            case str():
                out.append(item)
            case LeafElement(text=text):
                out.append(f'"{text}"')
            case ArrayElement(children=children):
                out.append("[")
                pending.append("]")
                for i in reversed(range(len(children))):
                    pending.append(children[i])
                    if i:
                        pending.append(", ")
            case ObjectElement(members=members):
                out.append("{")
                pending.append("}")
                for i in reversed(range(len(members))):
                    name, child = members[i]
                    pending.append(child)
                    pending.append(f'"{name}":')
                    if i:
                        pending.append(", ")
            case _:
                assert_never(item)


def render(element: Element) -> str:
    """
    Renders the canonical text form of an element.

    Objects render as {"k1":v1, "k2":v2}, arrays as [v1, v2] and leaves as
    their quoted text. Strings are written as-is since the dialect has no
    escapes. Nesting depth is limited only by memory.
    """
    out: list[str] = []
    with ProfileContext("render"):
        _render_into(element, out)
    return "".join(out)


def _empty_value(element: Element) -> PythonValue:
    match element:
        case LeafElement(text=text):
            return text
        case ArrayElement():
            return []
        case ObjectElement():
            return {}
        case _:
            assert_never(element)


def to_python(element: Element) -> PythonValue:
    """
    Converts a tree into plain dicts, lists and strings.

    Containers are created empty and filled from an explicit stack, so deep
    trees do not hit the interpreter's recursion limit.
    """
    result = _empty_value(element)
    pending: list[tuple[Element, Any]] = [(element, result)]
    while pending:
        node, target = pending.pop()
        match node:
            case LeafElement():
                pass
            case ArrayElement(children=children):
                for child in children:
                    value = _empty_value(child)
                    target.append(value)
                    pending.append((child, value))
            case ObjectElement(members=members):
                for name, child in members:
                    value = _empty_value(child)
                    target[name] = value
                    pending.append((child, value))
            case _:
                assert_never(node)
    return result


def _check_representable(text: str, what: str) -> str:
    if '"' in text:
        msg = f"{what} {text!r} contains a double quote, which has no escape"
        raise ValueError(msg)
    return text


def from_python(obj: Any) -> Element:
    """
    Builds a tree from plain Python data.

    Accepts str, dict with str keys, list and tuple, nested arbitrarily.
    Existing elements are returned unchanged.
    """
    if isinstance(obj, ELEMENT_TYPES):
        return obj
    if isinstance(obj, str):
        return LeafElement(_check_representable(obj, "value"))
    if isinstance(obj, dict):
        builder = ObjectBuilder()
        for name, child in obj.items():
            if not isinstance(name, str):
                msg = f"keys must be str, not {type(name).__name__}"
                raise TypeError(msg)
            builder.add(
                _check_representable(name, "key"), from_python(child)
            )
        return builder.build()
    if isinstance(obj, list | tuple):
        array = ArrayBuilder()
        for child in obj:
            array.append(from_python(child))
        return array.build()

    msg = f"Object of type {type(obj).__name__} is not representable"
    raise TypeError(msg)
