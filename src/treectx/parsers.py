import inspect
import os
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Protocol, Sequence, Tuple, Type

import tree_sitter as ts
from pydantic import BaseModel, ConfigDict

from treectx.models import ProgrammingLanguage
from treectx.source import split_lines


class SyntaxNode(Protocol):
    """
    The parse tree shape consumed by the traversal.

    Points are ``(row, column)`` pairs with character columns into the
    line-split source.
    """

    @property
    def type(self) -> str: ...

    @property
    def children(self) -> Sequence["SyntaxNode"]: ...

    @property
    def start_point(self) -> Tuple[int, int]: ...

    @property
    def end_point(self) -> Tuple[int, int]: ...


class TreeSitterNode:
    """
    Adapts a tree-sitter node to ``SyntaxNode``.

    tree-sitter reports byte columns; they are converted to character
    columns against the UTF-8 encoded source lines.
    """

    __slots__ = ("_node", "_byte_lines")

    def __init__(self, node: ts.Node, byte_lines: Sequence[bytes]) -> None:
        self._node = node
        self._byte_lines = byte_lines

    @property
    def type(self) -> str:
        return self._node.type

    @property
    def children(self) -> List["TreeSitterNode"]:
        return [TreeSitterNode(c, self._byte_lines) for c in self._node.children]

    @property
    def start_point(self) -> Tuple[int, int]:
        return self._to_char_point(self._node.start_point)

    @property
    def end_point(self) -> Tuple[int, int]:
        return self._to_char_point(self._node.end_point)

    @property
    def raw(self) -> ts.Node:
        return self._node

    def _to_char_point(self, point: Any) -> Tuple[int, int]:
        row, column = point[0], point[1]
        if row < len(self._byte_lines):
            prefix = self._byte_lines[row][:column]
            if not prefix.isascii():
                column = len(prefix.decode("utf-8", errors="replace"))
        return row, column


class SourceTree(BaseModel):
    """A parsed source file: the adapted root node and its line array."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    language: ProgrammingLanguage
    root: Any  # SyntaxNode
    lines: Tuple[str, ...]


# Abstract base parser class
class AbstractSourceParser(ABC):
    """
    Abstract base class for source parsers.
    """

    language: ProgrammingLanguage
    extensions: Sequence[str]

    def __init_subclass__(cls, **kw):
        super().__init_subclass__(**kw)
        if not inspect.isabstract(cls):
            if not hasattr(cls, "extensions") or not cls.extensions:
                raise ValueError(f"{cls.__name__} missing `extensions`")
            SourceParserRegistry.register_parser(cls)

    @abstractmethod
    def _get_ts_parser(self) -> ts.Parser: ...

    def parse(self, text: str) -> SourceTree:
        source_bytes = text.encode("utf-8")
        tree = self._get_ts_parser().parse(source_bytes)
        byte_lines = source_bytes.split(b"\n")
        return SourceTree(
            language=self.language,
            root=TreeSitterNode(tree.root_node, byte_lines),
            lines=tuple(split_lines(text)),
        )


class SourceParserRegistry:
    """
    Registry mapping languages and file extensions to parser implementations.
    """

    _parsers: Dict[ProgrammingLanguage, Type[AbstractSourceParser]] = {}

    @classmethod
    def register_parser(cls, parser: Type[AbstractSourceParser]) -> None:
        cls._parsers[parser.language] = parser

    @classmethod
    def get_parsers(cls) -> List[Type[AbstractSourceParser]]:
        return list(cls._parsers.values())

    @classmethod
    def get_parser(cls, language: ProgrammingLanguage) -> AbstractSourceParser:
        parser_cls = cls._parsers.get(language)
        if parser_cls is None:
            raise ValueError(f"No parser registered for language: {language.value}")
        return parser_cls()

    @classmethod
    def get_parser_for_path(cls, path: str) -> AbstractSourceParser:
        ext = os.path.splitext(path)[1].lower()
        for parser_cls in cls._parsers.values():
            if ext in parser_cls.extensions:
                return parser_cls()
        raise ValueError(f"No parser registered for file extension: {ext or path}")


# Helpers
def dump_tree(node: SyntaxNode, indent: str = "") -> str:
    """
    Render every node of the parse tree as ``type [row, col] - [row, col]``,
    two spaces deeper per level.
    """
    out: List[str] = []
    stack: List[Tuple[SyntaxNode, str]] = [(node, indent)]
    while stack:
        current, ind = stack.pop()
        (sr, sc), (er, ec) = current.start_point, current.end_point
        out.append(f"{ind}{current.type} [{sr}, {sc}] - [{er}, {ec}]\n")
        for child in reversed(current.children):
            stack.append((child, ind + "  "))
    return "".join(out)


def load_parsers() -> None:
    """Import bundled language modules so their parsers register."""
    from treectx.lang import java  # noqa: F401
