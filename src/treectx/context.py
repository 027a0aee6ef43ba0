from abc import ABC, abstractmethod
from typing import Any, Iterator, List, Optional, Sequence, Tuple

from treectx.models import ContextKind, FieldEntry, Invocation

INDENT_STEP = 2


class Context(ABC):
    """
    A node of the structural summary tree.

    Contexts accumulate imports, fields, invocations and child contexts in
    document order while traversal stays inside the syntax node that
    opened them. The parent link is a back-reference only; each context
    owns its children.
    """

    kind: ContextKind

    def __init__(self, parent: Optional["Context"], lines: Sequence[str]) -> None:
        self._parent = parent
        self._lines = lines
        self._children: List[Context] = []
        self._imports: List[str] = []
        self._fields: List[FieldEntry] = []
        self._invocations: List[Invocation] = []

    @property
    def parent(self) -> Optional["Context"]:
        return self._parent

    @property
    def lines(self) -> Sequence[str]:
        return self._lines

    @property
    def children(self) -> Tuple["Context", ...]:
        return tuple(self._children)

    @property
    def imports(self) -> Tuple[str, ...]:
        return tuple(self._imports)

    @property
    def fields(self) -> Tuple[FieldEntry, ...]:
        return tuple(self._fields)

    @property
    def invocations(self) -> Tuple[Invocation, ...]:
        return tuple(self._invocations)

    @abstractmethod
    def header(self) -> str: ...

    # Mutators
    def add_child(self, context: "Context") -> "Context":
        if context.parent is not self:
            raise ValueError(
                f"{type(context).__name__} was built for a different parent context"
            )
        if any(child is context for child in self._children):
            raise ValueError(f"{context!r} is already a child of this context")
        self._children.append(context)
        return context

    def add_import(self, text: str) -> None:
        self._imports.append(text)

    def add_field(self, modifier: str, identifier: str, type_identifier: str) -> None:
        self._fields.append(
            FieldEntry(
                modifier=modifier,
                identifier=identifier,
                type_identifier=type_identifier,
            )
        )

    def add_invocation(self, target: str, identifier: str, arguments: str) -> None:
        self._invocations.append(
            Invocation(target=target, identifier=identifier, arguments=arguments)
        )

    def new_builder(self) -> "ContextBuilder":
        return ContextBuilder(self, self._lines)

    # Navigation
    def ancestors(self) -> Iterator["Context"]:
        node = self._parent
        while node is not None:
            yield node
            node = node._parent

    def walk(self) -> Iterator["Context"]:
        """
        Yield this context and all descendants, depth-first in document order.
        """
        stack: List[Context] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node._children))

    # Rendering
    def format(self, indent: int = 0) -> str:
        ind = " " * indent
        inner = " " * (indent + INDENT_STEP)
        out: List[str] = [f"{ind}{self.header()}\n"]

        for imp in self._imports:
            out.append(f"{inner}{imp}\n")
        for fld in self._fields:
            out.append(f"{inner}{fld.render()}\n")
        for inv in self._invocations:
            out.append(f"{inner}Invoke: {inv.render()}\n")
        for child in self._children:
            out.append(child.format(indent + INDENT_STEP))

        return "".join(out)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "header": self.header(),
            "imports": list(self._imports),
            "fields": [f.to_dict() for f in self._fields],
            "invocations": [i.to_dict() for i in self._invocations],
            "children": [c.to_dict() for c in self._children],
        }

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.header()!r}>"


class FileContext(Context):
    kind = ContextKind.FILE

    def __init__(self, lines: Sequence[str]) -> None:
        super().__init__(None, lines)

    def header(self) -> str:
        return "File"


class PackageContext(Context):
    kind = ContextKind.PACKAGE

    def header(self) -> str:
        return "Package"


class ClassContext(Context):
    kind = ContextKind.CLASS

    def __init__(
        self,
        modifier: str,
        identifier: str,
        parent: Context,
        lines: Sequence[str],
    ) -> None:
        super().__init__(parent, lines)
        self.modifier = modifier
        self.identifier = identifier

    def header(self) -> str:
        return f"{self.modifier} class {self.identifier}"

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(modifier=self.modifier, identifier=self.identifier)
        return data


class FunctionContext(Context):
    kind = ContextKind.FUNCTION

    def __init__(
        self,
        modifiers: str,
        identifier: str,
        parameters: str,
        return_type: str,
        parent: Context,
        lines: Sequence[str],
    ) -> None:
        super().__init__(parent, lines)
        self.modifiers = modifiers
        self.identifier = identifier
        self.parameters = parameters
        self.return_type = return_type

    def header(self) -> str:
        return f"{self.modifiers} {self.identifier} {self.parameters}: {self.return_type}"

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(
            modifiers=self.modifiers,
            identifier=self.identifier,
            parameters=self.parameters,
            return_type=self.return_type,
        )
        return data


class ContextBuilder:
    """
    Factory for contexts pre-bound to a parent and its shared source lines.
    """

    def __init__(self, parent: Context, lines: Sequence[str]) -> None:
        self._parent = parent
        self._lines = lines

    def build_package(self) -> PackageContext:
        return PackageContext(self._parent, self._lines)

    def build_class(self, modifier: str, identifier: str) -> ClassContext:
        return ClassContext(modifier, identifier, self._parent, self._lines)

    def build_function(
        self,
        modifiers: str,
        identifier: str,
        parameters: str,
        return_type: str,
    ) -> FunctionContext:
        return FunctionContext(
            modifiers, identifier, parameters, return_type, self._parent, self._lines
        )
