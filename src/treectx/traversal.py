from typing import Callable, Dict, List, Optional, Sequence, Tuple

from treectx.context import Context
from treectx.logger import logger
from treectx.models import DEFAULT_MODIFIER, MISSING_IDENTIFIER
from treectx.parsers import SyntaxNode
from treectx.source import get_node_text, get_span_text

# Node kinds that can stand for a declared or returned type
TYPE_KINDS = frozenset(
    {
        "void_type",
        "integral_type",
        "floating_point_type",
        "boolean_type",
        "type_identifier",
        "scoped_type_identifier",
        "generic_type",
        "array_type",
    }
)

Descent = Tuple[Context, Sequence[SyntaxNode]]
Handler = Callable[[SyntaxNode, Sequence[SyntaxNode], Context], Descent]


class ContextTraverser:
    """
    Depth-first walk of a parse tree that fills a context tree.

    Each interpreted node kind maps to a handler that records facts on the
    current context and returns the context and children to descend into.
    Unknown kinds are transparent: all children are visited with the
    current context.
    """

    def __init__(self, lines: Sequence[str]) -> None:
        self.lines = lines
        # Node-type -> handler mapping
        self._handlers: Dict[str, Handler] = {
            "import_declaration": self._handle_import,
            "class_declaration": self._handle_class,
            "field_declaration": self._handle_field,
            "method_invocation": self._handle_invocation,
            "method_declaration": self._handle_method,
        }

    def visit(self, node: SyntaxNode, context: Context) -> None:
        # Explicit stack; pushes children reversed to keep document order.
        stack: List[Tuple[SyntaxNode, Context]] = [(node, context)]
        while stack:
            current, ctx = stack.pop()
            children = current.children
            handler = self._handlers.get(current.type)
            if handler is not None:
                ctx, children = handler(current, children, ctx)
            for child in reversed(children):
                stack.append((child, ctx))

    def _text(self, node: SyntaxNode) -> str:
        return get_node_text(node, self.lines)

    # Handlers
    def _handle_import(
        self, node: SyntaxNode, children: Sequence[SyntaxNode], context: Context
    ) -> Descent:
        context.add_import(self._text(node))
        return context, ()

    def _handle_class(
        self, node: SyntaxNode, children: Sequence[SyntaxNode], context: Context
    ) -> Descent:
        modifier = DEFAULT_MODIFIER
        identifier = MISSING_IDENTIFIER
        body_index = 0
        for index, child in enumerate(children):
            if child.type == "modifiers":
                modifier = self._text(child)
            elif child.type == "identifier":
                identifier = self._text(child)
            elif child.type == "class_body":
                body_index = index

        if identifier == MISSING_IDENTIFIER:
            self._debug_placeholder(node, "identifier")

        new_context = context.add_child(
            context.new_builder().build_class(modifier, identifier)
        )
        return new_context, children[body_index:]

    def _handle_field(
        self, node: SyntaxNode, children: Sequence[SyntaxNode], context: Context
    ) -> Descent:
        modifier = DEFAULT_MODIFIER
        type_identifier = ""
        identifiers: List[str] = []
        for child in children:
            if child.type == "modifiers":
                modifier = self._text(child)
            elif child.type in TYPE_KINDS:
                type_identifier = self._text(child)
            elif child.type == "variable_declarator":
                identifiers.append(self._declarator_name(child))

        if not identifiers:
            self._debug_placeholder(node, "variable_declarator")

        context.add_field(
            modifier, ", ".join(identifiers) or MISSING_IDENTIFIER, type_identifier
        )
        return context, ()

    def _handle_invocation(
        self, node: SyntaxNode, children: Sequence[SyntaxNode], context: Context
    ) -> Descent:
        identifier = MISSING_IDENTIFIER
        arguments = ""
        dot: Optional[SyntaxNode] = None
        name_dot: Optional[SyntaxNode] = None
        for child in children:
            if child.type == ".":
                dot = child
            elif child.type == "identifier":
                # the name is the last identifier before the argument list
                identifier = self._text(child)
                name_dot = dot
            elif child.type == "argument_list":
                arguments = self._text(child)
                break

        # The receiver is everything ahead of the dot that precedes the name.
        target = ""
        if name_dot is not None:
            target = get_span_text(
                self.lines, tuple(node.start_point), tuple(name_dot.start_point)
            ).strip()

        if identifier == MISSING_IDENTIFIER:
            self._debug_placeholder(node, "identifier")

        context.add_invocation(target, identifier, arguments)
        # Arguments and receivers may hold nested invocations.
        return context, children

    def _handle_method(
        self, node: SyntaxNode, children: Sequence[SyntaxNode], context: Context
    ) -> Descent:
        modifiers = DEFAULT_MODIFIER
        identifier = MISSING_IDENTIFIER
        parameters = ""
        return_type = ""
        for child in children:
            if child.type == "modifiers":
                modifiers = self._text(child)
            elif child.type == "identifier":
                identifier = self._text(child)
            elif child.type == "formal_parameters":
                parameters = self._text(child)
            elif child.type in TYPE_KINDS and not return_type:
                return_type = self._text(child)

        if identifier == MISSING_IDENTIFIER:
            self._debug_placeholder(node, "identifier")

        new_context = context.add_child(
            context.new_builder().build_function(
                modifiers, identifier, parameters, return_type
            )
        )
        return new_context, children

    # Helpers
    def _declarator_name(self, declarator: SyntaxNode) -> str:
        for child in declarator.children:
            if child.type == "identifier":
                return self._text(child)
        return self._text(declarator)

    def _debug_placeholder(self, node: SyntaxNode, missing: str) -> None:
        logger.debug(
            "Declaration is missing a child node; using placeholder",
            node_type=node.type,
            missing=missing,
            line=node.start_point[0] + 1,
        )
