from treectx.context import (
    Context,
    ContextBuilder,
    FileContext,
    PackageContext,
    ClassContext,
    FunctionContext,
)
from treectx.summary import build_context, build_file_summary, summarize_source
from treectx.traversal import ContextTraverser

__all__ = [
    "Context",
    "ContextBuilder",
    "FileContext",
    "PackageContext",
    "ClassContext",
    "FunctionContext",
    "ContextTraverser",
    "build_context",
    "build_file_summary",
    "summarize_source",
]
