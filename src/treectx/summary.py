import json
from pathlib import Path
from typing import Optional, Sequence

from pydantic import BaseModel, Field

from treectx.context import FileContext
from treectx.logger import logger
from treectx.models import OutputFormat, ProgrammingLanguage
from treectx.parsers import (
    SourceParserRegistry,
    SourceTree,
    SyntaxNode,
    load_parsers,
)
from treectx.settings import SummarySettings
from treectx.traversal import ContextTraverser


class FileSummary(BaseModel):
    """Represents a generated summary for a single file and the format used to produce it."""

    path: str = Field(..., description="Path of the summarized file.")
    language: ProgrammingLanguage = Field(
        ..., description="Language the file was parsed as."
    )
    output: OutputFormat = Field(..., description="Format of the content.")
    content: str = Field(..., description="The rendered summary.")


def build_context(
    root: SyntaxNode,
    lines: Sequence[str],
    traverser: Optional[ContextTraverser] = None,
) -> FileContext:
    """
    Walk *root* and return the finished file context.
    """
    file_context = FileContext(lines)
    (traverser or ContextTraverser(lines)).visit(root, file_context)
    return file_context


def render_context(context: FileContext, output: OutputFormat) -> str:
    if output is OutputFormat.JSON:
        return json.dumps(context.to_dict(), indent=2)
    return context.format(0)


def summarize_source(
    text: str,
    language: ProgrammingLanguage = ProgrammingLanguage.JAVA,
    output: OutputFormat = OutputFormat.TEXT,
) -> str:
    """
    Parse *text* and return its structural report.
    """
    load_parsers()
    tree = SourceParserRegistry.get_parser(language).parse(text)
    context = build_context(tree.root, tree.lines)
    return render_context(context, output)


def load_source_tree(path: str | Path, settings: SummarySettings) -> SourceTree:
    """
    Read the file at *path* and parse it with the configured or detected parser.
    """
    load_parsers()
    if settings.language is not None:
        parser = SourceParserRegistry.get_parser(settings.language)
    else:
        parser = SourceParserRegistry.get_parser_for_path(str(path))

    text = Path(path).read_text(encoding=settings.encoding)
    return parser.parse(text)


def build_file_summary(
    path: str | Path,
    settings: Optional[SummarySettings] = None,
) -> FileSummary:
    """
    Read, parse and summarize the file at *path*.
    """
    settings = settings or SummarySettings()
    tree = load_source_tree(path, settings)
    context = build_context(tree.root, tree.lines)

    logger.debug(
        "Built context tree",
        path=str(path),
        language=tree.language.value,
        lines=len(tree.lines),
        contexts=sum(1 for _ in context.walk()),
    )

    return FileSummary(
        path=str(path),
        language=tree.language,
        output=settings.output,
        content=render_context(context, settings.output),
    )
