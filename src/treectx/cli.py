import logging
import sys
from pathlib import Path
from typing import Optional, Tuple, Type

import click
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from treectx.logger import logger
from treectx.models import OutputFormat, ProgrammingLanguage
from treectx.parsers import dump_tree
from treectx.settings import SummarySettings
from treectx.summary import build_context, load_source_tree, render_context


def load_settings(
    env_prefix: Optional[str] = None,
    env_file: Optional[str] = None,
    toml_file: Optional[str] = None,
    json_file: Optional[str] = None,
    **kwargs,
) -> SummarySettings:
    config_dict = SettingsConfigDict(
        env_prefix=env_prefix if env_prefix is not None else "TREECTX_",
        env_file=env_file,
        toml_file=toml_file,
        json_file=json_file,
    )

    class Settings(SummarySettings):
        model_config = config_dict

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: Type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,
            file_secret_settings: PydanticBaseSettingsSource,
        ) -> Tuple[PydanticBaseSettingsSource, ...]:
            sources = [init_settings, env_settings, dotenv_settings]
            if json_file:
                sources.append(JsonConfigSettingsSource(settings_cls))
            if toml_file:
                sources.append(TomlConfigSettingsSource(settings_cls))
            sources.append(file_secret_settings)
            return tuple(sources)

    return Settings(**kwargs)


def _setup_logging(debug: bool) -> None:
    # Ensure stdlib logger emits records so structlog output is visible
    level = logging.DEBUG if debug else logging.INFO
    root = logging.getLogger()
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level)
        # structlog renders the final message; keep stdlib formatter simple.
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
    else:
        for handler in root.handlers:
            handler.setLevel(level)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument(
    "source",
    type=click.Path(
        exists=True, file_okay=True, dir_okay=False, readable=True, path_type=Path
    ),
)
@click.option(
    "--language",
    type=click.Choice([lang.value for lang in ProgrammingLanguage]),
    default=None,
    help="Source language (default: detected from the file extension).",
)
@click.option(
    "--encoding", type=str, default=None, help="Source text encoding (default: utf-8)."
)
@click.option(
    "--output",
    type=click.Choice([fmt.value for fmt in OutputFormat]),
    default=None,
    help="Report format (default: text).",
)
@click.option(
    "--tree/--no-tree",
    "show_tree",
    default=None,
    help="Print the raw parse tree before the report.",
)
@click.option(
    "--debug/--no-debug",
    default=None,
    help="Enable debug logging.",
)
def main(
    source: Path,
    language: Optional[str],
    encoding: Optional[str],
    output: Optional[str],
    show_tree: Optional[bool],
    debug: Optional[bool],
) -> None:
    """
    Print a structural summary of SOURCE: imports, classes, fields, methods
    and method invocations.
    """
    overrides = {
        "language": language,
        "encoding": encoding,
        "output": output,
        "show_tree": show_tree,
        "debug": debug,
    }
    settings = load_settings(**{k: v for k, v in overrides.items() if v is not None})
    _setup_logging(settings.debug)

    try:
        tree = load_source_tree(source, settings)
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc

    if settings.show_tree:
        click.echo(dump_tree(tree.root), nl=False)

    context = build_context(tree.root, tree.lines)
    logger.debug(
        "Rendering report",
        path=str(source),
        language=tree.language.value,
        output=settings.output.value,
    )
    report = render_context(context, settings.output)
    click.echo(report, nl=not report.endswith("\n"))


if __name__ == "__main__":
    main()
