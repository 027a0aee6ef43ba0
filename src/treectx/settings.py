from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from treectx.models import OutputFormat, ProgrammingLanguage


class SummarySettings(BaseSettings):
    """Settings for building a structural summary of a source file."""

    model_config = SettingsConfigDict(env_prefix="TREECTX_")

    language: Optional[ProgrammingLanguage] = Field(
        default=None,
        description=(
            "Language of the source file. If None, the language is detected "
            "from the file extension."
        ),
    )
    encoding: str = Field(
        default="utf-8", description="Text encoding used to read source files."
    )
    output: OutputFormat = Field(
        default=OutputFormat.TEXT,
        description='Report format. Allowed values: "text", "json".',
    )
    show_tree: bool = Field(
        default=False,
        description="If True, print the raw parse tree before the report.",
    )
    debug: bool = Field(default=False, description="Enable debug logging.")
