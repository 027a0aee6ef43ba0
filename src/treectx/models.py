from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class ProgrammingLanguage(str, Enum):
    JAVA = "java"


class ContextKind(str, Enum):
    FILE = "file"
    PACKAGE = "package"
    CLASS = "class"
    FUNCTION = "function"


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


# Placeholders used when a declaration lacks an expected child node
DEFAULT_MODIFIER = "default"
MISSING_IDENTIFIER = "none"


# Accumulated records
class FieldEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    modifier: str
    identifier: str
    type_identifier: str

    def render(self) -> str:
        return f"{self.modifier} {self.identifier}: {self.type_identifier}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "modifier": self.modifier,
            "identifier": self.identifier,
            "type": self.type_identifier,
        }


class Invocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    target: str  # receiver expression, empty for unqualified calls
    identifier: str
    arguments: str  # raw argument list text, parentheses included

    def render(self) -> str:
        if self.target:
            return f"{self.target}.{self.identifier}{self.arguments}"
        return f"{self.identifier}{self.arguments}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "target": self.target,
            "identifier": self.identifier,
            "arguments": self.arguments,
        }
