from typing import Optional

import tree_sitter as ts
import tree_sitter_java as tsjava

from treectx.parsers import AbstractSourceParser
from treectx.models import ProgrammingLanguage


JAVA_LANGUAGE = ts.Language(tsjava.language())

_parser: Optional[ts.Parser] = None


def _get_parser() -> ts.Parser:
    global _parser
    if _parser is None:
        _parser = ts.Parser(JAVA_LANGUAGE)
    return _parser


class JavaSourceParser(AbstractSourceParser):
    language = ProgrammingLanguage.JAVA
    extensions = (".java",)

    def _get_ts_parser(self) -> ts.Parser:
        return _get_parser()
