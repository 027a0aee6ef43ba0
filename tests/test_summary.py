import json
from pathlib import Path

import pytest

from treectx.models import OutputFormat, ProgrammingLanguage
from treectx.settings import SummarySettings
from treectx.summary import build_file_summary, summarize_source


SAMPLES_DIR = Path(__file__).parent / "lang" / "java" / "samples"

CODE = "import a.B;\nclass C { int x; void m(){ y.call(1); } }\n"


def test_build_file_summary_text(tmp_path):
    src = tmp_path / "C.java"
    src.write_text(CODE, encoding="utf-8")

    summary = build_file_summary(src)

    assert summary.path == str(src)
    assert summary.language is ProgrammingLanguage.JAVA
    assert summary.output is OutputFormat.TEXT
    assert summary.content.splitlines() == [
        "File",
        "  import a.B;",
        "  default class C",
        "    default x: int",
        "    default m (): void",
        "      Invoke: y.call(1)",
    ]


def test_build_file_summary_json(tmp_path):
    src = tmp_path / "C.java"
    src.write_text(CODE, encoding="utf-8")

    summary = build_file_summary(src, SummarySettings(output=OutputFormat.JSON))
    data = json.loads(summary.content)

    assert data["kind"] == "file"
    assert data["imports"] == ["import a.B;"]
    cls = data["children"][0]
    assert cls["identifier"] == "C"
    assert cls["fields"] == [{"modifier": "default", "identifier": "x", "type": "int"}]
    assert cls["children"][0]["invocations"] == [
        {"target": "y", "identifier": "call", "arguments": "(1)"}
    ]


def test_language_setting_overrides_extension(tmp_path):
    src = tmp_path / "snippet.txt"
    src.write_text(CODE, encoding="utf-8")

    with pytest.raises(ValueError):
        build_file_summary(src)

    summary = build_file_summary(src, SummarySettings(language=ProgrammingLanguage.JAVA))
    assert summary.content.startswith("File\n  import a.B;\n")


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("TREECTX_OUTPUT", "json")
    monkeypatch.setenv("TREECTX_SHOW_TREE", "true")

    settings = SummarySettings()

    assert settings.output is OutputFormat.JSON
    assert settings.show_tree is True
    assert settings.encoding == "utf-8"


def test_summary_is_deterministic():
    code = (SAMPLES_DIR / "FooService.java").read_text(encoding="utf-8")
    assert summarize_source(code) == summarize_source(code)
