import json
from pathlib import Path

from click.testing import CliRunner

from treectx.cli import load_settings, main
from treectx.models import OutputFormat


SAMPLES_DIR = Path(__file__).parent / "lang" / "java" / "samples"
SAMPLE = SAMPLES_DIR / "FooService.java"


def test_cli_prints_report():
    result = CliRunner().invoke(main, [str(SAMPLE)])

    assert result.exit_code == 0, result.output
    expected = (SAMPLES_DIR / "FooService.java.summary").read_text(encoding="utf-8")
    assert result.output == expected


def test_cli_prints_tree_before_report():
    result = CliRunner().invoke(main, [str(SAMPLE), "--tree"])

    assert result.exit_code == 0, result.output
    assert result.output.startswith("program [0, 0]")
    assert "  import_declaration [0, 0] - [0, 23]" in result.output
    assert result.output.endswith("    public noop (): void\n")


def test_cli_json_output():
    result = CliRunner().invoke(main, [str(SAMPLE), "--output", "json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert [c["identifier"] for c in data["children"]] == ["FooService", "Outside"]


def test_cli_reads_settings_from_environment():
    result = CliRunner().invoke(main, [str(SAMPLE)], env={"TREECTX_OUTPUT": "json"})

    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["kind"] == "file"


def test_cli_rejects_unknown_extension(tmp_path):
    src = tmp_path / "notes.md"
    src.write_text("# notes\n", encoding="utf-8")

    result = CliRunner().invoke(main, [str(src)])

    assert result.exit_code == 2
    assert "No parser registered" in result.output


def test_load_settings_from_json_file(tmp_path):
    cfg = tmp_path / "treectx.json"
    cfg.write_text(json.dumps({"output": "json", "encoding": "latin-1"}), encoding="utf-8")

    settings = load_settings(json_file=str(cfg))

    assert settings.output is OutputFormat.JSON
    assert settings.encoding == "latin-1"
    # keyword overrides win over the file
    assert load_settings(json_file=str(cfg), encoding="ascii").encoding == "ascii"
