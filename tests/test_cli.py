"""Tests for the command-line interface."""

import json
from pathlib import Path

from typer.testing import CliRunner

from python_doc_a11y import __version__
from python_doc_a11y.cli import app

runner = CliRunner()

TABS_HTML = """
<table>
  <tr><td>Tabs</td></tr>
  <tr><td><a href="#first">First</a> <a href="#second">Second</a></td></tr>
  <tr><td><h2>First</h2><p>One</p></td></tr>
  <tr><td><h2>Second</h2><p>Two</p></td></tr>
</table>
"""


def write(tmp_path: Path, name: str, content: str) -> Path:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


class TestCLIVersion:
    """Tests for the --version flag."""

    def test_version_flag(self):
        """Test --version shows version."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"doc-a11y version {__version__}" in result.stdout


class TestCheckCommand:
    """Tests for the check command."""

    def test_clean_document(self, tmp_path):
        """Test that a document with nothing to report says so."""
        path = write(tmp_path, "plain.html", "<p>Hello</p>")
        result = runner.invoke(app, ["check", str(path)])
        assert result.exit_code == 0
        assert "No issues found." in result.stdout

    def test_valid_tabs(self, tmp_path):
        """Test that a valid Tabs block prints its success record."""
        path = write(tmp_path, "tabs.html", TABS_HTML)
        result = runner.invoke(app, ["check", str(path)])
        assert result.exit_code == 0
        assert 'Success: All "Tabs" blocks' in result.stdout

    def test_missing_alt_exits_with_error(self, tmp_path):
        """Test that an error record gives exit status 1."""
        path = write(tmp_path, "img.html", '<p><img src="a.png"></p>')
        result = runner.invoke(app, ["check", str(path)])
        assert result.exit_code == 1
        assert "Error: Image 1 is missing alternative text." in result.stdout

    def test_warning_only_exits_cleanly(self, tmp_path):
        """Test that warnings alone do not fail the command."""
        path = write(tmp_path, "img.html", '<p><img src="a.png" alt=" "></p>')
        result = runner.invoke(app, ["check", str(path)])
        assert result.exit_code == 0
        assert result.stdout.startswith("Warning: Image 1")

    def test_json_output(self, tmp_path):
        """Test --json prints status/message objects."""
        path = write(tmp_path, "img.html", '<p><img src="a.png" alt="Chart"></p>')
        result = runner.invoke(app, ["check", str(path), "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == [
            {"status": "Success", "message": "All images have alternative text."}
        ]

    def test_policy_option(self, tmp_path):
        """Test --policy switches the Tabs validation policy."""
        html = TABS_HTML.replace('href="#second"', 'href="#elsewhere"')
        path = write(tmp_path, "tabs.html", html)

        anchor = runner.invoke(app, ["check", str(path)])
        assert anchor.exit_code == 1
        assert "#elsewhere" in anchor.stdout

        row_count = runner.invoke(app, ["check", str(path), "--policy", "row-count"])
        assert row_count.exit_code == 0

    def test_config_file(self, tmp_path):
        """Test --config limits the rules that run."""
        doc = write(tmp_path, "img.html", '<p><img src="a.png"></p>')
        config = write(tmp_path, "a11y.yaml", "enabled_rules:\n  - tabs\n")
        result = runner.invoke(app, ["check", str(doc), "--config", str(config)])
        assert result.exit_code == 0
        assert "No issues found." in result.stdout

    def test_gdoc_json(self, tmp_path):
        """Test checking a Google Docs export."""
        doc = {
            "body": {
                "content": [
                    {"paragraph": {"elements": [{"inlineObjectElement": {"inlineObjectId": "a"}}]}}
                ]
            },
            "inlineObjects": {"a": {"inlineObjectProperties": {"embeddedObject": {}}}},
        }
        path = write(tmp_path, "doc.json", json.dumps(doc))
        result = runner.invoke(app, ["check", str(path)])
        assert result.exit_code == 1

    def test_missing_file(self, tmp_path):
        """Test that a missing document exits with status 2."""
        result = runner.invoke(app, ["check", str(tmp_path / "missing.html")])
        assert result.exit_code == 2
        assert "file does not exist" in result.output

    def test_corrupt_docx(self, tmp_path):
        """Test that a .docx that is not a ZIP package exits with status 2."""
        path = tmp_path / "broken.docx"
        path.write_bytes(b"this is not a zip <img src=x>")
        result = runner.invoke(app, ["check", str(path)])
        assert result.exit_code == 2
        assert "not a valid .docx" in result.output

    def test_unsupported_file(self, tmp_path):
        """Test that an unsupported file type exits with status 2."""
        path = write(tmp_path, "notes.txt", "hello")
        result = runner.invoke(app, ["check", str(path)])
        assert result.exit_code == 2
        assert "unsupported file type" in result.output

    def test_bad_config(self, tmp_path):
        """Test that an invalid configuration exits with status 2."""
        doc = write(tmp_path, "plain.html", "<p>x</p>")
        config = write(tmp_path, "a11y.yaml", "colour: red\n")
        result = runner.invoke(app, ["check", str(doc), "-c", str(config)])
        assert result.exit_code == 2
        assert "Unknown configuration keys" in result.output

    def test_invalid_policy(self, tmp_path):
        """Test that an unknown policy is rejected by option parsing."""
        path = write(tmp_path, "plain.html", "<p>x</p>")
        result = runner.invoke(app, ["check", str(path), "--policy", "both"])
        assert result.exit_code != 0


class TestRulesCommand:
    """Tests for the rules command."""

    def test_lists_rules_in_order(self):
        """Test that rules are listed by name in run order."""
        result = runner.invoke(app, ["rules"])
        assert result.exit_code == 0
        lines = result.stdout.splitlines()
        assert lines[0].startswith("tabs: ")
        assert lines[1].startswith("image-alt-text: ")
