"""Tests for the CLI interface."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from quotebook.cli import app


@pytest.fixture
def runner(cli_env):
    """Create a CLI test runner bound to a temporary database."""
    return CliRunner()


def add_quote(runner: CliRunner, text: str, *categories: str):
    """Invoke the add command."""
    args = ["add", text]
    for category in categories:
        args += ["--category", category]
    return runner.invoke(app, args)


def saved(db_file: Path) -> list[dict]:
    """Read the database file written by the CLI."""
    return json.loads(db_file.read_text(encoding="utf-8"))


class TestCLIBasics:
    """Tests for basic CLI functionality."""

    def test_help(self, runner: CliRunner):
        """Test that help command works."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "favourite quotes" in result.stdout

    def test_version(self, runner: CliRunner):
        """Test version command."""
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.stdout


class TestAddCommand:
    """Tests for the add command."""

    def test_add_quote(self, runner: CliRunner, cli_env: Path):
        """Adding a quote saves it."""
        result = add_quote(runner, "Carpe diem", "motivation")
        assert result.exit_code == 0
        assert "Added:" in result.stdout
        assert saved(cli_env) == [{"text": "Carpe diem", "categories": ["motivation"]}]

    def test_add_trims_text(self, runner: CliRunner, cli_env: Path):
        """Surrounding whitespace is dropped."""
        add_quote(runner, "  Be yourself  ", "wisdom")
        assert saved(cli_env)[0]["text"] == "Be yourself"

    def test_add_category_case_insensitive(self, runner: CliRunner, cli_env: Path):
        """Category names ignore case."""
        result = add_quote(runner, "Hello", "WISDOM", "Love")
        assert result.exit_code == 0
        assert saved(cli_env)[0]["categories"] == ["wisdom", "love"]

    def test_add_empty_text(self, runner: CliRunner, cli_env: Path):
        """Blank text is rejected."""
        result = add_quote(runner, "   ", "wisdom")
        assert result.exit_code == 1
        assert "cannot be empty" in result.stdout
        assert not cli_env.exists()

    def test_add_unknown_category(self, runner: CliRunner):
        """Unknown categories are rejected by the parser."""
        result = add_quote(runner, "Hello", "astrology")
        assert result.exit_code != 0

    def test_add_without_category_warns(self, runner: CliRunner):
        """A quote with no category gets a warning."""
        result = add_quote(runner, "Lonely quote")
        assert result.exit_code == 0
        assert "no categories" in result.stdout

    def test_add_duplicate_collapses(self, runner: CliRunner, cli_env: Path):
        """Adding the same quote twice keeps one copy."""
        add_quote(runner, "Carpe diem", "motivation")
        add_quote(runner, "Carpe diem", "motivation")
        assert len(saved(cli_env)) == 1


class TestListCommand:
    """Tests for the list command."""

    def test_list_empty(self, runner: CliRunner):
        """Listing an empty database."""
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "No quotes found" in result.stdout

    def test_list_all(self, runner: CliRunner):
        """Without filters every tagged quote is listed."""
        add_quote(runner, "Be yourself", "wisdom")
        add_quote(runner, "Carpe diem", "motivation")

        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "Be yourself" in result.stdout
        assert "Carpe diem" in result.stdout

    def test_list_by_category(self, runner: CliRunner):
        """--category filters the listing."""
        add_quote(runner, "Be yourself", "wisdom")
        add_quote(runner, "Carpe diem", "motivation")

        result = runner.invoke(app, ["list", "--category", "wisdom"])
        assert result.exit_code == 0
        assert "Be yourself" in result.stdout
        assert "Carpe diem" not in result.stdout

    def test_list_skips_untagged(self, runner: CliRunner):
        """Quotes without categories never appear in listings."""
        add_quote(runner, "Lonely quote")
        result = runner.invoke(app, ["list"])
        assert "No quotes found" in result.stdout


class TestRemoveAndEdit:
    """Tests for remove and edit commands."""

    def test_remove(self, runner: CliRunner, cli_env: Path):
        """Removing a quote deletes it from the file."""
        add_quote(runner, "Be yourself", "wisdom")
        add_quote(runner, "Carpe diem", "motivation")

        result = runner.invoke(app, ["remove", "Be yourself"])
        assert result.exit_code == 0
        assert "Removed:" in result.stdout
        assert saved(cli_env) == [{"text": "Carpe diem", "categories": ["motivation"]}]

    def test_remove_missing(self, runner: CliRunner):
        """Removing an unknown quote fails with a warning."""
        result = runner.invoke(app, ["remove", "Nope"])
        assert result.exit_code == 1
        assert "No quote found" in result.stdout

    def test_remove_with_wrong_categories(self, runner: CliRunner, cli_env: Path):
        """Categories must match exactly when given."""
        add_quote(runner, "Be yourself", "wisdom")
        result = runner.invoke(app, ["remove", "Be yourself", "-c", "love"])
        assert result.exit_code == 1
        assert len(saved(cli_env)) == 1

    def test_edit_text(self, runner: CliRunner, cli_env: Path):
        """Editing text keeps the categories."""
        add_quote(runner, "Be yourslef", "wisdom")
        result = runner.invoke(app, ["edit", "Be yourslef", "--text", "Be yourself"])
        assert result.exit_code == 0
        assert saved(cli_env) == [{"text": "Be yourself", "categories": ["wisdom"]}]

    def test_edit_categories(self, runner: CliRunner, cli_env: Path):
        """Editing categories keeps the text."""
        add_quote(runner, "Be yourself", "wisdom")
        runner.invoke(app, ["edit", "Be yourself", "-c", "life", "-c", "wisdom"])
        assert saved(cli_env) == [{"text": "Be yourself", "categories": ["wisdom", "life"]}]

    def test_edit_to_empty_text(self, runner: CliRunner, cli_env: Path):
        """Edits that blank the text are rejected and nothing changes."""
        add_quote(runner, "Be yourself", "wisdom")
        result = runner.invoke(app, ["edit", "Be yourself", "--text", "  "])
        assert result.exit_code == 1
        assert saved(cli_env) == [{"text": "Be yourself", "categories": ["wisdom"]}]


class TestSearchCommand:
    """Tests for the search command."""

    def test_search(self, runner: CliRunner):
        """Search shows matches and counts."""
        add_quote(runner, "Be yourself", "wisdom")
        add_quote(runner, "Carpe diem", "motivation")

        result = runner.invoke(app, ["search", "diem"])
        assert result.exit_code == 0
        assert "Search Results: 1/2" in result.stdout
        assert "Carpe diem" in result.stdout

    def test_search_no_match(self, runner: CliRunner):
        """A search without matches reports zero."""
        add_quote(runner, "Be yourself", "wisdom")
        result = runner.invoke(app, ["search", "DIEM"])
        assert "Search Results: 0/1" in result.stdout


class TestOtherCommands:
    """Tests for sort, categories and export."""

    def test_sort(self, runner: CliRunner, cli_env: Path):
        """sort rewrites the file in canonical order."""
        cli_env.parent.mkdir(parents=True, exist_ok=True)
        cli_env.write_text(
            json.dumps([
                {"text": "b", "categories": ["love"]},
                {"text": "a", "categories": ["love"]},
                {"text": "b", "categories": ["love"]},
            ]),
            encoding="utf-8",
        )
        result = runner.invoke(app, ["sort"])
        assert result.exit_code == 0
        assert [q["text"] for q in saved(cli_env)] == ["a", "b"]

    def test_corrupt_database_starts_empty(self, runner: CliRunner, cli_env: Path):
        """A corrupt file is treated as an empty database."""
        cli_env.parent.mkdir(parents=True, exist_ok=True)
        cli_env.write_text("not json", encoding="utf-8")
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "No quotes found" in result.stdout
        assert cli_env.read_text(encoding="utf-8") == "not json"

    @pytest.mark.parametrize(
        "args", [["list"], ["search", "x"], ["categories"], ["sort"]]
    )
    def test_corrupt_database_left_intact(self, runner: CliRunner, cli_env: Path, args):
        """Commands that add nothing do not replace a corrupt file."""
        cli_env.parent.mkdir(parents=True, exist_ok=True)
        cli_env.write_text("not json", encoding="utf-8")
        result = runner.invoke(app, args)
        assert result.exit_code == 0
        assert cli_env.read_text(encoding="utf-8") == "not json"

    def test_categories(self, runner: CliRunner):
        """categories lists every category."""
        add_quote(runner, "Be yourself", "wisdom")
        result = runner.invoke(app, ["categories"])
        assert result.exit_code == 0
        assert "wisdom" in result.stdout
        assert "literature" in result.stdout

    def test_export_default_path(self, runner: CliRunner, cli_env: Path):
        """export writes to the configured export path."""
        add_quote(runner, "Be yourself", "wisdom")
        result = runner.invoke(app, ["export"])
        assert result.exit_code == 0
        assert "Exported 1 quotes" in result.stdout
        assert (cli_env.parent / "export.csv").exists()

    def test_export_markdown(self, runner: CliRunner, tmp_path: Path):
        """--format markdown writes a Markdown file."""
        add_quote(runner, "Be yourself", "wisdom")
        output = tmp_path / "quotes.md"
        result = runner.invoke(app, ["export", "--format", "markdown", "--output", str(output)])
        assert result.exit_code == 0
        assert "## Wisdom" in output.read_text(encoding="utf-8")

    def test_export_invalid_format(self, runner: CliRunner):
        """Unknown formats are rejected."""
        result = runner.invoke(app, ["export", "--format", "xml"])
        assert result.exit_code == 1
        assert "Invalid format" in result.stdout
