"""Unit tests for the wikidoc command line."""

import io
import json
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from wikidoc.cli import _create_parser, main


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Drop the handlers main() installs so later tests log normally."""
    yield
    logger = logging.getLogger("wikidoc")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


# =============================================================================
# PARSER TESTS
# =============================================================================


class TestParserRegistration:
    """Tests for argument parsing."""

    @pytest.mark.unit
    def test_parse_defaults(self) -> None:
        """'parse' should default to JSON output with no title."""
        args = _create_parser().parse_args(["parse", "page.wiki"])
        assert args.command == "parse"
        assert args.path == "page.wiki"
        assert args.format == "json"
        assert args.title is None
        assert args.page_id is None
        assert args.plaintext is False
        assert args.encode_keys is False
        assert args.verbose is False
        assert args.log_dir is None

    @pytest.mark.unit
    def test_global_options(self) -> None:
        """-v and --log-dir should come before the subcommand."""
        args = _create_parser().parse_args(["-v", "--log-dir", "logs", "parse", "-", "--format", "outline"])
        assert args.verbose is True
        assert args.log_dir == Path("logs")
        assert args.format == "outline"

    @pytest.mark.unit
    def test_invalid_format(self) -> None:
        """An unknown format should exit with an argparse error."""
        with pytest.raises(SystemExit):
            _create_parser().parse_args(["parse", "x", "--format", "xml"])


# =============================================================================
# COMMAND TESTS
# =============================================================================


class TestParseCommand:
    """Tests for running the parse subcommand."""

    @pytest.mark.unit
    def test_outline(self, wikitext_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Should print section titles indented by depth."""
        code = main(["parse", str(wikitext_dir / "toronto.txt"), "--format", "outline"])
        assert code == 0
        out = capsys.readouterr().out
        assert out == "(lead)\nHistory\n  Early settlement\nGeography\nExternal links\n"

    @pytest.mark.unit
    def test_json(self, wikitext_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Should print the document with the top-level collections."""
        code = main(["parse", str(wikitext_dir / "toronto.txt"), "--title", "Toronto"])
        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["title"] == "Toronto"
        assert data["categories"] == ["Toronto", "Populated places established in 1834"]
        assert data["infoboxes"][0]["type"] == "settlement"
        assert data["coordinates"][0]["lat"] == 43.65
        assert {"coordinates", "infoboxes", "images", "references"} <= set(data)

    @pytest.mark.unit
    def test_title_from_file_name(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Should take the title from the file name."""
        path = tmp_path / "New_York.wiki"
        path.write_text("A city.", encoding="utf-8")
        assert main(["parse", str(path)]) == 0
        assert json.loads(capsys.readouterr().out)["title"] == "New York"

    @pytest.mark.unit
    def test_page_id_and_plaintext(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Should record the page id and add the plain text on request."""
        path = tmp_path / "page.wiki"
        path.write_text("A '''small''' city.", encoding="utf-8")
        assert main(["parse", str(path), "--page-id", "42", "--plaintext"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["page_id"] == 42
        assert data["plaintext"] == "A small city."

    @pytest.mark.unit
    def test_plaintext_is_off_by_default(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Should leave the plain text out of the JSON unless asked."""
        path = tmp_path / "page.wiki"
        path.write_text("A city.", encoding="utf-8")
        assert main(["parse", str(path)]) == 0
        assert "plaintext" not in json.loads(capsys.readouterr().out)

    @pytest.mark.unit
    def test_stdin_text(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        """Should read '-' from stdin."""
        monkeypatch.setattr("sys.stdin", io.StringIO("Dr. Smith went home. He was tired."))
        assert main(["parse", "-", "--format", "text"]) == 0
        assert capsys.readouterr().out == "Dr. Smith went home. He was tired.\n"

    @pytest.mark.unit
    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Should log an error and return 1 when the file cannot be read."""
        assert main(["parse", str(tmp_path / "missing.wiki")]) == 1
        assert "Cannot read" in capsys.readouterr().err

    @pytest.mark.unit
    def test_log_dir(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Should write a timestamped log file when --log-dir is given."""
        page = tmp_path / "page.wiki"
        page.write_text("Some text.", encoding="utf-8")
        log_dir = tmp_path / "logs"
        assert main(["--log-dir", str(log_dir), "parse", str(page), "--format", "text"]) == 0
        logs = list(log_dir.glob("wikidoc_*.log"))
        assert len(logs) == 1

    @pytest.mark.unit
    def test_no_command(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Should print help and return 1 without a subcommand."""
        assert main([]) == 1
        assert "usage: wikidoc" in capsys.readouterr().out
