"""
Tests for the command-line entry point.
"""

from datetime import date

import pytest

from ttexport import __version__, app
from ttexport.csv_export import BOM
from ttexport.errors import AccessDenied
from ttexport.models import CsvRow

ROWS = [
    CsvRow("1", "Ada", "Lovelace", "ada@example.com", "a", "2024-01-01"),
    CsvRow("2", "Grace", "Hopper", "grace@example.com", "", ""),
]


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Empty working directory with no TEAMTAILOR_* variables."""
    for name in ("TEAMTAILOR_API_KEY", "TEAMTAILOR_BASE_URL", "TEAMTAILOR_MAX_PAGES"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def fake_fetch(monkeypatch):
    """Replace the network fetch; records the config it was given."""
    seen = []

    def fetch(config):
        seen.append(config)
        return list(ROWS)

    monkeypatch.setattr(app, "fetch_all_candidates", fetch)
    return seen


class TestExportCommand:
    """Test `ttexport export`."""

    def test_writes_file(self, workdir, fake_fetch, capsys):
        out = workdir / "out" / "candidates.csv"

        app.main(["export", "--api-key", "k", "--output", str(out)])

        content = out.read_bytes().decode("utf-8")
        assert content.startswith(BOM)
        assert content.count("\n") == 2
        assert "\r" not in content
        assert f"rows=2 file={out}" in capsys.readouterr().out
        assert fake_fetch[0].api_key == "k"

    def test_default_filename(self, workdir, fake_fetch):
        app.main(["export", "--api-key", "k"])
        assert (workdir / app.default_filename(date.today())).exists()

    def test_stdout(self, workdir, fake_fetch, capsys):
        app.main(["export", "--api-key", "k", "--stdout"])

        out = capsys.readouterr().out
        assert out.startswith(BOM + "candidate_id,")
        assert list(workdir.glob("*.csv")) == []

    def test_key_from_dotenv(self, workdir, fake_fetch):
        (workdir / ".env").write_text("TEAMTAILOR_API_KEY=dotenv-key\nTEAMTAILOR_MAX_PAGES=9\n")

        app.main(["export", "--stdout"])

        assert fake_fetch[0].api_key == "dotenv-key"
        assert fake_fetch[0].max_pages == 9

    @pytest.mark.parametrize("argv", [
        ["export"],
        ["export", "--api-key", "your_api_key_here"],
    ])
    def test_missing_key(self, workdir, fake_fetch, argv):
        with pytest.raises(SystemExit) as exc_info:
            app.main(argv)
        assert str(exc_info.value) == app.MISSING_KEY_MESSAGE
        assert fake_fetch == []

    @pytest.mark.parametrize("value", ["0", "-1"])
    def test_rejects_non_positive_max_pages(self, workdir, fake_fetch, value):
        with pytest.raises(SystemExit) as exc_info:
            app.main(["export", "--api-key", "k", "--stdout", "--max-pages", value])
        assert str(exc_info.value) == f"max_pages must be >= 1, got {value}"
        assert fake_fetch == []

    def test_export_error_exits_with_message(self, workdir, monkeypatch, quiet_logger):
        def fetch(config):
            raise AccessDenied()

        monkeypatch.setattr(app, "fetch_all_candidates", fetch)

        with pytest.raises(SystemExit) as exc_info:
            app.main(["export", "--api-key", "k", "--output", str(workdir / "x.csv")])

        assert str(exc_info.value) == "Access denied"
        assert not (workdir / "x.csv").exists()
        assert quiet_logger.metrics["errors_by_type"] == {"AccessDenied": 1}


class TestMisc:
    def test_version(self, workdir, capsys):
        app.main(["--version"])
        assert capsys.readouterr().out.strip() == __version__

    def test_default_filename(self):
        assert app.default_filename(date(2024, 3, 5)) == "teamtailor-candidates-2024-03-05.csv"
