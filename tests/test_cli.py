"""Smoke tests for the ridecalc CLI."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from ridecalc.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("RIDECALC_DB", str(tmp_path / "ridecalc.db"))
    return tmp_path


def add_sample_day() -> None:
    result = runner.invoke(
        app,
        ["add", "2024-03-01", "--km", "200", "--uber", "150", "--n99", "50", "--fuel", "40", "--other-expense", "10"],
    )
    assert result.exit_code == 0, result.output


class TestEntries:
    """Tests for add / save-reserve / reserve / delete."""

    def test_add_and_commit_savings(self) -> None:
        """A committed 150 profit at the default 10% leaves 15 in the reserve."""
        add_sample_day()

        result = runner.invoke(app, ["save-reserve", "2024-03-01"])
        assert result.exit_code == 0
        assert "added to the virtual reserve" in result.output

        result = runner.invoke(app, ["reserve"])
        assert result.exit_code == 0
        assert "R$ 15,00" in result.output

    def test_day_first_date_input(self) -> None:
        """DD/MM/YYYY input is stored as the ISO date."""
        result = runner.invoke(app, ["add", "01/03/2024", "--uber", "10"])

        assert result.exit_code == 0
        assert "01/03/2024" in result.output

    def test_invalid_date(self) -> None:
        """Unparseable dates exit with an error."""
        result = runner.invoke(app, ["add", "someday"])

        assert result.exit_code == 1
        assert "Invalid date format" in result.output

    def test_delete_missing_is_not_an_error(self) -> None:
        """Deleting an unknown day just says so."""
        result = runner.invoke(app, ["delete", "2024-03-01", "--yes"])

        assert result.exit_code == 0
        assert "No entry for 01/03/2024" in result.output


class TestHistory:
    """Tests for the history views."""

    @pytest.mark.parametrize(
        "view, message",
        [
            ("daily", "No entries yet"),
            ("weekly", "No entries to group by week"),
            ("monthly", "No entries to group by month"),
            ("overall", "No data to analyse yet"),
        ],
    )
    def test_empty_states(self, view: str, message: str) -> None:
        """Each view has its own no-data message."""
        result = runner.invoke(app, ["history", view])

        assert result.exit_code == 0
        assert message in result.output

    def test_malformed_config_file(self, isolated_home: Path) -> None:
        """A broken config.toml falls back to defaults instead of crashing."""
        config_path = isolated_home / "config" / "ridecalc" / "config.toml"
        config_path.parent.mkdir(parents=True)
        config_path.write_text("currency_symbol = \n")

        result = runner.invoke(app, ["history", "daily"])

        assert result.exit_code == 0
        assert "No entries yet" in result.output

    def test_overall_with_data(self) -> None:
        """The overall view shows the all-time profit."""
        add_sample_day()

        result = runner.invoke(app, ["history", "overall"])
        assert result.exit_code == 0
        assert "R$ 150,00" in result.output


class TestMaintenanceCli:
    """Tests for maint commands."""

    def test_rejects_bad_interval(self) -> None:
        """next-km at or below km is refused."""
        result = runner.invoke(app, ["maint", "add", "oil_change", "--km", "10000", "--next-km", "9000"])

        assert result.exit_code == 1
        assert "must be greater" in result.output

    def test_add_and_list_upcoming(self) -> None:
        """An item inside the alert distance shows a warning."""
        runner.invoke(app, ["config", "set", "--total-km", "14600"])
        result = runner.invoke(
            app, ["maint", "add", "oil_change", "--km", "10000", "--next-km", "15000", "--cost", "300"]
        )
        assert result.exit_code == 0

        result = runner.invoke(app, ["maint", "list"])
        assert result.exit_code == 0
        assert "Oil change due in 400 km" in result.output


class TestAdmin:
    """Tests for export and config."""

    def test_export_empty(self, tmp_path: Path) -> None:
        """Nothing to export is reported, not a crash."""
        result = runner.invoke(app, ["export", "--output", str(tmp_path / "out.csv")])

        assert result.exit_code == 0
        assert "Nothing to export" in result.output
        assert not (tmp_path / "out.csv").exists()

    def test_export_writes_csv(self, tmp_path: Path) -> None:
        """Entries are written to the requested file."""
        add_sample_day()

        result = runner.invoke(app, ["export", "--output", str(tmp_path / "out.csv")])
        assert result.exit_code == 0
        assert (tmp_path / "out.csv").read_text().startswith("Date,KM,Uber,99")

    def test_config_set_rejects_bad_percentage(self) -> None:
        """Out-of-range savings percentage exits with an error."""
        result = runner.invoke(app, ["config", "set", "--savings-percentage", "150"])

        assert result.exit_code == 1
        assert "between 0 and 100" in result.output
