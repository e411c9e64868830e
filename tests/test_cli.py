"""CLI tests using typer's CliRunner."""

from unittest.mock import patch

from typer.testing import CliRunner

from splitview import __version__
from splitview.main import app
from splitview.types import Orientation

runner = CliRunner()


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_help(self):
        """Test help lists the commands."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "demo" in result.stdout
        assert "config" in result.stdout

    def test_version(self):
        """Test version command."""
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert f"splitview version {__version__}" in result.stdout

    def test_invalid_command(self):
        """Test invalid command exits with an error."""
        result = runner.invoke(app, ["nonexistent-command"])
        assert result.exit_code != 0

    def test_verbose_flag(self):
        """Test --verbose is accepted before a command."""
        result = runner.invoke(app, ["--verbose", "version"])
        assert result.exit_code == 0


class TestDemoCommand:
    """Tests for the demo command."""

    def test_demo_launches_app(self):
        """Test demo builds the app from the resolved settings."""
        with patch("splitview.ui.app.SplitViewApp") as mock_app:
            result = runner.invoke(app, ["demo", "--max-depth", "3", "--orientation", "column", "--seed", "7"])

        assert result.exit_code == 0
        mock_app.assert_called_once()
        kwargs = mock_app.call_args.kwargs
        assert kwargs["seed"] == 7
        assert kwargs["settings"].max_depth == 3
        assert kwargs["settings"].root_orientation is Orientation.COLUMN
        mock_app.return_value.run.assert_called_once()

    def test_demo_reads_config_file(self, tmp_path):
        """Test --config is used when no overrides are given."""
        path = tmp_path / "config.yaml"
        path.write_text("max_depth: 5\n")

        with patch("splitview.ui.app.SplitViewApp") as mock_app:
            result = runner.invoke(app, ["demo", "--config", str(path)])

        assert result.exit_code == 0
        assert mock_app.call_args.kwargs["settings"].max_depth == 5

    def test_demo_invalid_orientation(self):
        """Test a bad orientation exits before starting the app."""
        with patch("splitview.ui.app.SplitViewApp") as mock_app:
            result = runner.invoke(app, ["demo", "--orientation", "diagonal"])

        assert result.exit_code == 1
        assert "Invalid orientation" in result.output
        mock_app.assert_not_called()

    def test_demo_invalid_config_file(self, tmp_path):
        """Test a broken settings file is reported."""
        path = tmp_path / "config.yaml"
        path.write_text("- not\n- a mapping\n")

        with patch("splitview.ui.app.SplitViewApp") as mock_app:
            result = runner.invoke(app, ["demo", "--config", str(path)])

        assert result.exit_code == 1
        mock_app.assert_not_called()


class TestConfigCommand:
    """Tests for the config command."""

    def test_shows_defaults(self):
        """Test defaults are listed when no file exists."""
        result = runner.invoke(app, ["config"])

        assert result.exit_code == 0
        assert "max_depth" in result.stdout
        assert "none" in result.stdout
        assert "not found" in result.stdout

    def test_shows_file_values(self, tmp_path):
        """Test values come from the given file."""
        path = tmp_path / "config.yaml"
        path.write_text("root_orientation: column\n")

        result = runner.invoke(app, ["config", "--config", str(path)])

        assert result.exit_code == 0
        assert "column" in result.stdout
        assert "not found" not in result.stdout


class TestPreviewCommand:
    """Tests for the preview command."""

    def test_preview_prints_tree(self):
        """Test three drops nest the third pane in a new split."""
        result = runner.invoke(app, ["preview", "--panes", "3"])

        assert result.exit_code == 0
        assert "split 1 row" in result.stdout
        assert "split 5 column" in result.stdout
        assert "refused" not in result.stdout

    def test_preview_empty(self):
        """Test zero panes shows the empty root."""
        result = runner.invoke(app, ["preview", "--panes", "0"])

        assert result.exit_code == 0
        assert "(empty)" in result.stdout

    def test_preview_depth_limit(self):
        """Test refused drops are counted."""
        result = runner.invoke(app, ["preview", "--panes", "3", "--max-depth", "0"])

        assert result.exit_code == 0
        assert "1 drop(s) refused" in result.stdout
