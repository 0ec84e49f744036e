"""Tests for the command-line interface."""

from typer.testing import CliRunner

from ad_producer import __version__
from ad_producer.cli import app

runner = CliRunner()


def test_version() -> None:
    """Test the version command."""
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_providers_lists_catalog() -> None:
    """Test the provider catalog listing."""
    result = runner.invoke(app, ["providers"])

    assert result.exit_code == 0
    assert "Provider Catalog" in result.output
    assert "runway" in result.output
    assert "hailuo" in result.output


def test_select_shows_cost() -> None:
    """Test provider selection for the template manifest."""
    result = runner.invoke(app, ["select", "CBD Oil"])

    assert result.exit_code == 0
    assert "Provider Selection (professional)" in result.output
    assert "Estimated cost:" in result.output


def test_classify_with_rules() -> None:
    """Test scene classification with the keyword rules."""
    result = runner.invoke(app, ["classify", "CBD Oil", "--rules"])

    assert result.exit_code == 0
    assert "Scene Classification (rules)" in result.output


def test_produce_quiet() -> None:
    """Test a full production run with stub providers."""
    result = runner.invoke(app, ["produce", "CBD Oil", "--benefit", "better sleep", "--quiet"])

    assert result.exit_code == 0, result.output
    assert "Phases" in result.output
    assert "Quality Score:" in result.output
    assert "completed" in result.output


def test_produce_rejects_invalid_brief() -> None:
    """Test that a non-positive duration exits with code 2."""
    result = runner.invoke(app, ["produce", "CBD Oil", "--duration", "0", "--quiet"])

    assert result.exit_code == 2
    assert "Invalid brief" in result.output


def test_log_level_option() -> None:
    """Test the global log level override."""
    result = runner.invoke(app, ["--log-level", "warning", "version"])

    assert result.exit_code == 0
    assert __version__ in result.output
