"""Tests for the command line interface."""

from typer.testing import CliRunner

from cropimage.cli import app

runner = CliRunner()


def test_constrain_snaps_and_prints_the_querystring():
    result = runner.invoke(
        app, ["constrain", "0.01", "0.01", "0.99", "0.99", "--width", "1000", "--height", "1000"]
    )
    assert result.exit_code == 0, result.output
    assert "crop 0,0,1,1" in result.output
    assert "?crop=0%2C0%2C1%2C1&cropxunits=1&cropyunits=1" in result.output


def test_constrain_crop_pad_with_imageflow_padding():
    result = runner.invoke(
        app,
        [
            "constrain",
            "--width", "1000",
            "--height", "1000",
            "--mode", "crop-pad",
            "--adapter", "imageflow",
            "--",
            "-0.1", "0", "1", "1",
        ],
    )
    assert result.exit_code == 0, result.output
    assert "s.pad=0%2C0%2C0%2C100" in result.output


def test_constrain_with_aspect_lock():
    result = runner.invoke(
        app,
        ["constrain", "0.1", "0.1", "0.9", "0.5", "--width", "1000", "--height", "1000", "--aspect", "1:1"],
    )
    assert result.exit_code == 0, result.output
    assert "crop 0.3,0.1,0.7,0.5" in result.output


def test_constrain_rejects_a_malformed_aspect():
    result = runner.invoke(
        app, ["constrain", "0.1", "0.1", "0.9", "0.9", "--width", "100", "--height", "100", "--aspect", "wide"]
    )
    assert result.exit_code == 1
    assert "Error" in result.output


def test_constrain_rejects_an_unknown_handle():
    result = runner.invoke(
        app, ["constrain", "0.1", "0.1", "0.9", "0.9", "--width", "100", "--height", "100", "--handle", "up"]
    )
    assert result.exit_code == 1
    assert "Unknown handle" in result.output


def test_constrain_rejects_an_unknown_adapter():
    result = runner.invoke(
        app, ["constrain", "0.1", "0.1", "0.9", "0.9", "--width", "100", "--height", "100", "--adapter", "thumbor"]
    )
    assert result.exit_code == 1
    assert "Unknown adapter" in result.output


def test_parse_prints_the_selection():
    result = runner.invoke(
        app, ["parse", "?crop=0.1%2C0.2%2C0.8%2C0.9&cropxunits=1&cropyunits=1", "--width", "1000", "--height", "1000"]
    )
    assert result.exit_code == 0, result.output
    assert "crop 0.1,0.2,0.8,0.9" in result.output


def test_parse_rejects_a_querystring_without_crop():
    result = runner.invoke(app, ["parse", "?w=100", "--width", "1000", "--height", "1000"])
    assert result.exit_code == 1
    assert "valid crop" in result.output
