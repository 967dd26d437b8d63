from typer.testing import CliRunner

from excuses.client.__main__ import app


def test_client_refuses_to_start_without_a_terminal(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(app, ["--server", "localhost:1"])

    assert result.exit_code == 1
    assert "interactive terminal" in result.output
    # nothing was set up before giving up
    assert not (tmp_path / "logs").exists()


def test_help_mentions_terminal_requirement() -> None:
    result = CliRunner().invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "TTY" in result.output
