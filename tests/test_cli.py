import pytest

from authotp import cli, totp

KEY = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"


@pytest.fixture(autouse=True)
def frozen_clock(monkeypatch):
    monkeypatch.setattr(totp.time, "time", lambda: 59)
    monkeypatch.delenv(cli.SECRET_ENV, raising=False)


def test_secret(capsys):
    assert cli.main(["secret"]) == 0
    assert len(capsys.readouterr().out.strip()) == 32


def test_secret_length(capsys):
    assert cli.main(["secret", "--length", "10"]) == 0
    assert len(capsys.readouterr().out.strip()) == 16


def test_token(capsys):
    assert cli.main(["token", "--secret", KEY]) == 0
    assert capsys.readouterr().out.strip() == "287082"


def test_token_options(capsys):
    assert cli.main(["token", "--secret", KEY, "--digits", "8"]) == 0
    assert capsys.readouterr().out.strip() == "94287082"


def test_token_from_environment(capsys, monkeypatch):
    monkeypatch.setenv(cli.SECRET_ENV, KEY)
    assert cli.main(["token"]) == 0
    assert capsys.readouterr().out.strip() == "287082"


def test_check_valid(capsys):
    assert cli.main(["check", "287082", "--secret", KEY]) == 0
    assert capsys.readouterr().out.strip() == "valid (delta +0)"


def test_check_window(capsys):
    assert cli.main(["check", "359152", "--secret", KEY, "--window", "1"]) == 0
    assert capsys.readouterr().out.strip() == "valid (delta +1)"


def test_check_invalid(capsys):
    assert cli.main(["check", "000000", "--secret", KEY]) == 1
    assert capsys.readouterr().out.strip() == "invalid"


def test_uri(capsys):
    assert cli.main(["uri", "--secret", KEY, "--user", "alice", "--service", "ACME"]) == 0
    assert capsys.readouterr().out.strip() == "otpauth://totp/ACME:alice?secret=" + KEY + "&issuer=ACME"


def test_missing_secret(capsys):
    assert cli.main(["token"]) == 2
    assert capsys.readouterr().err.startswith("error: no secret given")


def test_invalid_option(capsys):
    assert cli.main(["token", "--secret", KEY, "--step", "0"]) == 2
    assert "step" in capsys.readouterr().err


def test_no_command(capsys):
    assert cli.main([]) == 2
    assert "usage" in capsys.readouterr().out
