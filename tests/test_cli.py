# tests/test_cli.py

import logging
from unittest.mock import patch

import pytest

from lunarphase import cli


def test_day_command(capsys):
    assert cli.main(["day", "2020-10-31"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("2020-10-31")
    assert "full moon" in out


def test_bare_date_is_day(capsys):
    assert cli.main(["2020-10-16"]) == 0
    assert "new moon" in capsys.readouterr().out


def test_phase_command(capsys):
    assert cli.main(["phase", "2020-10-31T14:48:59.300"]) == 0
    out = capsys.readouterr().out
    assert "Phase  = 180.0000" in out or "Phase  = 179.9999" in out
    assert "Next" in out


def test_events_command(capsys):
    assert cli.main(["events", "2020-10-01", "2020-11-01"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 5
    assert lines[0].startswith("2020-10-01T21:0")
    assert lines[-1].endswith("full moon")


def test_events_daily_reverse(capsys):
    assert cli.main(["events", "2020-11-01", "2020-10-01", "--daily"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert [ln.split()[0] for ln in lines] == ["2020-10-31", "2020-10-23", "2020-10-16", "2020-10-10", "2020-10-01"]


def test_unknown_command_exits():
    with pytest.raises(SystemExit):
        cli.main(["nonsense"])


def test_log_level_from_env(monkeypatch):
    monkeypatch.setenv(cli.LOG_LEVEL_ENV, "debug")
    with patch("logging.basicConfig") as basic:
        cli.main(["day", "2020-10-31"])
    assert basic.call_args.kwargs["level"] == logging.DEBUG


def test_ephem_dispatch():
    with patch("lunarphase.diagnostics.validate_events.main", autospec=True, return_value=0) as m:
        assert cli.main(["ephem", "validate-events", "--year-start", "2000"]) == 0
    m.assert_called_once_with(["--year-start", "2000"])


def test_negative_year_is_not_a_day_shorthand():
    with pytest.raises(SystemExit) as exc:
        cli.main(["-0586-07-24"])
    assert exc.value.code == 2


def test_bad_day_reports_usage_error(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["day", "2020-13-01"])
    assert exc.value.code == 2
    assert "lunarphase day" in capsys.readouterr().err
