import pytest

from conftest import ISS_NAME
from main import main

STATION = ['--name', 'London', '--lat', '51.5074', '--lon', '-0.1278', '--height', '20']


@pytest.fixture(autouse=True)
def _logging(restore_logging):
    yield


def test_predict(tle_file, capsys):
    code = main(['predict', *STATION, '--tle-file', str(tle_file), '-n', ISS_NAME,
                 '-t', '2014/01/20 23:00:00', '--downlink', '145.8e6'])
    out = capsys.readouterr().out
    assert code == 0
    assert f"=== {ISS_NAME} @ 2014/01/20 23:00:00 UTC ===" in out
    assert "Azimuth:" in out
    # one perigee passage after epoch
    assert "Orbit:      86848" in out
    assert "RX:         145." in out


def test_track_starts_on_step_boundary(tle_file, capsys):
    code = main(['track', *STATION, '--tle-file', str(tle_file), '-n', 'iss (zarya)',
                 '-t', '2014/01/20 23:00:05', '-s', '30', '-c', '3'])
    out = capsys.readouterr().out
    assert code == 0
    assert "2014/01/20 23:00:30" in out
    assert "2014/01/20 23:01:00" in out
    assert "2014/01/20 23:01:30" in out
    assert "2014/01/20 23:02:00" not in out


def test_sun(capsys):
    code = main(['sun', *STATION, '-t', '2020/06/20 12:00:00'])
    out = capsys.readouterr().out
    assert code == 0
    assert "=== SUN @ 2020/06/20 12:00:00 UTC ===" in out


def test_crosscheck(tle_file, capsys):
    code = main(['crosscheck', *STATION, '--tle-file', str(tle_file), '-n', ISS_NAME,
                 '-t', '2014/01/20 23:00:00', '-c', '2'])
    out = capsys.readouterr().out
    assert code == 0
    assert "Worst difference:" in out


def test_missing_tle_file(tmp_path, capsys):
    code = main(['predict', *STATION, '--tle-file', str(tmp_path / 'none.txt'), '-n', ISS_NAME])
    assert code == 1
    assert "✗" in capsys.readouterr().out


def test_unknown_satellite(tle_file, capsys):
    code = main(['predict', *STATION, '--tle-file', str(tle_file), '-n', 'MIR'])
    assert code == 1
    assert "Satellite not found: MIR" in capsys.readouterr().out


def test_bad_time(tle_file, capsys):
    code = main(['predict', *STATION, '--tle-file', str(tle_file), '-n', ISS_NAME, '-t', 'soon'])
    assert code == 1


def test_no_mode(capsys):
    assert main([]) == 1
