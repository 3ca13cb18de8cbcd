import logging

import pytest

from conftest import ISS_L1, ISS_L2, ISS_NAME, splice
from tracker import TLEManager

HST_NAME = "HST"
HST_L1 = "1 20580U 90037B   14020.50000000  .00000500  00000-0  30000-4 0  9990"
HST_L2 = "2 20580  28.4700 200.0000 0002800  80.0000 280.0000 15.03000000100001"


def test_load_single_satellite(tle_file):
    mgr = TLEManager(str(tle_file))
    assert mgr.list_satellites() == [ISS_NAME]
    assert mgr.get_satellite(ISS_NAME).catalog_number == 25544


def test_lookup_is_case_insensitive(tle_file):
    mgr = TLEManager(str(tle_file))
    assert mgr.get_satellite("iss (zarya)") is mgr.get_satellite(ISS_NAME)
    assert mgr.get_satellite("  ISS (Zarya) ") is not None
    assert mgr.get_satellite("METEOR") is None


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        TLEManager(str(tmp_path / "nope.txt"))


def test_multiple_blocks_and_blank_lines(tmp_path):
    path = tmp_path / "mixed.txt"
    path.write_text(f"{ISS_NAME}\n{ISS_L1}\n{ISS_L2}\n\n{HST_NAME}\r\n{HST_L1}\r\n{HST_L2}\r\n")
    mgr = TLEManager(str(path))
    assert mgr.list_satellites() == [ISS_NAME, HST_NAME]
    assert mgr.get_satellite(HST_NAME).catalog_number == 20580


def test_stray_line_is_skipped(tmp_path, caplog):
    path = tmp_path / "stray.txt"
    path.write_text(f"# updated daily\n{ISS_NAME}\n{ISS_L1}\n{ISS_L2}\n")
    with caplog.at_level(logging.WARNING, logger="tracker.tle"):
        mgr = TLEManager(str(path))
    assert mgr.list_satellites() == [ISS_NAME]
    assert "Skipping unexpected line" in caplog.text


def test_bad_block_is_skipped(tmp_path, caplog):
    bad_l2 = splice(ISS_L2, 8, 16, " 51.6x98")
    path = tmp_path / "bad.txt"
    path.write_text(f"BROKEN\n{ISS_L1}\n{bad_l2}\n{HST_NAME}\n{HST_L1}\n{HST_L2}\n")
    with caplog.at_level(logging.WARNING, logger="tracker.tle"):
        mgr = TLEManager(str(path))
    assert mgr.list_satellites() == [HST_NAME]
    assert "Failed to parse TLE for BROKEN" in caplog.text
    assert "inclination" in caplog.text


def test_loaded_sets_keep_their_lines(tle_file):
    sat = TLEManager(str(tle_file)).get_satellite(ISS_NAME)
    assert sat.line1 == ISS_L1
    assert sat.line2 == ISS_L2
