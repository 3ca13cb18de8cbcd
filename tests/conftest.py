import logging

import pytest

from orbit import Observer, parse_tle

ISS_NAME = "ISS (ZARYA)"
ISS_L1 = "1 25544U 98067A   14020.93268519  .00009878  00000-0  18200-3 0  5082"
ISS_L2 = "2 25544  51.6498 109.4756 0003572  55.9686 274.8005 15.49815350868473"


@pytest.fixture
def iss():
    return parse_tle(ISS_NAME, ISS_L1, ISS_L2)


@pytest.fixture
def london():
    return Observer("London", 51.5074, -0.1278, 20.0)


@pytest.fixture
def tle_file(tmp_path):
    path = tmp_path / "stations.txt"
    path.write_text(f"{ISS_NAME}\n{ISS_L1}\n{ISS_L2}\n")
    return path


@pytest.fixture
def restore_logging():
    """Undo root logger changes made by setup_logging()."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


def splice(line: str, start: int, end: int, text: str) -> str:
    """Replace columns [start, end) of a TLE line."""
    assert len(text) == end - start
    return line[:start] + text + line[end:]
