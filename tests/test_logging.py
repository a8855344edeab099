import logging

from gridnav.utils.logger import PACKAGE_LOGGER, get_logger, setup_logging
from gui.utils.logging import log


def test_get_logger_nests_under_package():
    assert get_logger("gridnav.store.store").name == "gridnav.store.store"
    assert get_logger("__main__").name == "gridnav.__main__"


def test_setup_logging_sets_level(monkeypatch):
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    previous = package_logger.level
    try:
        assert setup_logging("debug").level == logging.DEBUG
        monkeypatch.setenv("GRIDNAV_LOG_LEVEL", "WARNING")
        assert setup_logging().level == logging.WARNING
    finally:
        package_logger.setLevel(previous)


def test_gui_log_appends_context(caplog):
    with caplog.at_level(logging.INFO, logger="gridnav.gui"):
        log("Session started", snapshots=2, session="tab-1")

    assert "Session started (session=tab-1 snapshots=2)" in caplog.text
