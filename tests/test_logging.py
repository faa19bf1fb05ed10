from __future__ import annotations

import logging

import pytest

from threshold_charts.logging_config import LOG_LEVEL_ENV_VAR, level_for_verbosity, setup_logging


@pytest.fixture(autouse=True)
def _no_env_level(monkeypatch):
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)


@pytest.mark.parametrize(
    "verbosity, level",
    [(3, logging.DEBUG), (1, logging.DEBUG), (0, logging.INFO), (-1, logging.WARNING), (-5, logging.ERROR)],
)
def test_verbosity_maps_to_level(verbosity: int, level: int) -> None:
    assert level_for_verbosity(verbosity) == level


def test_environment_overrides_verbosity(monkeypatch) -> None:
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "warning")

    assert level_for_verbosity(1) == logging.WARNING
    assert setup_logging(verbosity=1).level == logging.WARNING


def test_log_file_receives_debug_records_at_default_verbosity(tmp_path) -> None:
    log_file = tmp_path / "charts.log"
    logger = setup_logging(verbosity=0, log_file=str(log_file))

    logging.getLogger("threshold_charts.decorations").debug("Decoration pass 1")
    for handler in logger.handlers:
        handler.close()

    assert "Decoration pass 1" in log_file.read_text()
    assert logger.handlers[0].level == logging.INFO


def test_matplotlib_chatter_is_quieted() -> None:
    setup_logging(verbosity=1)

    assert logging.getLogger("matplotlib").level == logging.WARNING
    assert not logging.getLogger("threshold_charts").propagate
