import structlog

from firebird_hosting._logging import configure_logging, get_component_logger, get_logger


def test_component_logger_binds_component(mock_logger):
    logger = get_component_logger("FirebirdServer", mock_logger)

    mock_logger.bind.assert_called_once_with(component="FirebirdServer")
    assert logger is mock_logger


def test_default_loggers_are_structlog():
    structlog.reset_defaults()

    assert get_logger() is not None
    assert get_component_logger("Eventing") is not None


def test_configure_logging_debug(monkeypatch):
    monkeypatch.setenv("FIREBIRD_HOSTING_DEBUG", "true")
    try:
        configure_logging()
        assert structlog.is_configured()
    finally:
        structlog.reset_defaults()
