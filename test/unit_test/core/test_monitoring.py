from unittest.mock import MagicMock, patch

from tesvik_portal.core import monitoring


class TestInitializeLogfire:
    def test_disabled_by_default(self):
        with patch.object(monitoring, "LOGFIRE_ENABLED", False), patch.object(monitoring, "logfire") as logfire:
            assert monitoring.initialize_logfire() is False
        logfire.configure.assert_not_called()

    def test_missing_token(self):
        with patch.object(monitoring, "LOGFIRE_ENABLED", True), patch.object(
            monitoring, "LOGFIRE_TOKEN", ""
        ), patch.object(monitoring, "logfire") as logfire:
            assert monitoring.initialize_logfire() is False
        logfire.configure.assert_not_called()

    def test_enabled_configures_and_instruments(self):
        app = MagicMock()
        with patch.object(monitoring, "LOGFIRE_ENABLED", True), patch.object(
            monitoring, "LOGFIRE_TOKEN", "token"
        ), patch.object(monitoring, "logfire") as logfire:
            assert monitoring.initialize_logfire(app) is True
        logfire.configure.assert_called_once()
        logfire.instrument_fastapi.assert_called_once_with(app=app)


class TestLogHelpers:
    def test_noop_when_disabled(self):
        with patch.object(monitoring, "LOGFIRE_ENABLED", False), patch.object(monitoring, "logfire") as logfire:
            monitoring.log_search("teşvik", 3, 12.5)
            monitoring.log_chat_answer("1", 2, 100.0)
            monitoring.log_api_request("GET", "/health", 200, 1.0)
            monitoring.log_error("ValueError", "boom")
        logfire.info.assert_not_called()
        logfire.error.assert_not_called()

    def test_log_search_when_enabled(self):
        with patch.object(monitoring, "LOGFIRE_ENABLED", True), patch.object(monitoring, "logfire") as logfire:
            monitoring.log_search("teşvik", 3, 12.5, {"keyword": 3})
        logfire.info.assert_called_once()
        assert logfire.info.call_args.kwargs["match_types"] == {"keyword": 3}

    def test_logfire_failure_is_not_raised(self):
        with patch.object(monitoring, "LOGFIRE_ENABLED", True), patch.object(monitoring, "logfire") as logfire:
            logfire.info.side_effect = RuntimeError("exporter down")
            monitoring.log_chat_answer("1", 2, 100.0)
