"""Tests for structured logging helpers."""

from unittest.mock import Mock

from rotation_map.logging.config import (
    configure_logging,
    get_signal_logger,
    log_refresh_outcome,
    log_signal_emitted,
)


class TestLoggingHelpers:
    """Test standardized log records for signals and refreshes."""

    def setup_method(self):
        """Set up a mock logger whose bind returns itself."""
        configure_logging(level="DEBUG", format_json=True)

        self.mock_logger = Mock()
        self.mock_logger.bind.return_value = self.mock_logger

    def test_signal_emitted(self):
        log_signal_emitted(
            self.mock_logger, "coin_acceleration", "Ethereum (ETH) accelerating hardest",
            {"coin_id": "ethereum"}
        )

        self.mock_logger.bind.assert_any_call(
            signal_kind="coin_acceleration",
            signal_message="Ethereum (ETH) accelerating hardest",
        )
        self.mock_logger.bind.assert_any_call(context={"coin_id": "ethereum"})
        self.mock_logger.info.assert_called_once_with("Rotation signal emitted")

    def test_refresh_applied_logs_info(self):
        log_refresh_outcome(self.mock_logger, 3, "applied")

        self.mock_logger.bind.assert_called_once_with(refresh_id=3, refresh_outcome="applied")
        self.mock_logger.info.assert_called_once_with("Refresh applied")
        self.mock_logger.warning.assert_not_called()

    def test_refresh_not_applied_logs_warning(self):
        log_refresh_outcome(self.mock_logger, 4, "stale", {"latest": 5})

        self.mock_logger.warning.assert_called_once_with("Refresh not applied")
        self.mock_logger.info.assert_not_called()

    def test_signal_logger_is_usable(self):
        """Bound signal logger accepts structured calls after configuration."""
        logger = get_signal_logger("tests.signals")
        logger.info("Rotation signal emitted", signal_kind="sector_leading")
