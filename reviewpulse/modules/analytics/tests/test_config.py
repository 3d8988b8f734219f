# reviewpulse/modules/analytics/tests/test_config.py

import logging
import pytest
from pydantic import ValidationError

from reviewpulse.core.config import AnalyticsSettings
from reviewpulse.core.logging_config import configure_logging


class TestAnalyticsSettings:
    """Test cases for analytics settings"""

    def test_defaults(self):
        settings = AnalyticsSettings()

        assert settings.default_trend_period == "30d"
        assert settings.dashboard_trend_period == "12m"
        assert settings.unknown_tenant_name == "Unknown Profile"

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("REVIEWPULSE_DEFAULT_TREND_PERIOD", "7d")
        monkeypatch.setenv("REVIEWPULSE_STORE_TIMEOUT_SECONDS", "5")

        settings = AnalyticsSettings()

        assert settings.default_trend_period == "7d"
        assert settings.store_timeout_seconds == 5.0

    def test_rejects_unknown_period(self):
        with pytest.raises(ValidationError):
            AnalyticsSettings(default_trend_period="2w")

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValidationError):
            AnalyticsSettings(store_timeout_seconds=0)

    def test_log_level_normalized(self):
        assert AnalyticsSettings(log_level="debug").log_level == "DEBUG"


class TestConfigureLogging:
    """Test cases for logging setup"""

    def test_quiets_sql_logging_outside_debug(self):
        configure_logging(AnalyticsSettings(debug=False, log_level="info"))

        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
