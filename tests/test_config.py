"""Tests for configuration loading and validation."""

from dataclasses import replace

import pytest

from booking_core.config import AppConfig, EmailConfig, ScheduleConfig, _validate_config


class TestConfigValidation:
    def test_default_config_passes_validation(self):
        config = AppConfig()
        _validate_config(config)  # should not raise

    def test_default_grid_is_nine_to_five_half_hourly(self):
        schedule = ScheduleConfig()
        assert (schedule.start_hour, schedule.end_hour, schedule.interval_minutes) == (9, 17, 30)

    def test_start_after_end_rejected(self):
        config = replace(AppConfig(), schedule=ScheduleConfig(start_hour=17, end_hour=9, interval_minutes=30))
        with pytest.raises(ValueError, match="SLOT_START_HOUR"):
            _validate_config(config)

    def test_end_hour_past_midnight_rejected(self):
        config = replace(AppConfig(), schedule=ScheduleConfig(start_hour=9, end_hour=25, interval_minutes=30))
        with pytest.raises(ValueError, match="SLOT_END_HOUR"):
            _validate_config(config)

    def test_zero_interval_rejected(self):
        config = replace(AppConfig(), schedule=ScheduleConfig(start_hour=9, end_hour=17, interval_minutes=0))
        with pytest.raises(ValueError, match="SLOT_INTERVAL_MINUTES"):
            _validate_config(config)

    def test_non_positive_timeout_rejected(self):
        config = replace(AppConfig(), email=replace(EmailConfig(), http_timeout_sec=0.0))
        with pytest.raises(ValueError, match="HTTP_TIMEOUT_SECONDS"):
            _validate_config(config)


class TestEnvParsing:
    def test_safe_int_parsing(self):
        from booking_core.config import _safe_int

        assert _safe_int("NONEXISTENT_VAR_12345", "42") == 42

    def test_safe_int_bad_value(self, monkeypatch):
        from booking_core.config import _safe_int

        monkeypatch.setenv("BOOKING_TEST_INT", "nine")
        with pytest.raises(ValueError, match="BOOKING_TEST_INT"):
            _safe_int("BOOKING_TEST_INT", "9")

    def test_safe_float_parsing(self):
        from booking_core.config import _safe_float

        assert _safe_float("NONEXISTENT_VAR_12345", "3.14") == pytest.approx(3.14)

    @pytest.mark.parametrize("raw,expected", [("true", True), ("1", True), ("No", False), ("", False)])
    def test_safe_bool_parsing(self, monkeypatch, raw, expected):
        from booking_core.config import _safe_bool

        monkeypatch.setenv("BOOKING_TEST_BOOL", raw)
        assert _safe_bool("BOOKING_TEST_BOOL", "false") is expected

    def test_safe_bool_bad_value(self, monkeypatch):
        from booking_core.config import _safe_bool

        monkeypatch.setenv("BOOKING_TEST_BOOL", "maybe")
        with pytest.raises(ValueError, match="BOOKING_TEST_BOOL"):
            _safe_bool("BOOKING_TEST_BOOL", "false")

    def test_email_configured_requires_service_and_key(self):
        assert not EmailConfig(service_id="", public_key="pk").configured
        assert EmailConfig(service_id="svc", public_key="pk").configured
