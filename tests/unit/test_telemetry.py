"""Unit tests for telemetry scopes and reporters."""

import logging

import pytest

from fix_augment.telemetry import (
    LoggingReporter,
    SimpleReporter,
    TelemetryContext,
    TelemetryReporter,
)


@pytest.fixture
def telemetry_on(monkeypatch):
    monkeypatch.setenv("FIX_AUGMENT_TELEMETRY", "1")


class TestTelemetryContext:
    @pytest.mark.unit
    def test_disabled_by_default(self):
        reporter = SimpleReporter()
        tele = TelemetryContext(reporter)

        with tele("scope"):
            tele.count("things")

        assert reporter.timings == {}
        assert reporter.metrics == {}

    @pytest.mark.unit
    def test_no_reporters_is_no_op_even_when_enabled(self, telemetry_on):
        assert TelemetryContext() is TelemetryContext()

    @pytest.mark.unit
    def test_nested_scopes_and_metrics(self, telemetry_on):
        reporter = SimpleReporter()
        tele = TelemetryContext(reporter)

        with tele("chunk"):
            with tele("smart"):
                tele.count("chunks", 3)

        assert set(reporter.timings) == {"chunk", "chunk.smart"}
        assert list(reporter.metrics["chunk.smart.chunks"]) == [3]

    @pytest.mark.unit
    def test_debug_flag_enables(self, monkeypatch):
        monkeypatch.setenv("DEBUG", "1")
        reporter = SimpleReporter()

        with TelemetryContext(reporter)("x"):
            pass

        assert "x" in reporter.timings

    @pytest.mark.unit
    def test_failing_reporter_is_logged_not_raised(self, telemetry_on, caplog):
        class Broken:
            def record_timing(self, scope, duration, **metadata):
                raise RuntimeError("reporter down")

            def record_metric(self, scope, value, **metadata):
                raise RuntimeError("reporter down")

        tele = TelemetryContext(Broken())

        with caplog.at_level(logging.ERROR, logger="fix_augment.telemetry"):
            with tele("scope"):
                tele.metric("m", 1)

        assert caplog.text.count("Telemetry reporter 'Broken' failed") == 2

    @pytest.mark.unit
    def test_empty_scope_name_is_rejected(self, telemetry_on):
        tele = TelemetryContext(SimpleReporter())

        with pytest.raises(ValueError), tele(""):
            pass


class TestReporters:
    @pytest.mark.unit
    def test_reporters_satisfy_protocol(self):
        assert isinstance(SimpleReporter(), TelemetryReporter)
        assert isinstance(LoggingReporter(), TelemetryReporter)

    @pytest.mark.unit
    def test_simple_report(self, telemetry_on):
        reporter = SimpleReporter()
        tele = TelemetryContext(reporter)

        with tele("validate"):
            tele.count("warnings", 2)

        report = reporter.get_report()

        assert "=== Telemetry Report ===" in report
        assert "validate" in report
        assert "validate.warnings" in report

    @pytest.mark.unit
    def test_logging_reporter(self, telemetry_on, caplog):
        tele = TelemetryContext(LoggingReporter())

        with caplog.at_level(logging.DEBUG, logger="fix_augment.telemetry"):
            with tele("format"):
                tele.metric("size", 10)

        assert "Performance: format took" in caplog.text
        assert "Metric: format.size = 10" in caplog.text
