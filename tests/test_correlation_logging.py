"""
Tests for correlation ID propagation and log formatting
"""
import json
import logging
import sys
import uuid

import pytest
from httpx import AsyncClient

from weatherflow.utils.logger import (
    ColorizedJSONFormatter,
    PrettyFormatter,
    generate_correlation_id,
    get_correlation_id,
    logger,
    set_correlation_id,
)


def make_record(msg="Weather served", level=logging.INFO, **extra):
    record = logging.LogRecord("weatherflow", level, __file__, 10, msg, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestCorrelationLogging:
    """Test correlation ID generation and propagation"""

    def test_correlation_id_generation(self):
        correlation_id = generate_correlation_id()
        assert isinstance(correlation_id, str)
        assert len(correlation_id) == 36  # UUID4 format

    def test_correlation_id_context(self):
        test_id = str(uuid.uuid4())

        assert get_correlation_id() is None

        set_correlation_id(test_id)
        assert get_correlation_id() == test_id

        logger.clear_context()
        assert get_correlation_id() is None

    def test_logger_context_setting(self):
        records = []

        class ListHandler(logging.Handler):
            def emit(self, record):
                records.append(record)

        handler = ListHandler()
        logger._logger.addHandler(handler)
        try:
            logger.set_context(correlation_id="test-correlation-123", request_id="req-1")
            logger.warning("Context check")
        finally:
            logger.clear_context()
            logger._logger.removeHandler(handler)

        assert records[-1].correlation_id == "test-correlation-123"
        assert records[-1].request_id == "req-1"
        assert records[-1].funcName == "test_logger_context_setting"

    def test_explicit_extra_wins_over_bound_context(self):
        records = []

        class ListHandler(logging.Handler):
            def emit(self, record):
                records.append(record)

        handler = ListHandler()
        logger._logger.addHandler(handler)
        try:
            logger.set_context(request_id="from-context")
            logger.warning("Override check", extra={"request_id": "from-extra"})
        finally:
            logger.clear_context()
            logger._logger.removeHandler(handler)

        assert records[-1].request_id == "from-extra"
        assert not hasattr(records[-1], "correlation_id")


class TestFormatters:

    def test_json_formatter_emits_context_and_extra(self):
        formatter = ColorizedJSONFormatter(enable_color=False)
        record = make_record(correlation_id="abc", status_code=200, route="/api/weather/{city}")

        payload = json.loads(formatter.format(record))

        assert payload["message"] == "Weather served"
        assert payload["level"] == "INFO"
        assert payload["correlation_id"] == "abc"
        assert payload["extra"] == {"status_code": 200, "route": "/api/weather/{city}"}

    def test_json_formatter_includes_exception(self):
        formatter = ColorizedJSONFormatter(enable_color=False)
        try:
            raise RuntimeError("generator failed")
        except RuntimeError:
            record = logging.LogRecord("weatherflow", logging.ERROR, __file__, 10, "boom", (), sys.exc_info())

        payload = json.loads(formatter.format(record))

        assert payload["exception"]["type"] == "RuntimeError"
        assert payload["exception"]["message"] == "generator failed"

    def test_json_formatter_colorizes_by_level(self):
        output = ColorizedJSONFormatter(enable_color=True).format(make_record(level=logging.ERROR))
        assert output.startswith("\033[31m")
        assert output.endswith("\033[0m")

    def test_pretty_formatter(self):
        output = PrettyFormatter(enable_color=False).format(make_record(correlation_id="xyz"))
        assert "INFO" in output
        assert "Weather served" in output
        assert "[correlation_id=xyz]" in output


@pytest.mark.asyncio
async def test_correlation_header_is_echoed(client: AsyncClient):
    response = await client.get("/api/weather/london", headers={"X-Correlation-ID": "trace-42"})

    assert response.headers["X-Correlation-ID"] == "trace-42"
    assert response.headers["X-Request-ID"] == "trace-42"


@pytest.mark.asyncio
async def test_correlation_id_is_generated_when_missing(client: AsyncClient):
    response = await client.get("/api/health")

    correlation_id = response.headers["X-Correlation-ID"]
    assert len(correlation_id) == 36
    assert response.headers["X-Request-ID"] == correlation_id
    assert "X-Response-Time" in response.headers


@pytest.mark.asyncio
async def test_error_responses_carry_correlation_header(app, client: AsyncClient):
    response = await client.get("/api/nowhere", headers={"X-Request-ID": "req-9"})

    assert response.status_code == 404
    assert response.headers["X-Correlation-ID"] == "req-9"


@pytest.mark.asyncio
async def test_request_context_does_not_leak(client: AsyncClient):
    await client.get("/api/weather/london", headers={"X-Correlation-ID": "trace-1"})

    assert get_correlation_id() is None
