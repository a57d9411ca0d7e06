import pytest
import json
import io
import logging
import structlog

from gitlab_api_client.configuration.logging_config import configure_logging, filter_sensitive_data

@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging and structlog configuration after each test."""
    yield
    structlog.reset_defaults()
    structlog._gitlab_api_client_configured = False
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

def test_filter_sensitive_data_processor():
    """Unit test for the sensitive data filter processor."""
    event_dict = {
        'token': 'glpat-secret',
        'private_token': 'glpat-secret',
        'value': 'db-password',
        'key': 'DATABASE_PASSWORD',
    }
    processed_dict = filter_sensitive_data(None, None, event_dict)
    assert processed_dict['token'] == '[FILTERED]'
    assert processed_dict['private_token'] == '[FILTERED]'
    assert processed_dict['value'] == '[FILTERED]'
    assert processed_dict['key'] == 'DATABASE_PASSWORD'

def test_logging_produces_filtered_json():
    """Test that log output is JSON with sensitive fields masked."""
    log_capture_stream = io.StringIO()

    configure_logging(log_level=logging.INFO, stream=log_capture_stream, force_reconfigure=True)

    logger = structlog.get_logger("gitlab_api_client.test")
    logger.info("variable created", key="API_URL", value="https://internal")

    log_output = log_capture_stream.getvalue().strip()

    try:
        log_json = json.loads(log_output)
    except json.JSONDecodeError:
        pytest.fail(f"Log output is not valid JSON: {log_output!r}")

    assert log_json['event'] == 'variable created'
    assert log_json['value'] == '[FILTERED]'
    assert log_json['key'] == 'API_URL'
    assert log_json['level'] == 'info'
    assert log_json['logger'] == 'gitlab_api_client.test'
    assert 'timestamp' in log_json

def test_log_level_filters_lower_levels():
    """Test that events below the configured level are dropped."""
    log_capture_stream = io.StringIO()
    configure_logging(log_level=logging.WARNING, stream=log_capture_stream, force_reconfigure=True)

    logger = structlog.get_logger("gitlab_api_client.test")
    logger.info("dropped")
    logger.warning("kept")

    lines = [json.loads(line) for line in log_capture_stream.getvalue().splitlines() if line]
    assert [line['event'] for line in lines] == ['kept']

def test_configure_logging_is_idempotent_without_force():
    """Test that repeated configuration keeps the first setup."""
    first_stream = io.StringIO()
    second_stream = io.StringIO()

    configure_logging(stream=first_stream, force_reconfigure=True)
    configure_logging(stream=second_stream)

    structlog.get_logger("gitlab_api_client.test").info("hello")
    assert "hello" in first_stream.getvalue()
    assert second_stream.getvalue() == ""
