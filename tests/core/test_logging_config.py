from cortexcloud.core.logging import (
    REDACTED_VALUE,
    add_service_context,
    configure_logging,
    get_logger,
    redact_sensitive_fields,
)


def test_configure_logging_allows_logger_creation() -> None:
    configure_logging(
        log_level="INFO",
        log_format="console",
        service_name="cortexcloud-tests",
        environment="test",
    )

    logger = get_logger("tests.logging")

    assert logger is not None


def test_redact_sensitive_fields_masks_nested_values() -> None:
    event = {
        "event": "users.login",
        "password": "hunter2",
        "headers": {"Authorization": "Bearer abc", "accept": "text/csv"},
        "items": [{"api_token": "t"}, {"name": "ok"}],
    }

    redacted = redact_sensitive_fields(None, "info", event)

    assert redacted["event"] == "users.login"
    assert redacted["password"] == REDACTED_VALUE
    assert redacted["headers"] == {"Authorization": REDACTED_VALUE, "accept": "text/csv"}
    assert redacted["items"] == [{"api_token": REDACTED_VALUE}, {"name": "ok"}]


def test_add_service_context_keeps_explicit_values() -> None:
    processor = add_service_context("cortexcloud", "test")

    event = processor(None, "info", {"event": "x", "environment": "override"})

    assert event["service"] == "cortexcloud"
    assert event["environment"] == "override"
    assert "request_id" not in event
