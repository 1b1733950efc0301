"""Tests for logging helpers."""

from src.shared.logging import mask_email, redact_emails


def test_mask_email():
    assert mask_email("jane@example.org") == "j***@example.org"
    assert mask_email("") == ""
    assert mask_email("not-an-email") == "***"


def test_redact_emails_processor():
    event = {"event": "Sign-in link sent to jane@example.org", "count": 1}
    out = redact_emails(None, "info", event)
    assert out["event"] == "Sign-in link sent to j***@example.org"
    assert out["count"] == 1
