from kudiguard.errors import (
    InvariantViolationError,
    UpstreamDataMissingError,
    handle_error,
    redact_sensitive_data,
)
from kudiguard.rules.base import money, pct


def test_redaction_recurses_into_nested_payloads():
    data = {"email": "ada@example.com", "payload": [{"jwt": "abc", "estimated_salary": 40_000}]}

    assert redact_sensitive_data(data) == {
        "email": "[REDACTED]",
        "payload": [{"jwt": "[REDACTED]", "estimated_salary": 40_000}],
    }


def test_invariant_violation_hides_internal_details():
    error = InvariantViolationError("Critical hiring data is missing.", "KeyError: 'estimated_salary'")

    response = handle_error(error, "req-1")

    assert response["error"]["code"] == "MISSING_REQUIRED_FIELD"
    assert "KeyError" not in response["error"]["details"]
    assert response["meta"]["requestId"] == "req-1"


def test_profile_code_override():
    error = UpstreamDataMissingError("No profile.", code="PROFILE_NOT_FOUND")

    assert error.code == "PROFILE_NOT_FOUND"
    assert UpstreamDataMissingError.code == "FINANCIAL_DATA_NOT_FOUND"
    assert error.status_code == 404


def test_money_uses_configured_currency(monkeypatch):
    from kudiguard.config import settings

    monkeypatch.setattr(settings, "CURRENCY_SYMBOL", "$")

    assert money(1_500_000) == "$1,500,000"
    assert money(12.5) == "$12.50"
    assert pct(float("inf")) == "unlimited"


def test_settings_read_from_environment(monkeypatch):
    from kudiguard.config import Settings

    monkeypatch.setenv("CURRENCY_SYMBOL", "$")
    monkeypatch.setenv("API_VERSION", "v2.0")

    settings = Settings()

    assert settings.CURRENCY_SYMBOL == "$"
    assert settings.API_VERSION == "v2.0"
