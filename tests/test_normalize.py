import pytest

from kudiguard.errors import InputValidationError
from kudiguard.fields import field_spec
from kudiguard.normalize import normalize_payload, parse_boolean, parse_number
from kudiguard.state import Intent


@pytest.mark.parametrize(
    "raw, expected",
    [
        (150000, 150000),
        ("150,000", 150000),
        ("₦150,000", 150000),
        ("150k", 150000),
        ("1.5m", 1500000),
        ("12.5", 12.5),
    ],
)
def test_parse_number_accepts_common_formats(raw, expected):
    assert parse_number(raw) == expected


@pytest.mark.parametrize("raw", [True, "lots", "", "1e5"])
def test_parse_number_rejects_non_numbers(raw):
    with pytest.raises(ValueError):
        parse_number(raw)


def test_parse_boolean_words():
    assert parse_boolean("Yes") is True
    assert parse_boolean("n") is False
    with pytest.raises(ValueError):
        parse_boolean("maybe")


def test_normalize_drops_unknown_and_blank_fields():
    payload = {
        "estimated_inventory_cost": "250k",
        "inventory_turnover_days": "",
        "outstanding_supplier_debts": None,
        "estimated_salary": 40_000,
    }

    assert normalize_payload(Intent.INVENTORY, payload) == {"estimated_inventory_cost": 250_000}


def test_normalize_coerces_booleans_and_enums():
    payload = {
        "revenue_growth_trend": "Consistent_Growth",
        "market_research_validates_demand": "yes",
    }

    assert normalize_payload(Intent.BUSINESS_EXPANSION, payload) == {
        "revenue_growth_trend": "consistent_growth",
        "market_research_validates_demand": True,
    }


@pytest.mark.parametrize(
    "intent, field, value",
    [
        (Intent.HIRING, "estimated_salary", 0),
        (Intent.INVENTORY, "outstanding_supplier_debts", -5),
        (Intent.INVENTORY, "supplier_discount_percentage", 150),
        (Intent.BUSINESS_EXPANSION, "revenue_growth_trend", "booming"),
        (Intent.LOAN_MANAGEMENT, "loan_term_months", 100_000),
        (Intent.EQUIPMENT, "financing_term_months", 400),
    ],
)
def test_out_of_range_values_raise(intent, field, value):
    with pytest.raises(InputValidationError) as excinfo:
        normalize_payload(intent, {field: value})

    assert excinfo.value.field == field
    assert excinfo.value.code == "INVALID_INPUT"


def test_zero_is_kept_where_allowed():
    spec = field_spec(Intent.INVENTORY, "outstanding_supplier_debts")

    assert spec.can_be_zero_or_none
    assert normalize_payload(Intent.INVENTORY, {spec.name: "0"}) == {spec.name: 0}
