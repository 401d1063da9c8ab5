import pytest

from kudiguard.fields import CATALOG, field_spec, fields_for
from kudiguard.resolver import Answered, NeedsField, resolve
from kudiguard.state import Intent, ProfileFlags


@pytest.mark.parametrize("intent", list(Intent))
def test_empty_payload_asks_first_field(intent, make_snapshot):
    resolution = resolve(intent, {}, make_snapshot())

    assert isinstance(resolution, NeedsField)
    needed = resolution.data_needed
    assert needed.field == fields_for(intent)[0].name
    assert needed.payload_so_far == {}
    assert needed.intent == intent


def test_partial_payload_is_echoed_and_not_mutated(make_snapshot):
    payload = {"estimated_inventory_cost": 100_000}

    resolution = resolve(Intent.INVENTORY, payload, make_snapshot())

    assert resolution.data_needed.field == "inventory_turnover_days"
    assert resolution.data_needed.payload_so_far == {"estimated_inventory_cost": 100_000}
    assert payload == {"estimated_inventory_cost": 100_000}


def test_positive_only_field_is_asked_again_when_zero(make_snapshot):
    resolution = resolve(Intent.HIRING, {"estimated_salary": 0}, make_snapshot())

    assert isinstance(resolution, NeedsField)
    assert resolution.data_needed.field == "estimated_salary"
    assert resolution.data_needed.can_be_zero_or_none is False


def test_zero_is_a_valid_answer_when_allowed(make_snapshot):
    payload = {
        "estimated_inventory_cost": 100_000,
        "inventory_turnover_days": 20,
        "outstanding_supplier_debts": 0,
    }

    resolution = resolve(Intent.INVENTORY, payload, make_snapshot(), "Can I restock?")

    assert isinstance(resolution, Answered)
    assert resolution.inputs["outstanding_supplier_debts"] == 0
    assert resolution.inputs["supplier_credit_terms_days"] is None


def test_fmcg_profile_triggers_credit_term_fields(make_snapshot):
    payload = {
        "estimated_inventory_cost": 100_000,
        "inventory_turnover_days": 20,
        "outstanding_supplier_debts": 0,
    }

    resolution = resolve(Intent.INVENTORY, payload, make_snapshot(), "", ProfileFlags(is_fmcg_vendor=True))

    assert resolution.data_needed.field == "supplier_credit_terms_days"


def test_bulk_question_asks_discount_then_storage(make_snapshot):
    payload = {
        "estimated_inventory_cost": 100_000,
        "inventory_turnover_days": 20,
        "outstanding_supplier_debts": 0,
    }
    question = "Should I buy in bulk at a discount?"

    first = resolve(Intent.INVENTORY, payload, make_snapshot(), question)
    assert first.data_needed.field == "supplier_discount_percentage"

    second = resolve(Intent.INVENTORY, {**payload, "supplier_discount_percentage": 20}, make_snapshot(), question)
    assert second.data_needed.field == "storage_cost_percentage_of_order"


def test_power_solution_is_presumed_from_question(make_snapshot):
    payload = {
        "estimated_equipment_cost": 150_000,
        "is_critical_replacement": False,
        "expected_revenue_increase_monthly": 0,
        "expected_expense_decrease_monthly": 30_000,
        "existing_debt_load_monthly_repayments": 0,
    }

    with_generator = resolve(Intent.EQUIPMENT, payload, make_snapshot(), "Should I buy a generator?")
    assert with_generator.data_needed.field == "current_energy_cost_monthly"

    with_freezer = resolve(Intent.EQUIPMENT, payload, make_snapshot(), "Should I buy a freezer?")
    assert isinstance(with_freezer, Answered)
    assert with_freezer.inputs["is_power_solution"] is False
    assert with_freezer.inputs["current_energy_cost_monthly"] == 0


def test_expensive_equipment_asks_about_financing(make_snapshot):
    payload = {
        "estimated_equipment_cost": 1_500_000,
        "is_critical_replacement": False,
        "expected_revenue_increase_monthly": 100_000,
        "expected_expense_decrease_monthly": 0,
        "existing_debt_load_monthly_repayments": 0,
        "has_diversified_revenue_streams": True,
    }

    resolution = resolve(Intent.EQUIPMENT, payload, make_snapshot(savings=400_000))
    assert resolution.data_needed.field == "financing_required"

    financed = resolve(Intent.EQUIPMENT, {**payload, "financing_required": True}, make_snapshot(savings=400_000))
    assert financed.data_needed.field == "financing_interest_rate_annual_percentage"


def test_growth_stage_only_asked_when_buffer_meets_target(make_snapshot):
    payload = {
        "proposed_savings_amount": 20_000,
        "is_volatile_industry": False,
        "consecutive_negative_cash_flow_months": 0,
        "outstanding_debts": 0,
        "is_seasonal_windfall_month": False,
    }

    thin_buffer = resolve(Intent.SAVINGS, payload, make_snapshot(savings=100_000))
    assert isinstance(thin_buffer, Answered)
    assert thin_buffer.inputs["is_growth_stage"] is False
    assert thin_buffer.inputs["debt_apr"] == 0

    deep_buffer = resolve(Intent.SAVINGS, payload, make_snapshot(savings=2_000_000))
    assert deep_buffer.data_needed.field == "is_growth_stage"


def test_resolved_inputs_cover_every_catalog_field(resolved, make_snapshot):
    inputs = resolved(Intent.HIRING, make_snapshot(), estimated_salary=40_000)

    assert set(inputs.values) == {spec.name for spec in CATALOG[Intent.HIRING]}


def test_field_spec_unknown_name_raises():
    with pytest.raises(KeyError):
        field_spec(Intent.HIRING, "proposed_loan_amount")


def test_answers_to_untriggered_fields_are_replaced_by_defaults(make_snapshot, resolved):
    from kudiguard.rules import evaluate
    from kudiguard.state import Recommendation

    snapshot = make_snapshot()
    payload = {
        "estimated_inventory_cost": 100_000,
        "inventory_turnover_days": 20,
        "outstanding_supplier_debts": 0,
        "supplier_credit_terms_days": 90,
        "average_receivables_turnover_days": 90,
    }

    inputs = resolved(Intent.INVENTORY, snapshot, profile=ProfileFlags(is_fmcg_vendor=False), **payload)

    assert inputs["supplier_credit_terms_days"] is None
    assert inputs["average_receivables_turnover_days"] is None
    assert evaluate(snapshot, inputs).recommendation == Recommendation.APPROVE


def test_untriggered_answer_does_not_trigger_dependent_fields(make_snapshot):
    payload = {
        "estimated_inventory_cost": 100_000,
        "inventory_turnover_days": 20,
        "outstanding_supplier_debts": 0,
        "supplier_discount_percentage": 20,
    }

    resolution = resolve(Intent.INVENTORY, payload, make_snapshot(), "Can I restock?")

    assert isinstance(resolution, Answered)
    assert resolution.inputs["supplier_discount_percentage"] is None
    assert resolution.inputs["storage_cost_percentage_of_order"] is None


def test_presumed_fields_keep_a_stated_value(make_snapshot, resolved):
    payload = {
        "estimated_equipment_cost": 150_000,
        "is_critical_replacement": False,
        "expected_revenue_increase_monthly": 0,
        "expected_expense_decrease_monthly": 30_000,
        "existing_debt_load_monthly_repayments": 0,
        "is_power_solution": True,
        "current_energy_cost_monthly": 50_000,
    }

    inputs = resolved(Intent.EQUIPMENT, make_snapshot(), question="Should I buy a freezer?", **payload)

    assert inputs["is_power_solution"] is True
    assert inputs["current_energy_cost_monthly"] == 50_000
