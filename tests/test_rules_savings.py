from kudiguard.rules import evaluate
from kudiguard.state import Intent, Recommendation

BASE = {
    "proposed_savings_amount": 30_000,
    "is_volatile_industry": False,
    "consecutive_negative_cash_flow_months": 0,
    "outstanding_debts": 0,
    "is_seasonal_windfall_month": False,
}


def test_affordable_amount_below_target_buffer_approves(make_snapshot, resolved):
    snapshot = make_snapshot(revenue=500_000, expenses=350_000, savings=400_000)

    result = evaluate(snapshot, resolved(Intent.SAVINGS, snapshot, **BASE))

    assert result.recommendation == Recommendation.APPROVE
    assert "sustainable at 20.0% of your net income" in result.reasons[0]


def test_amount_above_net_income_rejects(make_snapshot, resolved):
    snapshot = make_snapshot()
    payload = {**BASE, "proposed_savings_amount": 200_000}

    result = evaluate(snapshot, resolved(Intent.SAVINGS, snapshot, **payload))

    assert result.recommendation == Recommendation.REJECT
    assert "Lower the monthly savings amount to what your net income can cover (₦150,000)." in (
        result.actionable_steps
    )


def test_expensive_debt_rejects(make_snapshot, resolved):
    snapshot = make_snapshot()
    payload = {**BASE, "outstanding_debts": 50_000, "debt_apr": 35}

    result = evaluate(snapshot, resolved(Intent.SAVINGS, snapshot, **payload))

    assert result.recommendation == Recommendation.REJECT
    assert "35% a year" in result.reasons[0]


def test_repeated_negative_cash_flow_rejects(make_snapshot, resolved):
    snapshot = make_snapshot()
    payload = {**BASE, "consecutive_negative_cash_flow_months": 2}

    result = evaluate(snapshot, resolved(Intent.SAVINGS, snapshot, **payload))

    assert result.recommendation == Recommendation.REJECT


def test_large_share_of_net_income_waits(make_snapshot, resolved):
    snapshot = make_snapshot()
    payload = {**BASE, "proposed_savings_amount": 100_000}

    result = evaluate(snapshot, resolved(Intent.SAVINGS, snapshot, **payload))

    assert result.recommendation == Recommendation.WAIT
    assert any("66.7% of your monthly net income" in reason for reason in result.reasons)


def test_growth_stage_with_full_buffer_gets_reinvestment_note(make_snapshot, resolved):
    snapshot = make_snapshot(revenue=500_000, expenses=350_000, savings=2_100_000)
    payload = {**BASE, "is_growth_stage": True}

    result = evaluate(snapshot, resolved(Intent.SAVINGS, snapshot, **payload))

    assert result.recommendation == Recommendation.APPROVE
    assert "Split surplus cash between your reserve and planned growth investments." in result.actionable_steps
