from kudiguard.rules import evaluate
from kudiguard.state import Intent, Recommendation

HISTORY = {
    "proposed_marketing_budget": 20_000,
    "total_outstanding_debts": 0,
    "is_localized_promotion": False,
    "has_run_previous_campaigns": True,
    "sales_increase_last_campaign_1": 12,
    "sales_increase_last_campaign_2": 14,
}


def test_debt_ratio_rejects_before_budget_rules(make_snapshot, resolved):
    snapshot = make_snapshot(revenue=500_000)
    payload = {**HISTORY, "total_outstanding_debts": 300_000, "proposed_marketing_budget": 400_000}

    result = evaluate(snapshot, resolved(Intent.MARKETING, snapshot, **payload))

    assert result.recommendation == Recommendation.REJECT
    assert len(result.reasons) == 1
    assert "60.0% of your monthly revenue" in result.reasons[0]


def test_proven_campaigns_with_small_budget_approve(make_snapshot, resolved):
    snapshot = make_snapshot()

    result = evaluate(snapshot, resolved(Intent.MARKETING, snapshot, **HISTORY))

    assert result.recommendation == Recommendation.APPROVE
    assert "13.0% on average" in result.reasons[0]


def test_budget_above_share_of_revenue_waits(make_snapshot, resolved):
    snapshot = make_snapshot(revenue=500_000)
    payload = {**HISTORY, "proposed_marketing_budget": 60_000}

    result = evaluate(snapshot, resolved(Intent.MARKETING, snapshot, **payload))

    assert result.recommendation == Recommendation.WAIT
    assert any("above the 10% threshold" in reason for reason in result.reasons)
    assert "Reduce the budget to at most 10% of monthly revenue (₦50,000)." in result.actionable_steps


def test_any_budget_without_revenue_is_blocked(make_snapshot, resolved):
    snapshot = make_snapshot(revenue=0, expenses=0, savings=100_000)

    result = evaluate(snapshot, resolved(Intent.MARKETING, snapshot, **HISTORY))

    assert result.recommendation == Recommendation.WAIT
    assert any("unlimited of your monthly revenue" in reason for reason in result.reasons)


def test_festive_season_is_presumed_from_question(make_snapshot, resolved):
    snapshot = make_snapshot()
    payload = {**HISTORY, "has_run_previous_campaigns": False}

    inputs = resolved(Intent.MARKETING, snapshot, question="Should I run a Christmas promo?", **payload)
    result = evaluate(snapshot, inputs)

    assert inputs["is_festive_or_peak_season"] is True
    assert result.recommendation == Recommendation.APPROVE
    assert any("peak season" in reason for reason in result.reasons)
