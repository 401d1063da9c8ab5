from kudiguard.rules import evaluate, hiring
from kudiguard.state import Intent, Recommendation


def test_all_three_checks_pass_approves(make_snapshot, resolved):
    snapshot = make_snapshot(revenue=500_000, expenses=350_000, savings=400_000)

    result = evaluate(snapshot, resolved(Intent.HIRING, snapshot, estimated_salary=40_000))

    assert result.recommendation == Recommendation.APPROVE
    assert result.intent == Intent.HIRING
    assert len(result.reasons) == 3
    assert result.actionable_steps == list(hiring.APPROVE_STEPS)
    assert result.inputs == {"estimated_salary": 40_000}
    assert result.financial_snapshot == snapshot


def test_no_check_passes_rejects(make_snapshot, resolved):
    snapshot = make_snapshot(revenue=300_000, expenses=290_000, savings=50_000)

    result = evaluate(snapshot, resolved(Intent.HIRING, snapshot, estimated_salary=50_000))

    assert result.recommendation == Recommendation.REJECT
    assert len(result.reasons) == 3
    assert result.actionable_steps == list(hiring.REJECT_STEPS)


def test_partial_strength_waits_with_the_gap(make_snapshot, resolved):
    snapshot = make_snapshot(revenue=500_000, expenses=350_000, savings=100_000)

    result = evaluate(snapshot, resolved(Intent.HIRING, snapshot, estimated_salary=40_000))

    assert result.recommendation == Recommendation.WAIT
    assert result.reasons == [
        "Your savings (₦100,000) are less than one month of expenses (₦350,000). Build a stronger safety net first."
    ]
    assert result.actionable_steps[:3] == list(hiring.WAIT_STEPS)
