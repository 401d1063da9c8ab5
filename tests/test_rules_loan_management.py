import pytest

from kudiguard.rules import evaluate
from kudiguard.rules.loan_management import monthly_repayment
from kudiguard.state import Intent, Recommendation

BASE = {
    "proposed_loan_amount": 300_000,
    "loan_term_months": 12,
    "debt_apr": 18,
    "total_monthly_debt_repayments": 20_000,
    "total_business_liabilities": 200_000,
    "total_business_assets": 1_000_000,
    "loan_purpose_is_revenue_generating": True,
    "consecutive_negative_cash_flow_months": 0,
}


def test_monthly_repayment_amortizes():
    assert monthly_repayment(100_000, 12, 12) == pytest.approx(8884.88, abs=0.01)
    assert monthly_repayment(120_000, 0, 12) == 10_000


def test_affordable_revenue_generating_loan_approves(make_snapshot, resolved):
    snapshot = make_snapshot()

    result = evaluate(snapshot, resolved(Intent.LOAN_MANAGEMENT, snapshot, **BASE))

    assert result.recommendation == Recommendation.APPROVE
    assert "debt-to-equity ratio (0.25x) is healthy" in result.reasons[0]


def test_repayments_above_forty_percent_of_revenue_reject(make_snapshot, resolved):
    snapshot = make_snapshot(revenue=500_000)
    payload = {**BASE, "proposed_loan_amount": 2_400_000, "debt_apr": 0}

    result = evaluate(snapshot, resolved(Intent.LOAN_MANAGEMENT, snapshot, **payload))

    assert result.recommendation == Recommendation.REJECT
    assert "44.0% of your monthly revenue" in result.reasons[0]


def test_high_debt_to_equity_rejects(make_snapshot, resolved):
    snapshot = make_snapshot()
    payload = {**BASE, "total_business_liabilities": 900_000}

    result = evaluate(snapshot, resolved(Intent.LOAN_MANAGEMENT, snapshot, **payload))

    assert result.recommendation == Recommendation.REJECT
    assert "9.00x" in result.reasons[0]


def test_liabilities_above_assets_reject(make_snapshot, resolved):
    snapshot = make_snapshot()
    payload = {**BASE, "total_business_liabilities": 1_200_000}

    result = evaluate(snapshot, resolved(Intent.LOAN_MANAGEMENT, snapshot, **payload))

    assert result.recommendation == Recommendation.REJECT
    assert "unlimited" in result.reasons[0]


def test_thin_savings_blocks_an_otherwise_strong_loan(make_snapshot, resolved):
    snapshot = make_snapshot(savings=100_000)

    result = evaluate(snapshot, resolved(Intent.LOAN_MANAGEMENT, snapshot, **BASE))

    assert result.recommendation == Recommendation.WAIT
    assert result.reasons == [
        "Your savings (₦100,000) are less than one month of expenses (₦350,000), leaving no cushion if a "
        "repayment falls in a slow month."
    ]
