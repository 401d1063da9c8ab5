from kudiguard.rules.base import RuleBook, debt_ratio, money, pct
from kudiguard.state import DecisionResult, FinancialSnapshot, ResolvedInputs

MAX_DEBT_RATIO = 0.40
MAX_BUDGET_SHARE = 10    # % of monthly revenue
TEST_BUDGET_SHARE = 5
MIN_CAMPAIGN_LIFT = 10   # average % sales increase of the last two campaigns
PEAK_SEASON_MARGIN = 15

APPROVE_STEPS = (
    "Set a clear goal for the campaign (new customers, repeat visits or sales) and track it weekly.",
    "Spend the budget in stages and stop channels that do not bring customers within two weeks.",
)
WAIT_STEPS = (
    "Start with a smaller test campaign to measure the response before committing the full budget.",
    "Keep a simple record of sales before, during and after each promotion.",
)
REJECT_STEPS = (
    "Pause non-essential marketing spend until your debts are under control.",
    "Focus on increasing revenue from existing customers and reducing expenses to restore profitability.",
)


def evaluate(snapshot: FinancialSnapshot, inputs: ResolvedInputs) -> DecisionResult:
    budget = inputs["proposed_marketing_budget"]
    debts = inputs["total_outstanding_debts"]
    revenue = snapshot.monthly_revenue
    book = RuleBook(snapshot, inputs)

    debt_to_revenue = debt_ratio(debts, revenue)
    book.reject(
        debt_to_revenue > MAX_DEBT_RATIO,
        f"Your outstanding debts ({money(debts)}) are {pct(debt_to_revenue * 100)} of your monthly revenue, "
        f"above the 40% limit for discretionary spending.",
        "Prioritize paying down outstanding debts before funding promotions.",
    )
    book.reject(
        snapshot.net_income < 0,
        f"Your business is currently unprofitable (Net Income: {money(snapshot.net_income)}). Marketing spend "
        f"would deepen the monthly loss.",
    )
    if book.rejected:
        return _verdict(book)

    budget_share = budget / revenue * 100 if revenue > 0 else float("inf")
    book.blocker(
        budget_share > MAX_BUDGET_SHARE,
        f"The proposed budget ({money(budget)}) is {pct(budget_share)} of your monthly revenue, above the "
        f"{MAX_BUDGET_SHARE}% threshold.",
        f"Reduce the budget to at most {MAX_BUDGET_SHARE}% of monthly revenue "
        f"({money(revenue * MAX_BUDGET_SHARE / 100)}).",
    )
    book.blocker(
        snapshot.current_savings < snapshot.monthly_expenses,
        f"Your savings ({money(snapshot.current_savings)}) are less than one month of expenses "
        f"({money(snapshot.monthly_expenses)}).",
        "Build your savings to at least one month of expenses before spending on promotions.",
    )

    first_lift = inputs["sales_increase_last_campaign_1"]
    second_lift = inputs["sales_increase_last_campaign_2"]
    if first_lift is not None and second_lift is not None:
        average_lift = (first_lift + second_lift) / 2
        book.strength(
            average_lift >= MIN_CAMPAIGN_LIFT,
            met=f"Your last two campaigns lifted sales by {pct(average_lift)} on average.",
            gap=f"Your last two campaigns lifted sales by {pct(average_lift)} on average, below the "
                f"{MIN_CAMPAIGN_LIFT}% threshold.",
            gap_steps=("Review what did not work in past campaigns before repeating them.",),
        )
    else:
        book.strength(
            False, met="",
            gap="You have no campaign history to show that marketing pays off for your business.",
            gap_steps=("Run a small, measurable test campaign to build a track record.",),
        )

    book.strength(
        bool(inputs["is_localized_promotion"] and inputs["historic_foot_traffic_increase_observed"]),
        met="This is a local promotion, and similar promotions have increased foot traffic before.",
        gap="There is no evidence yet that local promotions bring more customers to your business.",
    )
    book.strength(
        bool(inputs["is_festive_or_peak_season"]) and snapshot.profit_margin >= PEAK_SEASON_MARGIN,
        met=f"The campaign targets a peak season and your profit margin ({pct(snapshot.profit_margin)}) is "
            f"healthy.",
        gap=f"The campaign does not combine a peak season with a profit margin of at least "
            f"{PEAK_SEASON_MARGIN}% (currently {pct(snapshot.profit_margin)}).",
    )
    book.strength(
        budget_share <= TEST_BUDGET_SHARE,
        met=f"The budget is a small test at {pct(budget_share)} of monthly revenue.",
        gap=f"The budget ({pct(budget_share)} of monthly revenue) is larger than a {TEST_BUDGET_SHARE}% test "
            f"budget.",
    )

    return _verdict(book)


def _verdict(book: RuleBook) -> DecisionResult:
    return book.verdict(
        required_strengths=1,
        reject_steps=REJECT_STEPS,
        approve_steps=APPROVE_STEPS,
        wait_steps=WAIT_STEPS,
        summaries=(
            "This marketing spend is affordable and likely to pay off.",
            "It's advisable to wait or scale down this marketing spend.",
            "Spending on marketing now would be too risky for your business.",
        ),
    )
