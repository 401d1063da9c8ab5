from kudiguard.rules.base import RuleBook, money, months, pct
from kudiguard.state import DecisionResult, FinancialSnapshot, ResolvedInputs

DECLINING = "declining_unstable"
MIN_CAPITAL_AVAILABLE = 50   # % of the expansion cost
STRONG_CAPITAL_AVAILABLE = 75
STRONG_PROFIT_MARGIN = 20
STRONG_BUFFER_MONTHS = 3

APPROVE_STEPS = (
    "Expand in phases and set a review point after the first three months.",
    "Keep the existing business's cash separate from the expansion budget.",
)
WAIT_STEPS = (
    "Strengthen profitability and reserves in your current location first.",
    "Validate demand with a small pilot (a stall, pop-up or delivery service) before a full expansion.",
)
REJECT_STEPS = (
    "Focus on stabilizing the current business before expanding.",
    "Build capital for the expansion through retained profit rather than stretching your reserves.",
)


def evaluate(snapshot: FinancialSnapshot, inputs: ResolvedInputs) -> DecisionResult:
    cost = inputs["expansion_cost"]
    capital = inputs["capital_available_percentage_of_cost"]
    revenue_trend = inputs["revenue_growth_trend"]
    margin_trend = inputs["profit_margin_trend"]
    margin = snapshot.profit_margin
    buffer = snapshot.savings_buffer_months
    book = RuleBook(snapshot, inputs)

    book.reject(
        snapshot.net_income <= 0,
        f"Your business is not currently profitable (Net Income: {money(snapshot.net_income)}).",
    )
    book.reject(
        revenue_trend == DECLINING,
        "Your revenue has been declining or unstable, so a second location would rest on a weak base.",
    )
    book.reject(
        margin_trend == DECLINING,
        "Your profit margin has been declining or unstable.",
    )
    book.reject(
        capital < MIN_CAPITAL_AVAILABLE,
        f"You have only {capital:g}% of the {money(cost)} expansion cost available, below the "
        f"{MIN_CAPITAL_AVAILABLE}% minimum.",
        f"Save or raise at least {MIN_CAPITAL_AVAILABLE}% of the cost "
        f"({money(cost * MIN_CAPITAL_AVAILABLE / 100)}) before expanding.",
    )
    book.reject(
        snapshot.current_savings < snapshot.monthly_expenses,
        f"Your savings ({money(snapshot.current_savings)}) are less than one month of expenses "
        f"({money(snapshot.monthly_expenses)}).",
        "Build savings to cover at least one month of expenses before taking on expansion costs.",
    )
    if book.rejected:
        return _verdict(book)

    book.blocker(
        not inputs["market_research_validates_demand"],
        "Market research has not yet confirmed demand for the expansion.",
        "Survey customers or run a pilot in the new location to confirm demand.",
    )

    book.strength(
        bool(inputs["profit_growth_consistent_6_months"]),
        met="Your profit has grown consistently for the last six months.",
        gap="Your profit has not grown consistently for six months.",
    )
    book.strength(
        capital >= STRONG_CAPITAL_AVAILABLE,
        met=f"You already have {capital:g}% of the expansion cost available.",
        gap=f"You have {capital:g}% of the expansion cost available, below the {STRONG_CAPITAL_AVAILABLE}% "
            f"comfort level.",
    )
    book.strength(
        margin >= STRONG_PROFIT_MARGIN,
        met=f"Your profit margin ({pct(margin)}) is strong.",
        gap=f"Your profit margin {pct(margin)} is below the {STRONG_PROFIT_MARGIN}% threshold.",
    )
    book.strength(
        buffer >= STRONG_BUFFER_MONTHS,
        met=f"Your savings buffer ({months(buffer)} months) can absorb a slow start.",
        gap=f"Your savings buffer ({months(buffer)} months) is below the {STRONG_BUFFER_MONTHS}-month "
            f"threshold.",
    )

    return _verdict(book)


def _verdict(book: RuleBook) -> DecisionResult:
    return book.verdict(
        required_strengths=2,
        reject_steps=REJECT_STEPS,
        approve_steps=APPROVE_STEPS,
        wait_steps=WAIT_STEPS,
        summaries=(
            "Your business is ready for this expansion.",
            "It's advisable to strengthen a few areas before expanding.",
            "Expanding now would be too risky for your business.",
        ),
    )
