from kudiguard.rules.base import INFINITY, RuleBook, debt_ratio, money, months, pct, ratio
from kudiguard.state import DecisionResult, FinancialSnapshot, ResolvedInputs

CAPITAL_INTENSIVE_COST = 1_000_000
MAX_DEBT_SERVICE_RATIO = 0.30
MODERATE_DEBT_SERVICE_RATIO = 0.15
MAX_PAYBACK_MONTHS = 12
MIN_PRODUCTIVITY_GAIN = 20
SMALL_EQUIPMENT_COST = 200_000
HEALTHY_MARGIN = 15
MIN_BUFFER_MONTHS = 2
HIGH_ENERGY_SHARE = 15
HIGH_FINANCING_APR = 25
LONG_FINANCING_TERM_MONTHS = 36

REJECT_STEPS = (
    "Postpone this purchase and revisit it once the issues above are resolved.",
)


def evaluate(snapshot: FinancialSnapshot, inputs: ResolvedInputs) -> DecisionResult:
    """
    Equipment and asset purchases.

    Critical replacements skip every reject check: a broken machine that stops the
    business is bought even when the numbers are tight.
    """
    cost = inputs["estimated_equipment_cost"]
    critical = bool(inputs["is_critical_replacement"])
    repayments = inputs["existing_debt_load_monthly_repayments"]
    energy_cost = inputs["current_energy_cost_monthly"] or 0
    financing = bool(inputs["financing_required"])
    financing_apr = inputs["financing_interest_rate_annual_percentage"] or 0
    financing_term = inputs["financing_term_months"]

    net_income = snapshot.net_income
    savings = snapshot.current_savings
    margin = snapshot.profit_margin
    buffer = snapshot.savings_buffer_months
    monthly_gain = inputs["expected_revenue_increase_monthly"] + inputs["expected_expense_decrease_monthly"]
    payback = cost / monthly_gain if monthly_gain > 0 else INFINITY
    productivity_gain = ratio(monthly_gain, net_income) * 100
    energy_share = ratio(energy_cost, snapshot.monthly_expenses) * 100
    debt_service = debt_ratio(repayments, snapshot.monthly_revenue)
    book = RuleBook(snapshot, inputs)

    book.reject(
        cost > CAPITAL_INTENSIVE_COST and not inputs["has_diversified_revenue_streams"] and not critical,
        f"Investing over {money(CAPITAL_INTENSIVE_COST)} without diversified revenue streams is too risky, as it "
        f"concentrates your business's financial exposure and could jeopardize stability if one stream falters.",
        "Focus on developing at least one additional significant and stable revenue stream before considering "
        "such a large, non-critical investment.",
    )
    book.reject(
        net_income < 0 and not critical,
        f"Your business is currently unprofitable (Net Income: {money(net_income)}). Adding new costs for "
        f"non-critical equipment would worsen your financial situation.",
        "Prioritize increasing revenue and aggressively cutting non-essential expenses to achieve consistent "
        "profitability before any new investments.",
    )
    book.reject(
        debt_service > MAX_DEBT_SERVICE_RATIO and not critical,
        f"Your existing debt burden ({money(repayments)} monthly) is already high, exceeding 30% of your monthly "
        f"revenue. Taking on more debt for non-critical equipment could lead to severe cash flow problems.",
        "Focus on significantly reducing your current debt load to improve financial stability and free up cash "
        "flow for future investments.",
    )
    if book.rejected:
        return _verdict(book)

    if critical:
        book.strength(
            savings >= cost or savings + net_income * 2 >= cost,
            met="This equipment is a critical replacement essential for your business operations. Your "
                "financials, while potentially tight, can support this necessary investment.",
            gap=f"This is a critical replacement, but neither your savings ({money(savings)}) nor two months of "
                f"net income can cover the cost ({money(cost)}).",
            steps=("Proceed with the purchase. Ensure minimal downtime during installation. If cash flow is tight, "
                   "explore short-term, low-interest financing options or temporary solutions.",),
            gap_steps=("Look for a cheaper or refurbished replacement, or a short-term lease, to restore "
                       "operations.",),
        )

    quick_payback = payback <= MAX_PAYBACK_MONTHS
    productive = net_income > 0 and productivity_gain >= MIN_PRODUCTIVITY_GAIN
    if monthly_gain <= 0:
        roi_gap = ("The expected financial impact (revenue increase + expense decrease) is not positive, "
                   "indicating the investment might not pay for itself.")
        roi_step = ("Re-evaluate the potential benefits of this equipment. Can it truly increase revenue or "
                    "decrease expenses significantly?")
    else:
        roi_gap = (f"The estimated payback period of {months(payback)} months is longer than the "
                   f"{MAX_PAYBACK_MONTHS}-month threshold, suggesting a slower return on investment.")
        roi_step = ("Explore ways to accelerate the return on investment, such as increasing sales targets or "
                    "finding more cost-effective equipment.")
    book.strength(
        monthly_gain > 0 and (quick_payback or productive),
        met=f"The equipment offers a rapid return on investment (payback in {months(payback)} months) or a "
            f"significant boost to your business's profitability ({pct(productivity_gain)} productivity gain).",
        gap=roi_gap,
        steps=("Confirm current market demand to ensure the expected revenue increase is realistic.",
               "Negotiate best possible terms with suppliers."),
        gap_steps=(roi_step,),
    )

    small_gap = " ".join(filter(None, (
        None if margin >= HEALTHY_MARGIN else
        f"Your current profit margin ({pct(margin)}) is below the {HEALTHY_MARGIN}% threshold for new "
        f"investments.",
        None if buffer >= MIN_BUFFER_MONTHS else
        f"Your savings buffer ({months(buffer)} months) is less than the recommended {MIN_BUFFER_MONTHS} "
        f"months of expenses, making new investments risky.",
    )))
    # larger purchases are judged on the other strengths only
    if cost <= SMALL_EQUIPMENT_COST or small_gap:
        book.strength(
            cost <= SMALL_EQUIPMENT_COST and not small_gap,
            met=f"This small investment ({money(cost)}) is well within your business's capacity, given your "
                f"healthy profit margins ({pct(margin)}) and strong savings buffer ({months(buffer)} months).",
            gap=small_gap,
            steps=("Ensure the equipment aligns with your long-term business goals.",
                   "Consider potential maintenance costs."),
            gap_steps=tuple(filter(None, (
                None if margin >= HEALTHY_MARGIN else
                "Focus on improving your overall business profitability before committing to new equipment.",
                None if buffer >= MIN_BUFFER_MONTHS else
                "Build up your emergency savings to at least 2 months of operational expenses.",
            ))),
        )

    if inputs["is_power_solution"]:
        book.strength(
            energy_share > HIGH_ENERGY_SHARE,
            met=f"Your high energy costs (currently {pct(energy_share)} of monthly expenses) are a significant "
                f"drain. This power solution investment is highly prioritized as it will likely lead to "
                f"substantial operational savings and improved stability.",
            gap=f"Your energy costs ({pct(energy_share)} of monthly expenses) are not above the "
                f"{HIGH_ENERGY_SHARE}% level that makes a power solution a priority.",
            steps=("Calculate the exact ROI from energy savings over the equipment's lifespan.",
                   "Ensure proper installation and regular maintenance for longevity."),
        )

    book.caution(
        MODERATE_DEBT_SERVICE_RATIO * snapshot.monthly_revenue < repayments
        <= MAX_DEBT_SERVICE_RATIO * snapshot.monthly_revenue,
        f"Your existing debt load ({money(repayments)} monthly) is moderate. Adding more debt might strain your "
        f"cash flow.",
        "Consider reducing existing debts or exploring financing options with more favorable terms.",
    )
    if financing:
        book.caution(
            financing_apr > HIGH_FINANCING_APR,
            f"The estimated annual interest rate for financing ({financing_apr:g}%) is quite high, significantly "
            f"increasing the total cost of the equipment.",
            "Seek alternative financing options with lower interest rates or consider delaying the purchase until "
            "better terms are available.",
        )
    if financing and financing_term is not None:
        book.caution(
            financing_term > LONG_FINANCING_TERM_MONTHS,
            f"A long financing term of {financing_term:g} months could tie up your cash flow for an extended period.",
            "Explore options for a shorter loan term or consider a smaller, more affordable equipment purchase.",
        )

    return _verdict(book)


def _verdict(book: RuleBook) -> DecisionResult:
    return book.verdict(
        required_strengths=1,
        reject_steps=REJECT_STEPS,
        summaries=(
            "Your business is in a strong position for this investment.",
            "The current financial conditions suggest waiting before this investment.",
            "Based on critical financial indicators, this investment is currently too risky for your business.",
        ),
    )
