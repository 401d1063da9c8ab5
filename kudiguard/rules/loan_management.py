from kudiguard.rules.base import RuleBook, debt_ratio, money, pct
from kudiguard.state import DecisionResult, FinancialSnapshot, ResolvedInputs

MAX_DEBT_SERVICE_RATIO = 0.40
MAX_DEBT_TO_EQUITY = 2.0
HEALTHY_DEBT_TO_EQUITY = 1.0
MAX_NEGATIVE_CASH_FLOW_MONTHS = 2
REPAYMENT_COVER_MULTIPLE = 2
AFFORDABLE_APR = 20

APPROVE_STEPS = (
    "Compare offers from at least two lenders before signing.",
    "Set up a dedicated account for loan repayments so they are never missed.",
)
WAIT_STEPS = (
    "Reduce existing liabilities or grow retained profit before borrowing.",
    "Ask lenders for a lower rate or a smaller amount that fits your cash flow.",
)
REJECT_STEPS = (
    "Do not take on new debt now. Focus on repaying existing obligations.",
    "Review your expenses and pricing to restore consistent positive cash flow.",
)


def monthly_repayment(principal: float, apr: float, term_months: float) -> float:
    """Amortized monthly payment: [P x R x (1+R)^N] / [(1+R)^N - 1]."""
    rate = apr / (12 * 100)
    if rate == 0:
        return principal / term_months
    growth = (1 + rate) ** term_months
    return principal * rate * growth / (growth - 1)


def evaluate(snapshot: FinancialSnapshot, inputs: ResolvedInputs) -> DecisionResult:
    amount = inputs["proposed_loan_amount"]
    apr = inputs["debt_apr"]
    existing = inputs["total_monthly_debt_repayments"]
    liabilities = inputs["total_business_liabilities"]
    assets = inputs["total_business_assets"]
    negative_months = inputs["consecutive_negative_cash_flow_months"]
    net_income = snapshot.net_income
    revenue = snapshot.monthly_revenue

    new_repayment = monthly_repayment(amount, apr, inputs["loan_term_months"])
    total_repayments = existing + new_repayment
    debt_service = debt_ratio(total_repayments, revenue)
    # liabilities only; the proposed loan is judged through the repayment checks
    debt_to_equity = debt_ratio(liabilities, assets - liabilities)
    book = RuleBook(snapshot, inputs)

    book.reject(
        debt_service > MAX_DEBT_SERVICE_RATIO,
        f"Your total monthly repayments with this loan ({money(round(total_repayments, 2))}) would be "
        f"{pct(debt_service * 100)} of your monthly revenue, above the 40% limit.",
        "Borrow a smaller amount or over a longer term so repayments stay below 40% of revenue.",
    )
    book.reject(
        debt_to_equity > MAX_DEBT_TO_EQUITY,
        f"Your business owes {money(liabilities)} against {money(assets)} of assets, a debt-to-equity ratio of "
        f"{_times(debt_to_equity)}, above the {MAX_DEBT_TO_EQUITY:g}x limit.",
    )
    book.reject(
        negative_months >= MAX_NEGATIVE_CASH_FLOW_MONTHS,
        f"Your cash flow has been negative for {negative_months:g} consecutive months.",
    )
    book.reject(
        net_income <= 0,
        f"Your business is not currently profitable (Net Income: {money(net_income)}), so repayments would come "
        f"out of savings.",
    )
    if book.rejected:
        return _verdict(book)

    book.blocker(
        snapshot.current_savings < snapshot.monthly_expenses,
        f"Your savings ({money(snapshot.current_savings)}) are less than one month of expenses "
        f"({money(snapshot.monthly_expenses)}), leaving no cushion if a repayment falls in a slow month.",
        "Build savings to cover at least one month of expenses before borrowing.",
    )

    book.strength(
        debt_to_equity <= HEALTHY_DEBT_TO_EQUITY,
        met=f"Your debt-to-equity ratio ({_times(debt_to_equity)}) is healthy.",
        gap=f"Your debt-to-equity ratio ({_times(debt_to_equity)}) is above the healthy "
            f"{HEALTHY_DEBT_TO_EQUITY:g}x level.",
    )
    book.strength(
        bool(inputs["loan_purpose_is_revenue_generating"]),
        met="The loan will fund something that generates revenue.",
        gap="The loan will not directly generate revenue to pay for itself.",
        gap_steps=("Prefer loans that fund stock, equipment or other revenue-generating uses.",),
    )
    book.strength(
        net_income >= REPAYMENT_COVER_MULTIPLE * new_repayment,
        met=f"Your net income ({money(net_income)}) covers the new repayment "
            f"({money(round(new_repayment, 2))}) at least {REPAYMENT_COVER_MULTIPLE} times.",
        gap=f"Your net income ({money(net_income)}) is less than {REPAYMENT_COVER_MULTIPLE}x the new monthly "
            f"repayment ({money(round(REPAYMENT_COVER_MULTIPLE * new_repayment, 2))}).",
    )
    book.strength(
        apr <= AFFORDABLE_APR,
        met=f"The interest rate ({apr:g}%) is affordable.",
        gap=f"The interest rate ({apr:g}%) is above {AFFORDABLE_APR}%.",
        gap_steps=("Negotiate a lower rate or look for cooperative or government-backed lending schemes.",),
    )

    return _verdict(book)


def _times(value: float) -> str:
    return "unlimited" if value == float("inf") else f"{value:.2f}x"


def _verdict(book: RuleBook) -> DecisionResult:
    return book.verdict(
        required_strengths=2,
        reject_steps=REJECT_STEPS,
        approve_steps=APPROVE_STEPS,
        wait_steps=WAIT_STEPS,
        summaries=(
            "Your business can comfortably take on this loan.",
            "It's advisable to wait or renegotiate before taking this loan.",
            "Taking on this loan now would be too risky for your business.",
        ),
    )
