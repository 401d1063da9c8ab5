from kudiguard.rules.base import RuleBook, debt_ratio, money
from kudiguard.state import DecisionResult, FinancialSnapshot, ResolvedInputs

MAX_SUPPLIER_DEBT_RATIO = 0.40
FAST_TURNOVER_DAYS = 30
ORDER_COVER_MULTIPLE = 1.20
MAX_FMCG_CREDIT_TERMS_DAYS = 30
MAX_FMCG_RECEIVABLES_DAYS = 25
BULK_MIN_DISCOUNT = 15
BULK_MAX_STORAGE = 5

APPROVE_STEPS = (
    "Confirm current market demand to avoid overstocking.",
    "Negotiate best possible terms with suppliers.",
)
WAIT_STEPS = (
    "Review your sales data to understand demand fluctuations.",
    "Improve cash flow by collecting receivables faster or reducing non-essential expenses.",
)
REJECT_STEPS = (
    "Prioritize paying down outstanding supplier debts.",
    "Focus on increasing revenue and reducing expenses to achieve positive net income.",
    "Review your current inventory to identify slow-moving items and clear them out.",
)
BULK_STEP = "Explore the possibility of a bulk purchase to maximize savings from the supplier discount."


def evaluate(snapshot: FinancialSnapshot, inputs: ResolvedInputs) -> DecisionResult:
    cost = inputs["estimated_inventory_cost"]
    turnover = inputs["inventory_turnover_days"]
    supplier_debts = inputs["outstanding_supplier_debts"]
    credit_terms = inputs["supplier_credit_terms_days"]
    receivables = inputs["average_receivables_turnover_days"]
    discount = inputs["supplier_discount_percentage"]
    storage = inputs["storage_cost_percentage_of_order"]
    revenue = snapshot.monthly_revenue
    savings = snapshot.current_savings
    book = RuleBook(snapshot, inputs)

    book.reject(
        debt_ratio(supplier_debts, revenue) > MAX_SUPPLIER_DEBT_RATIO,
        f"Your outstanding supplier debts ({money(supplier_debts)}) are more than 40% of your monthly "
        f"revenue ({money(revenue)}).",
    )
    book.reject(
        snapshot.net_income < 0,
        f"Your business currently has a negative net income ({money(snapshot.net_income)}).",
    )
    if book.rejected:
        return _verdict(book)

    order_cover = ORDER_COVER_MULTIPLE * cost
    fast_turnover = turnover < FAST_TURNOVER_DAYS
    covered = savings >= order_cover
    book.strength(
        fast_turnover and covered,
        met=f"Your inventory turnover is fast ({turnover:g} days) and your cash reserves ({money(savings)}) "
            f"comfortably cover 120% of the order value ({money(order_cover)}).",
        gap=" ".join(filter(None, (
            None if fast_turnover else f"Your inventory turnover is slow ({turnover:g} days).",
            None if covered else f"Your cash reserves ({money(savings)}) do not cover 120% of the order "
                                 f"value ({money(order_cover)}).",
        ))),
        blocking=True,
    )

    if credit_terms is not None and receivables is not None:
        short_terms = credit_terms <= MAX_FMCG_CREDIT_TERMS_DAYS
        quick_collection = receivables < MAX_FMCG_RECEIVABLES_DAYS
        book.strength(
            short_terms and quick_collection,
            met=f"As an FMCG vendor, your supplier credit terms ({credit_terms:g} days) are favorable and your "
                f"receivables turnover is efficient ({receivables:g} days).",
            gap=" ".join(filter(None, (
                None if short_terms else f"As an FMCG vendor, your supplier credit terms ({credit_terms:g} days) "
                                         f"are longer than ideal.",
                None if quick_collection else f"As an FMCG vendor, your average receivables turnover "
                                              f"({receivables:g} days) is slower than recommended.",
            ))),
            blocking=True,
        )

    if discount is not None and storage is not None:
        if discount >= BULK_MIN_DISCOUNT and storage <= BULK_MAX_STORAGE:
            book.note(
                True,
                f"Consider a bulk purchase due to a significant supplier discount ({discount:g}%) and low storage "
                f"costs ({storage:g}%).",
                BULK_STEP,
            )
        else:
            book.note(
                discount < BULK_MIN_DISCOUNT,
                f"The supplier discount ({discount:g}%) is not substantial enough for a bulk purchase "
                f"recommendation.",
            )
            book.note(
                storage > BULK_MAX_STORAGE,
                f"Storage costs ({storage:g}%) are too high to justify a bulk purchase at this time.",
            )

    return _verdict(book)


def _verdict(book: RuleBook) -> DecisionResult:
    return book.verdict(
        required_strengths=1,
        reject_steps=REJECT_STEPS,
        approve_steps=APPROVE_STEPS,
        wait_steps=WAIT_STEPS,
        summaries=(
            "Your business is in a strong position to restock.",
            "It's advisable to wait before restocking.",
            "Purchasing new inventory now would be too risky for your business.",
        ),
    )
