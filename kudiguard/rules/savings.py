from kudiguard.rules.base import RuleBook, money, months, pct
from kudiguard.state import DecisionResult, FinancialSnapshot, ResolvedInputs

TARGET_BUFFER_MONTHS = 3
VOLATILE_TARGET_BUFFER_MONTHS = 6
MAX_NEGATIVE_CASH_FLOW_MONTHS = 2
REJECT_DEBT_APR = 30
CAUTION_DEBT_APR = 20
SUSTAINABLE_SHARE = 30   # % of net income
MAX_SHARE = 50

APPROVE_STEPS = (
    "Move the amount into a separate savings account on the day you receive revenue.",
    "Review the allocation every quarter as your expenses change.",
)
WAIT_STEPS = (
    "Start with a smaller, automatic monthly transfer you can keep up.",
    "Track your cash flow weekly to find a safe amount to set aside.",
)
REJECT_STEPS = (
    "Stabilize your cash flow before locking money away in savings.",
    "Use spare cash to clear expensive debt first.",
)


def evaluate(snapshot: FinancialSnapshot, inputs: ResolvedInputs) -> DecisionResult:
    amount = inputs["proposed_savings_amount"]
    negative_months = inputs["consecutive_negative_cash_flow_months"]
    debts = inputs["outstanding_debts"]
    apr = inputs["debt_apr"] or 0
    net_income = snapshot.net_income
    buffer = snapshot.savings_buffer_months
    target = VOLATILE_TARGET_BUFFER_MONTHS if inputs["is_volatile_industry"] else TARGET_BUFFER_MONTHS
    book = RuleBook(snapshot, inputs)

    book.reject(
        negative_months >= MAX_NEGATIVE_CASH_FLOW_MONTHS,
        f"Your cash flow has been negative for {negative_months:g} consecutive months. Cash is needed to keep "
        f"the business running.",
        "Cut non-essential expenses and chase overdue receivables to restore positive cash flow.",
    )
    book.reject(
        amount > net_income,
        f"The amount you want to save ({money(amount)}) is more than your monthly net income "
        f"({money(net_income)}), so it would come out of operating cash.",
        f"Lower the monthly savings amount to what your net income can cover ({money(max(net_income, 0))}).",
    )
    book.reject(
        debts > 0 and apr > REJECT_DEBT_APR,
        f"Your debt costs {apr:g}% a year, which is more than any savings account earns. Paying it down is the "
        f"better use of spare cash.",
        "Direct spare cash to repaying the high-interest debt before building savings.",
    )
    if book.rejected:
        return _verdict(book)

    share = amount / net_income * 100
    book.blocker(
        share > MAX_SHARE,
        f"Saving {money(amount)} would take {pct(share)} of your monthly net income, leaving too little for "
        f"operations.",
        f"Keep monthly savings below {MAX_SHARE}% of net income ({money(net_income * MAX_SHARE / 100)}).",
    )
    book.blocker(
        debts > 0 and apr > CAUTION_DEBT_APR,
        f"Your debt costs {apr:g}% a year. Split spare cash between savings and faster debt repayment.",
        "Split spare cash between savings and faster debt repayment.",
    )

    book.strength(
        share <= SUSTAINABLE_SHARE,
        met=f"Saving {money(amount)} a month is sustainable at {pct(share)} of your net income.",
        gap=f"Saving {money(amount)} a month is {pct(share)} of your net income, above the sustainable "
            f"{SUSTAINABLE_SHARE}% level.",
    )
    book.strength(
        buffer < target,
        met=f"Your savings buffer ({months(buffer)} months) is below the {target}-month target, so this "
            f"allocation closes a real gap.",
        gap=f"Your savings buffer ({months(buffer)} months) already meets the {target}-month target.",
    )
    book.strength(
        bool(inputs["is_seasonal_windfall_month"]),
        met="This is a seasonal windfall month, a good time to put extra cash aside.",
        gap="This is not a windfall month, so the amount has to come from regular earnings.",
    )
    book.note(
        bool(inputs["is_growth_stage"]) and buffer >= target,
        f"Your reserve already covers {months(buffer)} months of expenses. As a growing business, consider "
        f"directing part of your surplus to growth instead.",
        "Split surplus cash between your reserve and planned growth investments.",
    )

    return _verdict(book)


def _verdict(book: RuleBook) -> DecisionResult:
    return book.verdict(
        required_strengths=1,
        reject_steps=REJECT_STEPS,
        approve_steps=APPROVE_STEPS,
        wait_steps=WAIT_STEPS,
        summaries=(
            "Setting this amount aside is a sound move for your business.",
            "It's advisable to adjust this savings plan before starting it.",
            "Putting money into savings now would strain your business.",
        ),
    )
