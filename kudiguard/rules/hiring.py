from kudiguard.rules.base import RuleBook, money
from kudiguard.state import DecisionResult, FinancialSnapshot, ResolvedInputs

SALARY_COVER_MULTIPLE = 3

APPROVE_STEPS = (
    "Start by hiring on a contract or part-time basis to test the impact.",
    "Create a clear job description with defined responsibilities.",
    "Ensure you have a process for payroll and tax compliance.",
)
WAIT_STEPS = (
    "Focus on increasing revenue or decreasing non-essential costs to improve net income.",
    "Build your emergency savings to cover at least 1-3 months of expenses.",
    "Re-evaluate your hiring needs in 1-2 months.",
)
REJECT_STEPS = (
    "Conduct a full review of your business expenses to find savings.",
    "Explore strategies to boost your monthly revenue.",
    "Focus on stabilizing the business before considering new fixed costs.",
)


def evaluate(snapshot: FinancialSnapshot, inputs: ResolvedInputs) -> DecisionResult:
    """Three affordability checks: 3 of 3 approves, none rejects, anything else waits."""
    salary = inputs["estimated_salary"]
    net_income = snapshot.net_income
    book = RuleBook(snapshot, inputs)

    book.strength(
        net_income - salary > 0,
        met=f"Your business stays profitable after paying the new salary "
            f"(Net Income after hire: {money(net_income - salary)}).",
        gap=f"Your business would not be profitable after paying the new salary "
            f"(Net Income: {money(net_income)}, salary: {money(salary)}).",
    )
    book.strength(
        snapshot.current_savings >= snapshot.monthly_expenses,
        met=f"Your savings ({money(snapshot.current_savings)}) cover at least one month of expenses.",
        gap=f"Your savings ({money(snapshot.current_savings)}) are less than one month of expenses "
            f"({money(snapshot.monthly_expenses)}). Build a stronger safety net first.",
    )
    book.strength(
        net_income >= SALARY_COVER_MULTIPLE * salary,
        met=f"Your net income ({money(net_income)}) is at least {SALARY_COVER_MULTIPLE}x the estimated "
            f"salary ({money(SALARY_COVER_MULTIPLE * salary)}).",
        gap=f"Your net income ({money(net_income)}) is not at least {SALARY_COVER_MULTIPLE}x the estimated "
            f"salary ({money(SALARY_COVER_MULTIPLE * salary)}) for a new hire.",
    )

    if not book.strengths:
        for gap in book.gaps:
            book.reject(True, gap.reason)

    return book.verdict(
        required_strengths=3,
        reject_steps=REJECT_STEPS,
        approve_steps=APPROVE_STEPS,
        wait_steps=WAIT_STEPS,
        summaries=(
            "Your business shows strong financial health to support a new hire.",
            "While your business has some strengths, it's not fully ready for a new hire.",
            "Hiring a new staff member now would be too risky for your business.",
        ),
    )
