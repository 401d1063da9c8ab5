import pytest

from kudiguard.intents import detect_intent
from kudiguard.state import Intent


@pytest.mark.parametrize(
    "question, expected",
    [
        ("Can I hire another salesgirl?", Intent.HIRING),
        ("Should I restock my shop this week?", Intent.INVENTORY),
        ("Is it wise to take a loan of 500k?", Intent.LOAN_MANAGEMENT),
        ("Should I open a second shop in Yaba?", Intent.BUSINESS_EXPANSION),
        ("How much should I save every month?", Intent.SAVINGS),
        ("Should I buy a new generator?", Intent.EQUIPMENT),
        ("Is a radio advert worth it?", Intent.MARKETING),
    ],
)
def test_detects_intent_from_keywords(question, expected):
    assert detect_intent(question) == expected


def test_earlier_intents_win_when_keywords_overlap():
    assert detect_intent("Should I borrow money to buy a generator?") == Intent.LOAN_MANAGEMENT


def test_unrecognised_question_returns_none():
    assert detect_intent("What is the weather like?") is None
    assert detect_intent("") is None
