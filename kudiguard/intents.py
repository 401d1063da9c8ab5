"""Keyword-based intent detection for free-text questions."""

import re
from typing import Optional, Sequence, Tuple

from kudiguard.state import Intent

# First match wins, so more specific topics come first.
INTENT_KEYWORDS: Sequence[Tuple[Intent, Tuple[str, ...]]] = (
    (Intent.HIRING, ("hire", "hiring", "staff", "employee", "salary", "salesgirl", "apprentice")),
    (Intent.INVENTORY, ("stock", "inventory", "restock", "buy more", "goods")),
    (Intent.LOAN_MANAGEMENT, ("loan", "borrow", "debt", "credit facility", "overdraft")),
    (Intent.BUSINESS_EXPANSION, ("expand", "expansion", "branch", "new location", "new shop", "second shop")),
    (Intent.SAVINGS, ("save", "savings", "emergency fund", "reserve", "slow season")),
    (Intent.EQUIPMENT, ("equipment", "machine", "generator", "solar", "inverter", "freezer", "oven", "asset")),
    (Intent.MARKETING, ("marketing", "advert", "promotion", "promo", "campaign", "flyer", "social media")),
)


def _matches(text: str, keyword: str) -> bool:
    return re.search(rf"\b{re.escape(keyword)}", text) is not None


def detect_intent(question: str) -> Optional[Intent]:
    """Return the intent whose keywords appear first in the table, or None."""
    text = (question or "").lower()
    for intent, keywords in INTENT_KEYWORDS:
        if any(_matches(text, keyword) for keyword in keywords):
            return intent
    return None
