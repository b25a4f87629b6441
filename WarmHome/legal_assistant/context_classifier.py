import re
from typing import List

from .keywords import ISSUE_ORDER, ROLE_ORDER, contains_any, keyword_sets
from .models import UserContext

HISTORY_LIMIT = 5
DETAILS_LIMIT = 10

AMOUNT_PATTERN = re.compile(r"\$\d+(?:,\d{3})*(?:\.\d{1,2})?")
TIMEFRAME_PATTERN = re.compile(r"\b\d+\s*(?:months?|weeks?|days?)\b", re.IGNORECASE)


def extract_details(message: str) -> List[str]:
    """Currency amounts and time spans in the order they appear."""
    found = [(m.start(), m.group(0)) for m in AMOUNT_PATTERN.finditer(message)]
    found += [(m.start(), m.group(0)) for m in TIMEFRAME_PATTERN.finditer(message)]
    return [text for _, text in sorted(found)]


def _merge_details(existing: List[str], new: List[str]) -> List[str]:
    # A repeated detail moves to the most recent position.
    fresh = list(dict.fromkeys(new))
    merged = [detail for detail in existing if detail not in fresh] + fresh
    return merged[-DETAILS_LIMIT:]


def _first_match(message: str, ordered_keys, sets) -> str:
    for key in ordered_keys:
        if contains_any(message, sets[key]):
            return key
    return ""


def classify(message: str, previous: UserContext, language: str = "en") -> UserContext:
    """
    Update the user context with one incoming message.

    Pure: the previous context is not modified. Role and issue are only
    overwritten by a new positive match and urgency only ever escalates.
    """
    # 1. Bounded history
    history = (list(previous.conversation_history) + [message])[-HISTORY_LIMIT:]

    # 2. Role, first match in priority order
    role = _first_match(message, ROLE_ORDER, keyword_sets(language, "role")) or previous.role

    # 3. Issue type
    issue_type = _first_match(message, ISSUE_ORDER, keyword_sets(language, "issue")) or previous.issue_type

    # 4. Urgency
    urgency_sets = keyword_sets(language, "urgency")
    urgency = previous.urgency
    if contains_any(message, urgency_sets["high"]):
        urgency = "high"
    elif contains_any(message, urgency_sets["medium"]) and urgency == "low":
        urgency = "medium"

    # 5. Amounts and timeframes
    details = _merge_details(list(previous.specific_details), extract_details(message))

    return UserContext(
        role=role,
        issue_type=issue_type,
        urgency=urgency,
        specific_details=details,
        conversation_history=history,
    )
