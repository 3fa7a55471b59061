"""
Priority scoring for candidate tasks.
"""
from vendorflow.engine.sequences import StepType

# Categories that historically convert best get pushed up the queue
CATEGORY_CONVERSION_BONUS = {
    "photographer": 15,
    "mua": 12,
    "decorator": 10,
    "caterer": 8,
    "venue": 6,
    "dj": 5,
    "uncategorized": 0,
}

MAX_OVERDUE_BONUS = 50
FALLBACK_PENALTY = 5


def _recency_bonus(uploaded_days_ago: int) -> int:
    if uploaded_days_ago <= 2:
        return 30
    if uploaded_days_ago <= 7:
        return 15
    if uploaded_days_ago <= 14:
        return 5
    return 0


def score_priority(
    task_type: str,
    is_overdue: bool,
    days_overdue: int,
    category: str,
    uploaded_days_ago: int,
    has_all_channels: bool,
) -> int:
    """
    Additive score: overdue follow-ups first, then overdue initials, then
    follow-ups due today, then new outreach. Category value, how recently
    the vendor was uploaded and channel breadth break ties within a band.
    """
    score = 0

    overdue_bonus = min(days_overdue * 5, MAX_OVERDUE_BONUS)
    if is_overdue and task_type == StepType.FOLLOWUP:
        score += 100 + overdue_bonus
    elif is_overdue and task_type == StepType.INITIAL:
        score += 90 + overdue_bonus
    elif task_type == StepType.FOLLOWUP:
        score += 80

    score += CATEGORY_CONVERSION_BONUS.get(category, 0)
    score += _recency_bonus(uploaded_days_ago)

    if has_all_channels:
        score += 10

    return score
