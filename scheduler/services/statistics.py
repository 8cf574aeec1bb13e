from datetime import timedelta, timezone as dt_tz

from ..domain.logic import round_half_up


def _study_dates(sessions):
    # Days are bucketed in UTC
    return sorted({s.date.astimezone(dt_tz.utc).date() for s in sessions})


def current_streak(dates, today):
    studied = set(dates)
    streak = 0
    day = today
    while day in studied:
        streak += 1
        day -= timedelta(days=1)
    return streak


def longest_streak(dates):
    longest = run = 0
    previous = None
    for day in dates:
        run = run + 1 if previous is not None and day - previous == timedelta(days=1) else 1
        longest = max(longest, run)
        previous = day
    return longest


def summarize(sessions, today):
    """Aggregate Session Records into the numbers shown on the statistics page.

    ``today`` is a UTC date; the current streak is 0 unless it has a session.
    """
    sessions = list(sessions)
    total_cards = sum(s.cards_studied for s in sessions)
    total_correct = sum(s.correct_answers for s in sessions)
    dates = _study_dates(sessions)
    accuracy = (total_correct / total_cards) * 100 if total_cards else 0

    return {
        "total_cards": total_cards,
        "total_sessions": len(sessions),
        "total_time_seconds": sum(s.study_time_seconds for s in sessions),
        "average_accuracy": round_half_up(accuracy),
        "study_days": len(dates),
        "current_streak": current_streak(dates, today),
        "longest_streak": longest_streak(dates),
    }
