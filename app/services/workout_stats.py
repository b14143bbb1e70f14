"""Workout statistics over sessions that are already loaded with exercises and sets.

Everything here is a pure function over objects exposing the ORM attribute names
(``WorkoutSession.date/name/muscle_group/exercises``, ``SessionExercise.exercise_name/sets``,
``ExerciseSet.weight/reps/set_number``), so the same code runs on ORM rows and on
plain test doubles.
"""

from __future__ import annotations

import calendar
from collections import Counter
from datetime import date, timedelta
from typing import Any, Iterable

from app.core.constants import DISPLAY_DATE_FORMAT, NO_MUSCLE_GROUP
from app.core.enums import SummaryPeriod


def compute_personal_records(sessions: Iterable[Any]) -> dict[str, float]:
    """Max set weight per exercise name across all sessions.

    The running best starts at 0, so an exercise whose sets all weigh 0 has no record.
    """
    prs: dict[str, float] = {}
    for session in sessions:
        for exercise in session.exercises:
            for s in exercise.sets:
                weight = float(s.weight or 0)
                if weight > prs.get(exercise.exercise_name, 0):
                    prs[exercise.exercise_name] = weight
    return prs


def is_set_pr(exercise_name: str, weight: float | None, prs: dict[str, float]) -> bool:
    pr = prs.get(exercise_name)
    return pr is not None and float(weight or 0) == pr


def is_exercise_pr(exercise: Any, prs: dict[str, float]) -> bool:
    """True when the heaviest set of this exercise equals the all-time record for its name."""
    if not exercise.sets:
        return False
    heaviest = max(float(s.weight or 0) for s in exercise.sets)
    return is_set_pr(exercise.exercise_name, heaviest, prs)


def exercise_stats(sets: list[Any]) -> dict[str, float]:
    """Average weight, average reps and total volume (sum of weight x reps)."""
    if not sets:
        return {"avg_weight": 0.0, "avg_reps": 0.0, "total_volume": 0.0}
    total_weight = sum(float(s.weight or 0) for s in sets)
    total_reps = sum(int(s.reps or 0) for s in sets)
    total_volume = sum(float(s.weight or 0) * int(s.reps or 0) for s in sets)
    return {
        "avg_weight": total_weight / len(sets),
        "avg_reps": total_reps / len(sets),
        "total_volume": total_volume,
    }


def format_display_date(d: date) -> str:
    return d.strftime(DISPLAY_DATE_FORMAT)


def filter_sessions(sessions: list[Any], term: str | None) -> list[Any]:
    """Case-insensitive match on session name, any exercise name, or the dd/mm/yyyy date."""
    if term is None or not term.strip():
        return list(sessions)
    needle = term.lower()
    return [
        s
        for s in sessions
        if needle in s.name.lower()
        or any(needle in ex.exercise_name.lower() for ex in s.exercises)
        or needle in format_display_date(s.date)
    ]


def period_bounds(period: SummaryPeriod, reference: date) -> tuple[date, date]:
    """Inclusive [start, end]: a Sunday-to-Saturday week, or the calendar month."""
    if period == SummaryPeriod.WEEK:
        # date.weekday(): Monday=0 .. Sunday=6
        start = reference - timedelta(days=(reference.weekday() + 1) % 7)
        return start, start + timedelta(days=6)
    last_day = calendar.monthrange(reference.year, reference.month)[1]
    return reference.replace(day=1), reference.replace(day=last_day)


def most_frequent_muscle_group(sessions: list[Any]) -> str:
    """Most common non-empty muscle group; ties go to the one seen first."""
    counts = Counter(s.muscle_group for s in sessions if s.muscle_group)
    if not counts:
        return NO_MUSCLE_GROUP
    # Counter.most_common keeps insertion order among equal counts
    return counts.most_common(1)[0][0]


def summarize_period(sessions: list[Any], period: SummaryPeriod, reference: date) -> dict[str, Any]:
    """Counts over the sessions dated inside the period containing ``reference``."""
    start, end = period_bounds(period, reference)
    in_period = sorted((s for s in sessions if start <= s.date <= end), key=lambda s: s.date)
    weights = [float(st.weight or 0) for s in in_period for ex in s.exercises for st in ex.sets]
    return {
        "period": period,
        "start": start,
        "end": end,
        "total_workouts": len(in_period),
        "days_with_workouts": len({s.date for s in in_period}),
        "max_weight": max(weights) if weights else 0.0,
        "most_frequent_muscle_group": most_frequent_muscle_group(in_period),
        "total_sets": len(weights),
    }


def progression_series(sessions: Iterable[Any], name: str) -> list[dict[str, Any]]:
    """One point per session containing the exercise, oldest first."""
    wanted = name.strip().lower()
    points = []
    for session in sorted(sessions, key=lambda s: s.date):
        sets = [
            st
            for ex in session.exercises
            if ex.exercise_name.strip().lower() == wanted
            for st in ex.sets
        ]
        if not sets:
            continue
        points.append(
            {
                "session_id": session.id,
                "date": session.date,
                "max_weight": max(float(st.weight or 0) for st in sets),
                "total_reps": sum(int(st.reps or 0) for st in sets),
                "total_volume": sum(float(st.weight or 0) * int(st.reps or 0) for st in sets),
                "set_count": len(sets),
            }
        )
    return points
