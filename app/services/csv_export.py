"""CSV rendering of the session history: one row per set."""

from __future__ import annotations

import csv
import io
from typing import Any, Iterable

from app.core.constants import CSV_HEADERS, NO_MUSCLE_GROUP
from app.services.workout_stats import format_display_date


def _format_weight(weight: Any) -> str:
    w = float(weight or 0)
    return str(int(w)) if w.is_integer() else str(w)


def session_rows(sessions: Iterable[Any]) -> list[list[Any]]:
    rows = []
    for session in sessions:
        for exercise in session.exercises:
            for s in exercise.sets:
                rows.append(
                    [
                        format_display_date(session.date),
                        session.name,
                        session.muscle_group or NO_MUSCLE_GROUP,
                        exercise.exercise_name,
                        s.set_number,
                        s.reps,
                        _format_weight(s.weight),
                    ]
                )
    return rows


def render_sessions_csv(sessions: Iterable[Any]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    writer.writerows(session_rows(sessions))
    return buf.getvalue()
