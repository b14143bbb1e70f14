"""Shared enums for models and API."""

from enum import Enum


class SummaryPeriod(str, Enum):
    """Window for the workout summary."""

    WEEK = "week"  # Sunday through Saturday
    MONTH = "month"  # Calendar month
