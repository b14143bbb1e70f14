"""Calendar check-in schemas."""

import datetime as dt

from pydantic import BaseModel


class CheckinToggle(BaseModel):
    date: dt.date


class CheckinState(BaseModel):
    date: dt.date
    checked_in: bool
