"""UTC timestamp helpers for catalog audit fields."""

from __future__ import annotations
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

_ONE_TICK = timedelta(microseconds=1)
_FRACTION = re.compile(r"^(.*T\d{2}:\d{2}:\d{2})\.(\d+)(.*)$")


def format_timestamp(moment: datetime) -> str:
    """Format an aware datetime as ISO-8601 UTC with a 'Z' suffix."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp.

    Accepts 'Z' or an explicit offset, with or without fractional seconds.
    Naive values are taken as UTC.

    Raises:
        ValueError: If the value is not a timestamp
    """
    text = (value or "").strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    # fromisoformat before 3.11 only takes 3 or 6 fractional digits
    match = _FRACTION.match(text)
    if match:
        head, digits, tail = match.groups()
        text = f"{head}.{digits[:6].ljust(6, '0')}{tail}"
    moment = datetime.fromisoformat(text)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


class UtcClock:
    """Wall clock producing strictly increasing timestamps."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def timestamp(self) -> str:
        return format_timestamp(self.now())

    def tick(self, previous: Optional[str] = None) -> str:
        """Return a timestamp strictly greater than ``previous``."""
        current = self.now()
        if previous:
            last = parse_timestamp(previous)
            if current <= last:
                current = last + _ONE_TICK
        return format_timestamp(current)
