#!/usr/bin/env python3
"""
Operating status engine.

Resolves the single current state of a center from its weekly hour rules,
its dated holiday exceptions and the current time, in this precedence:

    NO_INFO > TEMP_CLOSED > HOLIDAY > CLOSING_SOON > OPEN / CLOSED

All comparisons happen at minute resolution in the operating timezone
(Asia/Seoul unless configured otherwise). Rules whose close time is earlier
than their open time run past midnight; the after-midnight part is evaluated
against the current day's rule.
"""

import logging
from datetime import datetime, date, time, timedelta
from functools import lru_cache
from typing import Iterable, List, Optional, Sequence
from zoneinfo import ZoneInfo

from core.scoring.constants import (
    DAY_NAMES,
    DEFAULT_CLOSING_SOON_MINUTES,
    MINUTES_PER_DAY,
    NEXT_OPEN_SEARCH_DAYS,
    STATUS_COLORS,
    STATUS_SCORES,
    UPCOMING_HOLIDAY_LIMIT,
)
from core.scoring.models import (
    HolidayException,
    NextOpen,
    OperatingHourRule,
    OperatingReport,
    OperatingStatus,
    OperatingStatusResult,
    UpcomingHoliday,
    WeeklyHours,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "Asia/Seoul"


@lru_cache(maxsize=16)
def _zone(name: str) -> ZoneInfo:
    return ZoneInfo(name)


def to_operating_time(now: datetime, timezone: str = DEFAULT_TIMEZONE) -> datetime:
    """Convert an aware datetime into the operating timezone.

    Naive datetimes are taken to already be local operating time.
    """
    if now.tzinfo is None:
        return now
    return now.astimezone(_zone(timezone))


def _minute_of_day(t: time) -> int:
    return t.hour * 60 + t.minute


def _format_time(t: Optional[time]) -> Optional[str]:
    return t.strftime("%H:%M") if t is not None else None


def rule_for_day(hours: Sequence[OperatingHourRule], day_of_week: int) -> Optional[OperatingHourRule]:
    """The effective rule for a weekday: the first open rule, else the first rule."""
    rules = [r for r in hours if r.day_of_week == day_of_week]
    if not rules:
        return None
    for rule in rules:
        if rule.is_open:
            return rule
    return rules[0]


def holiday_on(holidays: Iterable[HolidayException], on_date: date) -> Optional[HolidayException]:
    for holiday in holidays:
        if holiday.holiday_date == on_date:
            return holiday
    return None


def is_within_hours(now_minute: int, open_minute: int, close_minute: int) -> bool:
    """Half-open interval check [open, close), wrapping past midnight when close < open."""
    if open_minute == close_minute:
        return False
    if close_minute > open_minute:
        return open_minute <= now_minute < close_minute
    return now_minute >= open_minute or now_minute < close_minute


def minutes_until_close(now_minute: int, open_minute: int, close_minute: int) -> int:
    if close_minute < open_minute and now_minute >= open_minute:
        return MINUTES_PER_DAY - now_minute + close_minute
    return close_minute - now_minute


def find_next_open(
    local_now: datetime,
    hours: Sequence[OperatingHourRule],
    holidays: Sequence[HolidayException],
    search_days: int = NEXT_OPEN_SEARCH_DAYS
) -> Optional[NextOpen]:
    """
    Earliest upcoming opening within the search window.

    Scans today and the next `search_days` days. Days without an open rule,
    days with a holiday exception and rules without an open time are skipped.
    Today only counts if its opening time is still ahead.
    """
    now_minute = local_now.hour * 60 + local_now.minute
    today = local_now.date()

    for days_ahead in range(search_days + 1):
        check_date = today + timedelta(days=days_ahead)
        rule = rule_for_day(hours, check_date.isoweekday())

        if rule is None or not rule.is_open or rule.open_time is None:
            continue
        if holiday_on(holidays, check_date) is not None:
            continue
        if days_ahead == 0 and _minute_of_day(rule.open_time) <= now_minute:
            continue

        return NextOpen(
            on_date=check_date,
            day_name=DAY_NAMES[check_date.isoweekday()],
            open_time=_format_time(rule.open_time),
        )

    return None


def _result(status: OperatingStatus, message: str, **extra) -> OperatingStatusResult:
    return OperatingStatusResult(
        status=status,
        score=STATUS_SCORES[status],
        message=message,
        color=STATUS_COLORS[status],
        **extra
    )


def _closed_message(prefix: str, next_open: Optional[NextOpen]) -> str:
    if next_open is None:
        return prefix
    return f"{prefix}, reopens {next_open.day_name} {next_open.open_time}"


def evaluate_operating_status(
    now: datetime,
    hours: Sequence[OperatingHourRule],
    holidays: Sequence[HolidayException] = (),
    *,
    timezone: str = DEFAULT_TIMEZONE,
    closing_soon_minutes: int = DEFAULT_CLOSING_SOON_MINUTES,
    search_days: int = NEXT_OPEN_SEARCH_DAYS
) -> OperatingStatusResult:
    """
    Resolve the current operating status of a center.

    Args:
        now: Current time; aware datetimes are converted to `timezone`
        hours: Weekly hour rules (Monday = 1)
        holidays: Dated holiday / temporary-closure exceptions
        timezone: IANA name of the timezone the hours are expressed in
        closing_soon_minutes: Remaining open minutes at or below which an
            open center is reported as CLOSING_SOON
        search_days: How many days ahead to look for the next opening

    Returns:
        OperatingStatusResult with status, score (0-100), message and colour
    """
    if not hours:
        return _result(OperatingStatus.NO_INFO, "No operating hours information")

    local_now = to_operating_time(now, timezone)
    today = local_now.date()
    now_minute = local_now.hour * 60 + local_now.minute

    holiday = holiday_on(holidays, today)
    if holiday is not None:
        next_open = find_next_open(local_now, hours, holidays, search_days)
        if not holiday.is_regular:
            label = f"Temporarily closed ({holiday.name})" if holiday.name else "Temporarily closed"
            return _result(OperatingStatus.TEMP_CLOSED, label, next_open=next_open)
        label = f"Holiday ({holiday.name})" if holiday.name else "Holiday"
        return _result(OperatingStatus.HOLIDAY, label, next_open=next_open)

    rule = rule_for_day(hours, local_now.isoweekday())
    if rule is None or not rule.is_open:
        next_open = find_next_open(local_now, hours, holidays, search_days)
        return _result(
            OperatingStatus.HOLIDAY,
            _closed_message("Regular day off", next_open),
            next_open=next_open
        )

    if rule.open_time is None or rule.close_time is None:
        return _result(OperatingStatus.NO_INFO, "Operating hours not specified for today")

    open_minute = _minute_of_day(rule.open_time)
    close_minute = _minute_of_day(rule.close_time)
    closing_time = _format_time(rule.close_time)

    if is_within_hours(now_minute, open_minute, close_minute):
        remaining = minutes_until_close(now_minute, open_minute, close_minute)
        if 0 < remaining <= closing_soon_minutes:
            return _result(
                OperatingStatus.CLOSING_SOON,
                f"Closing soon (until {closing_time})",
                closing_time=closing_time,
                minutes_until_close=remaining
            )
        return _result(
            OperatingStatus.OPEN,
            f"Open until {closing_time}",
            closing_time=closing_time,
            minutes_until_close=remaining
        )

    next_open = find_next_open(local_now, hours, holidays, search_days)
    return _result(
        OperatingStatus.CLOSED,
        _closed_message("Closed", next_open),
        next_open=next_open
    )


def build_weekly_hours(hours: Sequence[OperatingHourRule]) -> List[WeeklyHours]:
    weekly = []
    for day in range(1, 8):
        rule = rule_for_day(hours, day)
        weekly.append(WeeklyHours(
            day_of_week=day,
            day_name=DAY_NAMES[day],
            open_time=_format_time(rule.open_time) if rule else None,
            close_time=_format_time(rule.close_time) if rule else None,
            is_open=bool(rule and rule.is_open),
        ))
    return weekly


def upcoming_holidays(
    today: date,
    holidays: Sequence[HolidayException],
    search_days: int = NEXT_OPEN_SEARCH_DAYS,
    limit: int = UPCOMING_HOLIDAY_LIMIT
) -> List[UpcomingHoliday]:
    window_end = today + timedelta(days=search_days)
    in_window = sorted(
        (h for h in holidays if today <= h.holiday_date <= window_end),
        key=lambda h: h.holiday_date
    )
    return [
        UpcomingHoliday(on_date=h.holiday_date, name=h.name, is_regular=h.is_regular)
        for h in in_window[:limit]
    ]


def build_operating_report(
    now: datetime,
    hours: Sequence[OperatingHourRule],
    holidays: Sequence[HolidayException] = (),
    *,
    timezone: str = DEFAULT_TIMEZONE,
    closing_soon_minutes: int = DEFAULT_CLOSING_SOON_MINUTES,
    search_days: int = NEXT_OPEN_SEARCH_DAYS
) -> OperatingReport:
    """Current status together with the weekly schedule and upcoming holidays."""
    current = evaluate_operating_status(
        now, hours, holidays,
        timezone=timezone,
        closing_soon_minutes=closing_soon_minutes,
        search_days=search_days
    )
    local_today = to_operating_time(now, timezone).date()

    return OperatingReport(
        current=current,
        weekly_hours=build_weekly_hours(hours),
        upcoming_holidays=upcoming_holidays(local_today, holidays, search_days),
    )
