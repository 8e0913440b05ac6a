import datetime as dt

from smartproject.schemas.reports import BarPosition


def calculate_duration(start: dt.date, end: dt.date) -> int:
    """Inclusive number of days between two dates, in either order."""
    return abs((end - start).days) + 1


def window_days(window_start: dt.date, window_end: dt.date) -> int:
    return (window_end - window_start).days + 1


def bar_position(
    start: dt.date | None,
    end: dt.date | None,
    window_start: dt.date,
    window_end: dt.date,
) -> BarPosition | None:
    """Place a dated bar in a window as ``left``/``width`` percentages.

    The bar is clipped to the window. Undated bars, reversed dates and
    bars entirely outside the window give None.
    """
    if start is None or end is None or end < start:
        return None
    if end < window_start or start > window_end:
        return None
    total = window_days(window_start, window_end)
    if total <= 0:
        return None

    s = max(start, window_start)
    e = min(end, window_end)
    left = (s - window_start).days / total * 100
    width = ((e - s).days + 1) / total * 100
    return BarPosition(left=left, width=width)


def today_position(window_start: dt.date, window_end: dt.date, today: dt.date | None = None) -> float | None:
    """Percent offset of ``today`` in the window, or None when outside it."""
    today = today or dt.date.today()
    if today < window_start or today > window_end:
        return None
    return (today - window_start).days / window_days(window_start, window_end) * 100


def weekly_headers(window_start: dt.date, window_end: dt.date) -> list[dt.date]:
    out = []
    d = window_start
    while d <= window_end:
        out.append(d)
        d += dt.timedelta(days=7)
    return out
