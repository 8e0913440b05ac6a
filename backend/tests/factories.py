import datetime as dt

from smartproject.schemas.wbs import Dependency, WbsItem


def make_item(id, parent_id=None, **kw) -> WbsItem:
    return WbsItem(id=id, parent_id=parent_id, **kw)


def make_activity(id, start, duration, **kw) -> WbsItem:
    return WbsItem(
        id=id,
        type="Activity",
        start_date=start,
        end_date=start + dt.timedelta(days=duration),
        duration=duration,
        **kw,
    )


def dep(pred, succ, lag=0, **kw) -> Dependency:
    return Dependency(predecessor_id=pred, successor_id=succ, lag=lag, **kw)
