from datetime import UTC, datetime


def alert_summary(count: int) -> str:
    if count == 0:
        return "No alerts triggered"
    return f"{count} {'alert' if count == 1 else 'alerts'} triggered"


def usage_badge(count: int, limit: int) -> str:
    return f"{count}/{limit}"


def time_ago(moment: datetime | None, now: datetime | None = None) -> str:
    """Coarse relative time, e.g. "3 days ago"."""
    if moment is None:
        return "some time ago"

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    now = now or datetime.now(UTC)
    seconds = max(0, int((now - moment).total_seconds()))

    if seconds < 60:
        return "less than a minute ago"

    for unit, size in (
        ("year", 365 * 24 * 3600),
        ("month", 30 * 24 * 3600),
        ("day", 24 * 3600),
        ("hour", 3600),
        ("minute", 60),
    ):
        if seconds >= size:
            amount = seconds // size
            return f"{amount} {unit}{'' if amount == 1 else 's'} ago"

    return "less than a minute ago"
