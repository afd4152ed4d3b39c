from datetime import date, datetime, timezone


def utcnow() -> datetime:
    """Timezone-aware 'now' in UTC; every record timestamp comes from here."""
    return datetime.now(timezone.utc)


def utc_date(value: datetime) -> date:
    """Calendar day of a timestamp in UTC. Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.date()
    return value.astimezone(timezone.utc).date()


def epoch_millis(value: datetime) -> int:
    return int(value.timestamp() * 1000)


def stamped_id(prefix: str, now: datetime, taken) -> str:
    """
    `<prefix>-<epoch-ms>`, unique against the ids in `taken`.

    Two records stamped in the same millisecond get a
    numeric suffix (-1, -2, ...) instead of colliding.
    """
    base = f"{prefix}-{epoch_millis(now)}"
    candidate = base
    suffix = 1
    while candidate in taken:
        candidate = f"{base}-{suffix}"
        suffix += 1
    return candidate
