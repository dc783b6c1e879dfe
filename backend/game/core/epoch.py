from datetime import datetime, timedelta, timezone

EPOCH = datetime(1970, 1, 1)


def from_epoch_millis(millis: int) -> datetime:
    """Epoch milliseconds -> naive UTC datetime (exact, no float rounding).

    Values outside datetime's range saturate to ``datetime.min``/``datetime.max``
    so year checks and range filters still see an out-of-range date.
    """
    try:
        return EPOCH + timedelta(milliseconds=millis)
    except OverflowError:
        return datetime.max if millis > 0 else datetime.min


def to_epoch_millis(value: datetime) -> int:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return (value - EPOCH) // timedelta(milliseconds=1)
