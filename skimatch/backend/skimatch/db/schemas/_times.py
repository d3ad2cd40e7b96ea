from ...core.timeutils import normalize_time, to_24_hour


def coerce_time(value: object) -> object:
    """Accept ``HH:MM`` or a ``h:mm AM/PM`` picker value and store ``HH:MM``."""
    if not isinstance(value, str):
        return value
    upper = value.strip().upper()
    if upper.endswith(("AM", "PM")):
        return to_24_hour(value)
    return normalize_time(value)
