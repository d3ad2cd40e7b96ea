"""Common application-wide constants."""

# Joins a recurrence rule id and an ISO date into the display id of a derived slot
DERIVED_ID_SEPARATOR = "-"

# Hour grid offered by the time pickers
TIME_OPTIONS_START_HOUR = 6
TIME_OPTIONS_END_HOUR = 22
TIME_OPTIONS_STEP_MINUTES = 30

# Sunday-first weekday names, indexed by ``day_of_week``
WEEKDAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


__all__ = [
    "DERIVED_ID_SEPARATOR",
    "TIME_OPTIONS_START_HOUR",
    "TIME_OPTIONS_END_HOUR",
    "TIME_OPTIONS_STEP_MINUTES",
    "WEEKDAY_NAMES",
]
