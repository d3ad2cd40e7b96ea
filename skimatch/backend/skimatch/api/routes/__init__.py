from . import (
    listings,
    recurring,
    availability,
)

__all__ = [
    "listings",
    "recurring",
    "availability",
]
