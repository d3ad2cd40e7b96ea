from . import availability_service

__all__ = [
    "availability_service",
]
