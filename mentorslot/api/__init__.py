# mentorslot/api/__init__.py
# This file makes the api directory a Python package.

from . import auth
from . import booking
from . import mentor
from . import session

__all__ = [
    "auth",
    "session",
    "mentor",
    "booking",
]
