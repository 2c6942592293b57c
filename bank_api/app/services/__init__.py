from .accounts import SQLAccountStore
from .base import AccountStore
from .numbers import AccountNumberGenerator
from .repository import AccountRepository

__all__ = [
    "AccountNumberGenerator",
    "AccountRepository",
    "AccountStore",
    "SQLAccountStore",
]
