from functools import lru_cache

from fastapi import Depends
from sqlmodel import Session

from ..services import AccountNumberGenerator, AccountStore, SQLAccountStore
from .config import Settings, get_settings
from .db import get_session


@lru_cache(maxsize=1)
def get_number_generator() -> AccountNumberGenerator:
    return AccountNumberGenerator(get_settings().account_number_upper_bound)


def get_account_store(
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
    number_generator: AccountNumberGenerator = Depends(get_number_generator),
) -> AccountStore:
    return SQLAccountStore(
        session,
        number_generator,
        page_size=settings.account_page_size,
        number_attempts=settings.account_number_attempts,
    )
