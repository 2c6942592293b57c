from __future__ import annotations

from decimal import Decimal
from typing import Optional

from sqlmodel import Session, select

from ..models import AccountModel
from ..models.db import utcnow


class AccountRepository:
    """Thin data access layer around the SQLModel session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    # Reads ----------------------------------------------------------------
    def get_account(self, account_id: int) -> Optional[AccountModel]:
        return self.session.get(AccountModel, account_id, populate_existing=True)

    def list_accounts(self, limit: int) -> list[AccountModel]:
        stmt = (
            select(AccountModel)
            .order_by(AccountModel.id.asc())
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        return list(self.session.exec(stmt))

    # Row locks ------------------------------------------------------------
    def lock_account(self, account_id: int) -> Optional[AccountModel]:
        stmt = (
            select(AccountModel)
            .where(AccountModel.id == account_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return self.session.exec(stmt).first()

    def lock_account_by_number(self, number: int) -> Optional[AccountModel]:
        stmt = (
            select(AccountModel)
            .where(AccountModel.number == number)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return self.session.exec(stmt).first()

    # Writes ---------------------------------------------------------------
    def add_account(self, first_name: str, last_name: str, number: int) -> AccountModel:
        account = AccountModel(first_name=first_name, last_name=last_name, number=number)
        self.session.add(account)
        self.session.flush()
        self.session.refresh(account)
        return account

    def set_balance(self, account: AccountModel, balance: Decimal) -> None:
        account.balance = balance
        account.updated_at = utcnow()
        self.session.add(account)

    def delete_account(self, account: AccountModel) -> None:
        self.session.delete(account)
        self.session.flush()
