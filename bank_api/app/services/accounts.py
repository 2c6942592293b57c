from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlmodel import Session

from ..core.errors import (
    AccountNotFoundError,
    ConflictError,
    InsufficientFundsError,
    InvalidArgumentError,
    UnavailableError,
)
from ..models import AccountModel
from .base import AccountStore
from .numbers import NumberGenerator
from .repository import AccountRepository


logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
# Largest value a NUMERIC(15, 2) balance column can hold.
MAX_BALANCE = Decimal("9999999999999.99")

Amount = Union[Decimal, int, str]


def to_money(value: Amount) -> Decimal:
    """Coerce ``value`` to a finite Decimal with at most two decimal places."""
    try:
        amount = Decimal(value)
        quantized = amount.quantize(CENT)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"Invalid amount: {value!r}") from exc
    if not amount.is_finite():
        raise InvalidArgumentError(f"Invalid amount: {value!r}")
    if amount != quantized:
        raise InvalidArgumentError("Amounts must have at most two decimal places")
    if abs(quantized) > MAX_BALANCE:
        raise InvalidArgumentError(f"Amounts cannot exceed {MAX_BALANCE}")
    return quantized


class SQLAccountStore(AccountStore):
    def __init__(
        self,
        session: Session,
        number_generator: NumberGenerator,
        repository: Optional[AccountRepository] = None,
        *,
        page_size: int = 10,
        number_attempts: int = 5,
    ) -> None:
        self.session = session
        self.repository = repository or AccountRepository(session)
        self.number_generator = number_generator
        self.page_size = page_size
        self.number_attempts = number_attempts

    # ------------------------------------------------------------------
    # Helper utilities
    # ------------------------------------------------------------------
    @contextmanager
    def _transaction(self, operation: str) -> Iterator[None]:
        """Commit the session's transaction, or roll it back on any error."""
        try:
            yield
            self.session.commit()
        except OperationalError as exc:
            self.session.rollback()
            logger.exception("store.unavailable", extra={"operation": operation})
            raise UnavailableError(f"Storage unavailable during {operation}") from exc
        except Exception:
            self.session.rollback()
            raise

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def create_account(self, first_name: str, last_name: str) -> int:
        first_name, last_name = first_name.strip(), last_name.strip()
        if not first_name or not last_name:
            raise InvalidArgumentError("First and last name are required")

        for attempt in range(1, self.number_attempts + 1):
            number = self.number_generator()
            try:
                with self._transaction("create_account"):
                    account = self.repository.add_account(first_name, last_name, number)
                    account_id = account.id
            except IntegrityError:
                logger.warning(
                    "account.number_collision",
                    extra={"number": number, "attempt": attempt},
                )
                continue

            logger.info(
                "account.created",
                extra={"account_id": account_id, "number": number},
            )
            return account_id

        raise ConflictError(
            f"Could not assign a unique account number after {self.number_attempts} attempts"
        )

    def get_account_by_id(self, account_id: int) -> AccountModel:
        with self._transaction("get_account_by_id"):
            account = self.repository.get_account(account_id)
            if account is None:
                raise AccountNotFoundError(f"Account {account_id} not found")
        return account

    def get_accounts(self) -> list[AccountModel]:
        with self._transaction("get_accounts"):
            accounts = self.repository.list_accounts(self.page_size)
        return accounts

    def delete_account(self, account_id: int) -> int:
        with self._transaction("delete_account"):
            account = self.repository.lock_account(account_id)
            if account is None:
                raise AccountNotFoundError(f"Account {account_id} not found")
            self.repository.delete_account(account)

        logger.info("account.deleted", extra={"account_id": account_id})
        return account_id

    def update_account_balance(
        self, account_id: int, number: int, new_balance: Amount
    ) -> int:
        balance = to_money(new_balance)
        if balance < 0:
            raise InvalidArgumentError("Balance cannot be negative")

        with self._transaction("update_account_balance"):
            account = self.repository.lock_account(account_id)
            if account is None or account.number != number:
                raise AccountNotFoundError(
                    f"Account {account_id} with number {number} not found"
                )
            self.repository.set_balance(account, balance)

        logger.info(
            "account.balance_updated",
            extra={"account_id": account_id, "balance": str(balance)},
        )
        return account_id

    def transfer_money(self, from_number: int, to_number: int, amount: Amount) -> None:
        amount = to_money(amount)
        if from_number == to_number:
            raise InvalidArgumentError("Cannot transfer to the same account")
        if amount <= 0:
            raise InvalidArgumentError("Transfer amount must be positive")

        with self._transaction("transfer_money"):
            # Lock in ascending number order so crossing transfers cannot deadlock.
            locked = {
                number: self.repository.lock_account_by_number(number)
                for number in sorted((from_number, to_number))
            }

            source = locked[from_number]
            if source is None:
                raise AccountNotFoundError(f"Account number {from_number} not found")
            if source.balance < amount:
                logger.warning(
                    "account.transfer.insufficient_funds",
                    extra={
                        "from_number": from_number,
                        "balance": str(source.balance),
                        "amount": str(amount),
                    },
                )
                raise InsufficientFundsError("Insufficient funds for transfer")

            dest = locked[to_number]
            if dest is None:
                raise AccountNotFoundError(f"Account number {to_number} not found")

            new_dest_balance = (dest.balance + amount).quantize(CENT)
            if new_dest_balance > MAX_BALANCE:
                raise InvalidArgumentError(
                    f"Transfer would push account {to_number} above {MAX_BALANCE}"
                )

            self.repository.set_balance(source, (source.balance - amount).quantize(CENT))
            self.repository.set_balance(dest, new_dest_balance)

        logger.info(
            "account.transfer",
            extra={
                "from_number": from_number,
                "to_number": to_number,
                "amount": str(amount),
            },
        )
