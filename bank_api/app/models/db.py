from __future__ import annotations
from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional
from sqlalchemy import BigInteger, Column
from sqlmodel import Field, SQLModel

def utcnow() -> datetime:
    return datetime.now(UTC)

class Account(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    number: int = Field(sa_column=Column(BigInteger, unique=True, nullable=False))
    balance: Decimal = Field(default=Decimal("0.00"), ge=0, max_digits=15, decimal_places=2)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
