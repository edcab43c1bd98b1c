"""Commission and payment gateway rates, customers and wallets."""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .base import Amount, Numeric, round_money, to_amount


class CardNetwork(Enum):
    Visa = "visa"
    Master = "master"
    Amex = "amex"
    Rupay = "rupay"


Percent = Decimal


def percent_of(amount: Numeric, rate: Numeric) -> Amount:
    """Fee of *rate* percent on *amount*, rounded to cents."""
    return round_money(to_amount(amount) * to_amount(rate) / 100)


class Rates(BaseModel):
    """Percentage per card network. Every network always has a rate."""

    model_config = ConfigDict(extra="forbid")

    visa: Percent = Field(default=Decimal(0), ge=0)
    master: Percent = Field(default=Decimal(0), ge=0)
    amex: Percent = Field(default=Decimal(0), ge=0)
    rupay: Percent = Field(default=Decimal(0), ge=0)

    def rate(self, card: CardNetwork) -> Percent:
        return getattr(self, card.value)

    def with_rate(self, card: CardNetwork, value: Numeric) -> "Rates":
        """Return a copy with one rate replaced."""
        return Rates.model_validate({**self.model_dump(), card.value: to_amount(value)})


class PGConfig(BaseModel):
    """Payment gateway of a wallet with its MDR charges."""

    name: str
    charges: Rates

    @field_validator("charges")
    @classmethod
    def copy_charges(cls, value: Rates) -> Rates:
        return value.model_copy()


class Customer(BaseModel):
    id: str
    name: str
    phone: str
    commission_rates: Rates
    ledger_account_id: str
    joined_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("commission_rates")
    @classmethod
    def copy_rates(cls, value: Rates) -> Rates:
        return value.model_copy()


class Wallet(BaseModel):
    id: str
    name: str
    ledger_account_id: str
    pgs: list[PGConfig] = Field(min_length=1)

    def find_pg(self, name: str | None = None) -> PGConfig | None:
        """Gateway by name, first gateway if *name* is None."""
        if name is None:
            return self.pgs[0]
        for pg in self.pgs:
            if pg.name == name:
                return pg
        return None
