"""
core/records.py
---------------
Typed, immutable records for every collection read from the data store.

Rows arrive as loosely-typed dicts (store column names, nulls, numbers sent
as strings). They are validated here, at the fetch boundary, so the rest of
the code base only ever sees clean records:

- Numeric fields that are absent, null or non-numeric become ``0.0``.
- Store column names (``"Item date"``, ``"Item amount inc VAT"``, ...) are
  accepted as aliases of the snake_case field names.
- Dates are parsed from ISO strings (a time part, if present, is dropped).
  A ledger line with no usable date is kept with ``date=None`` so its amount
  still counts; capital transactions and valuations without one are dropped.
"""

from __future__ import annotations

import logging
import math
import datetime as dt
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


def coerce_amount(value: Any) -> float:
    """Best-effort numeric coercion; anything unusable becomes 0.0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(str(value).replace(",", "").strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def coerce_date(value: Any) -> Optional[dt.date]:
    """
    Accept date, datetime or ISO text ('2025-03-07' / '2025-03-07T00:00:00').

    Null, blank or unparsable values become None.
    """
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        try:
            return dt.date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


class StoreRecord(BaseModel):
    """Base for all store rows: frozen, alias-aware, ignores unknown columns."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


# --------------------------------------------------------------------------- #
# transactions
# --------------------------------------------------------------------------- #

class Transaction(StoreRecord):
    """One ledger line. Income is positive, expenses negative."""

    id: Optional[str] = None
    date: Optional[dt.date] = Field(default=None, alias="Item date")
    property_address: str = Field(default="", alias="Property address")
    description: str = Field(default="", alias="Item description")
    item_type: str = Field(default="", alias="Item type")
    amount: float = Field(default=0.0, alias="Item amount inc VAT")

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, v: Any) -> Any:
        return coerce_date(v)

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, v: Any) -> float:
        return coerce_amount(v)

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, v: Any) -> Optional[str]:
        return None if v is None else str(v)

    @field_validator("property_address", "description", "item_type", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str:
        return "" if v is None else str(v)


# --------------------------------------------------------------------------- #
# properties_master
# --------------------------------------------------------------------------- #

class Property(StoreRecord):
    """Master row for one property: purchase, financing and phase-2 assumptions."""

    property_id: str
    address: str = ""
    city: str = ""

    purchase_price: float = 0.0
    deposit_pct_phase1: float = 0.0
    cash_deposit_phase1: float = 0.0
    stamp_duty: float = 0.0
    solicitor_fees: float = 0.0
    agent_fee: float = 0.0
    renovation_cost: float = 0.0
    renovation_mgmt_fee: float = 0.0
    mortgage_rate_phase1: float = 0.0

    revaluation_estimate: float = 0.0
    market_value_est: float = 0.0
    market_value_basis: str = ""

    deposit_pct_phase2: float = 0.0
    equity_release: float = 0.0
    mortgage_rate_phase2: float = 0.0
    annual_rent_phase2: float = 0.0
    bills_phase2: float = 0.0
    management_phase2: float = 0.0
    provision_costs_phase2: float = 0.0
    provision_voids_phase2: float = 0.0
    beds_phase2: int = 0
    notes_phase2: Optional[str] = None
    property_link: Optional[str] = None

    @field_validator(
        "purchase_price", "deposit_pct_phase1", "cash_deposit_phase1", "stamp_duty",
        "solicitor_fees", "agent_fee", "renovation_cost", "renovation_mgmt_fee",
        "mortgage_rate_phase1", "revaluation_estimate", "market_value_est",
        "deposit_pct_phase2", "equity_release", "mortgage_rate_phase2",
        "annual_rent_phase2", "bills_phase2", "management_phase2",
        "provision_costs_phase2", "provision_voids_phase2",
        mode="before",
    )
    @classmethod
    def _coerce_numeric(cls, v: Any) -> float:
        return coerce_amount(v)

    @field_validator("beds_phase2", mode="before")
    @classmethod
    def _coerce_beds(cls, v: Any) -> int:
        return int(coerce_amount(v))

    @field_validator("property_id", mode="before")
    @classmethod
    def _id_as_text(cls, v: Any) -> str:
        return str(v)

    @field_validator("address", "city", "market_value_basis", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @property
    def label(self) -> str:
        """'70 Estcourt Avenue, Leeds'"""
        return f"{self.address}, {self.city}" if self.city else self.address

    @property
    def address_key(self) -> str:
        """Lower-cased first line of the address, used to match ledger rows."""
        return self.address.split(",")[0].strip().lower()


# --------------------------------------------------------------------------- #
# capital_transactions
# --------------------------------------------------------------------------- #

class CapitalTransaction(StoreRecord):
    transaction_id: str
    property_id: str
    date: dt.date
    type: str = ""
    description: str = ""
    amount: float = 0.0

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, v: Any) -> Any:
        return coerce_date(v)

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, v: Any) -> float:
        return coerce_amount(v)

    @field_validator("transaction_id", "property_id", mode="before")
    @classmethod
    def _id_as_text(cls, v: Any) -> str:
        return str(v)

    @field_validator("type", "description", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str:
        return "" if v is None else str(v)


# --------------------------------------------------------------------------- #
# scenarios
# --------------------------------------------------------------------------- #

class Scenario(StoreRecord):
    """Alternate what-if assumptions for a property's phase 2."""

    scenario_id: str
    property_id: str
    scenario_label: str = ""
    revaluation_estimate: float = 0.0
    deposit_pct_phase2: float = 0.0
    equity_release: float = 0.0
    mortgage_rate_phase2: float = 0.0
    annual_rent_phase2: float = 0.0

    @field_validator(
        "revaluation_estimate", "deposit_pct_phase2", "equity_release",
        "mortgage_rate_phase2", "annual_rent_phase2",
        mode="before",
    )
    @classmethod
    def _coerce_numeric(cls, v: Any) -> float:
        return coerce_amount(v)

    @field_validator("scenario_id", "property_id", mode="before")
    @classmethod
    def _id_as_text(cls, v: Any) -> str:
        return str(v)


# --------------------------------------------------------------------------- #
# valuations
# --------------------------------------------------------------------------- #

class Valuation(StoreRecord):
    id: Optional[int] = None
    property_id: Optional[str] = None
    date: dt.date
    value: float = 0.0
    source: str = ""
    address: str = ""

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, v: Any) -> Any:
        return coerce_date(v)

    @field_validator("value", mode="before")
    @classmethod
    def _coerce_value(cls, v: Any) -> float:
        return coerce_amount(v)

    @field_validator("source", "address", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str:
        return "" if v is None else str(v)


# --------------------------------------------------------------------------- #
# Boundary validation
# --------------------------------------------------------------------------- #

RecordT = TypeVar("RecordT", bound=StoreRecord)


def parse_rows(model: Type[RecordT], rows: Iterable[Dict[str, Any]] | None) -> List[RecordT]:
    """
    Validate raw store rows into ``model`` instances.

    Rows that cannot be validated (missing ids, unparsable dates) are dropped
    and logged; they never reach the calculations.
    """
    parsed: List[RecordT] = []
    dropped = 0
    for row in rows or []:
        try:
            parsed.append(model.model_validate(row))
        except (ValidationError, ValueError, TypeError) as e:
            dropped += 1
            logger.debug("[Records] %s row rejected: %s", model.__name__, e)
    if dropped:
        logger.warning("[Records] Dropped %d invalid %s row(s)", dropped, model.__name__)
    return parsed
