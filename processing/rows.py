"""
Typed rows of the index queries.

Each dataclass mirrors the column list of one query in db/queries.py and is
built once at the fetch boundary, so a shape mismatch fails there and not
somewhere inside grouping or assembly.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional

from processing.errors import MalformedRowError


def _column(row: Mapping[str, Any], row_type: str, column: str, nullable: bool = True):
    try:
        value = row[column]
    except KeyError:
        raise MalformedRowError(row_type, column, row) from None
    if value is None and not nullable:
        raise MalformedRowError(row_type, column, row)
    return value


def decimal_text(value: Decimal) -> str:
    """Plain positional text of a Decimal, as PostgreSQL prints numeric (no exponent)."""
    return format(value, "f")


def _amount_text(value) -> str:
    # balance is selected as text; Decimal only shows up if the cast is dropped
    if isinstance(value, str):
        return value
    if isinstance(value, Decimal):
        return decimal_text(value)
    raise MalformedRowError("BalanceRow", "amount", {"amount": value})


@dataclass(frozen=True)
class SignupRow:
    """One safe from crc_all_signups. A safe without a token is an organization."""
    safe_address: Optional[str]
    is_orga: bool

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "SignupRow":
        return cls(
            safe_address=_column(row, "SignupRow", "safe_address"),
            is_orga=bool(_column(row, "SignupRow", "is_orga", nullable=False)),
        )


@dataclass(frozen=True)
class TrustRelationRow:
    """
    A current trust edge: can_send_to_address trusts user_address up to limit,
    i.e. user_address can send its tokens to can_send_to_address.
    """
    is_identity: bool
    can_send_to_address: Optional[str]
    user_address: Optional[str]
    limit: Any

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "TrustRelationRow":
        return cls(
            is_identity=bool(_column(row, "TrustRelationRow", "is_identity")),
            can_send_to_address=_column(row, "TrustRelationRow", "canSendToAddress"),
            user_address=_column(row, "TrustRelationRow", "userAddress"),
            limit=_column(row, "TrustRelationRow", "limit", nullable=False),
        )


@dataclass(frozen=True)
class BalanceRow:
    """Balance of one token held by one safe. amount is the exact decimal text."""
    safe_address: Optional[str]
    token: Optional[str]
    token_owner: Optional[str]
    amount: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "BalanceRow":
        return cls(
            safe_address=_column(row, "BalanceRow", "safe_address"),
            token=_column(row, "BalanceRow", "token"),
            token_owner=_column(row, "BalanceRow", "token_owner"),
            amount=_amount_text(_column(row, "BalanceRow", "amount", nullable=False)),
        )

    @property
    def is_negative(self) -> bool:
        return self.amount.startswith("-")
