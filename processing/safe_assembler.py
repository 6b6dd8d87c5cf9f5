"""
Builds one nested safe record per signup from the grouped row sets.

The signup lookup drives the iteration: trust edges and balances are only
reached through the address of a signup, so rows keyed by any other address
never make it into the export.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List

from processing.grouping import group_by, to_lookup
from processing.rows import BalanceRow, TrustRelationRow, decimal_text
from reporting.models import ExportBalance, ExportRelation, ExportSafe, ExportToken, ExportTokenOwner

logger = logging.getLogger("export.assembler")
balance_logger = logging.getLogger("export.balances")

PROGRESS_EVERY = 10000


@dataclass
class SafeLookups:
    """Derived mappings, all keyed by safe address."""
    safes: Dict[str, bool]
    incoming: Dict[str, List[TrustRelationRow]]
    outgoing: Dict[str, List[TrustRelationRow]]
    balances: Dict[str, List[BalanceRow]]


def build_lookups(row_sets) -> SafeLookups:
    """
    Groups the fetched rows by safe address.

    Incoming trusts are keyed by the trusting side (canSendToAddress),
    outgoing trusts by the trusted side (userAddress).
    """
    safes = to_lookup(row_sets.signups, lambda o: o.safe_address, lambda o: o.is_orga)
    logger.debug(f"Got {len(safes)} safes.")

    incoming = group_by(row_sets.incoming_trusts, lambda o: o.can_send_to_address)
    logger.debug(f"Got incoming trusts for {len(incoming)} safes.")

    outgoing = group_by(row_sets.outgoing_trusts, lambda o: o.user_address)
    logger.debug(f"Got outgoing trusts for {len(outgoing)} safes.")

    balances = group_by(row_sets.balances, lambda o: o.safe_address)
    logger.debug(f"Got balances for {len(balances)} safes.")

    return SafeLookups(safes=safes, incoming=incoming, outgoing=outgoing, balances=balances)


def format_limit(limit: Any) -> str:
    """String form of a raw trust limit; 50.0 renders as "50", numeric without exponent."""
    if isinstance(limit, float) and limit.is_integer():
        return str(int(limit))
    if isinstance(limit, Decimal):
        return decimal_text(limit)
    return str(limit)


def to_export_relation(row: TrustRelationRow) -> ExportRelation:
    return ExportRelation(
        can_send_to_address=row.can_send_to_address,
        user_address=row.user_address,
        limit=None,
        limit_percentage=format_limit(row.limit),
    )


def to_export_balance(row: BalanceRow) -> ExportBalance:
    return ExportBalance(
        amount=row.amount,
        token=ExportToken(id=row.token, owner=ExportTokenOwner(id=row.token_owner)),
    )


def find_negative_balances(balances: List[BalanceRow]) -> List[BalanceRow]:
    return [o for o in balances if o.is_negative]


def assemble_safe(safe_address: str, is_orga: bool, lookups: SafeLookups) -> ExportSafe:
    outgoing_trusts = lookups.outgoing.get(safe_address, [])
    incoming_trusts = lookups.incoming.get(safe_address, [])
    balances = lookups.balances.get(safe_address, [])

    negative_balances = find_negative_balances(balances)
    if negative_balances:
        # ledger invariant violation; the rows are still exported unchanged
        balance_logger.warning(
            f"Negative balances for safe {safe_address}: "
            f"{[(o.token, o.amount) for o in negative_balances]}"
        )

    return ExportSafe(
        id=safe_address,
        organization=bool(is_orga),
        outgoing=[to_export_relation(o) for o in outgoing_trusts],
        incoming=[to_export_relation(o) for o in incoming_trusts],
        balances=[to_export_balance(o) for o in balances],
    )


def assemble_safes(lookups: SafeLookups) -> List[ExportSafe]:
    """
    Returns one ExportSafe per signup, in the order the signups were fetched.
    Safes without trusts or balances get empty lists.
    """
    safes: List[ExportSafe] = []
    for safe_address, is_orga in lookups.safes.items():
        if safes and len(safes) % PROGRESS_EVERY == 0:
            logger.debug(f"Constructed {len(safes)} safe objects.")
        safes.append(assemble_safe(safe_address, is_orga, lookups))
    logger.info(f"Assembled {len(safes)} safes")
    return safes
