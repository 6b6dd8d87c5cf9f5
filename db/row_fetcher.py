"""
Concurrent fetch of the five row sets the export is built from.

All queries are submitted at once to a thread pool, each on its own pooled
connection, and joined with a single wait. Any failure fails the whole
fetch; there are no partial results and no retries.
"""

import logging
import time
from concurrent.futures import ALL_COMPLETED, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from db.db_manager import pooled_connection
from db.queries import EXPORT_QUERIES
from processing.errors import ExportError, FetchError, MalformedRowError
from processing.rows import BalanceRow, SignupRow, TrustRelationRow

logger = logging.getLogger("db.row_fetcher")

FETCH_WORKERS = len(EXPORT_QUERIES)


@dataclass(frozen=True)
class FetchedRowSets:
    """Rows of one export run; never modified after the fetch."""
    block_number: Optional[int]
    signups: Tuple[SignupRow, ...] = ()
    incoming_trusts: Tuple[TrustRelationRow, ...] = ()
    outgoing_trusts: Tuple[TrustRelationRow, ...] = ()
    balances: Tuple[BalanceRow, ...] = ()


def run_query(pool, name: str, sql: str) -> List[Dict[str, Any]]:
    start_time = time.time()
    with pooled_connection(pool) as conn:
        with conn.cursor() as cur:
            cur.execute(sql)
            rows = cur.fetchall()
    logger.info(f"Query '{name}' returned {len(rows)} rows in {time.time() - start_time:.2f} sec.")
    return rows


def _block_number(rows: List[Dict[str, Any]]) -> Optional[int]:
    if not rows:
        return None
    if "block" not in rows[0]:
        raise MalformedRowError("BlockRow", "block", rows[0])
    block = rows[0]["block"]
    return int(block) if block is not None else None


def fetch_row_sets(pool) -> FetchedRowSets:
    """
    Runs the block, signup, trust and balance queries concurrently.

    Args:
        pool: Connection pool from db.db_manager.create_pool

    Returns:
        FetchedRowSets with typed rows; block_number is None for an empty ledger

    Raises:
        FetchError: if any query failed
        MalformedRowError: if a row lacks a required column
    """
    logger.info("Querying the database ...")
    with ThreadPoolExecutor(max_workers=FETCH_WORKERS) as executor:
        futures = {
            name: executor.submit(run_query, pool, name, sql)
            for name, sql in EXPORT_QUERIES.items()
        }
        wait(futures.values(), return_when=ALL_COMPLETED)

    results = {}
    for name, future in futures.items():
        error = future.exception()
        if error is not None:
            if isinstance(error, ExportError):
                raise error
            raise FetchError(f"Query '{name}' failed: {error}") from error
        results[name] = future.result()

    row_sets = FetchedRowSets(
        block_number=_block_number(results["block"]),
        signups=tuple(SignupRow.from_row(r) for r in results["signups"]),
        incoming_trusts=tuple(TrustRelationRow.from_row(r) for r in results["incoming_trusts"]),
        outgoing_trusts=tuple(TrustRelationRow.from_row(r) for r in results["outgoing_trusts"]),
        balances=tuple(BalanceRow.from_row(r) for r in results["balances"]),
    )
    logger.info(f"Last imported block: {row_sets.block_number}")
    return row_sets
