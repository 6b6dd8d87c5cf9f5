"""
One export run: fetch the index, join the row sets in memory and serialize
the snapshot. Nothing is written here; the caller decides where the text goes.
"""

import logging
import time

from db.db_manager import close_pool, create_pool
from db.row_fetcher import FetchedRowSets, fetch_row_sets
from processing.safe_assembler import assemble_safes, build_lookups
from reporting.serializer import build_snapshot, serialize_snapshot

logger = logging.getLogger("export")


def export_row_sets(row_sets: FetchedRowSets) -> str:
    """Pure part of the export: same row sets in, same JSON text out."""
    lookups = build_lookups(row_sets)
    safes = assemble_safes(lookups)
    return serialize_snapshot(build_snapshot(row_sets.block_number, safes))


def export_graph_and_balances(connection_string: str, use_ssl: bool = True, pool_factory=create_pool) -> str:
    """
    Exports the trust graph and balances of all safes as one JSON document.

    Args:
        connection_string: Index database DSN
        use_ssl: Require SSL on the database connections
        pool_factory: Builds the connection pool (tests pass a fake)

    Returns:
        The serialized snapshot
    """
    start_time = time.time()
    pool = pool_factory(connection_string, use_ssl=use_ssl)
    try:
        row_sets = fetch_row_sets(pool)
    finally:
        close_pool(pool)
    result = export_row_sets(row_sets)
    logger.info(f"Export finished in {time.time() - start_time:.2f} sec.")
    return result
