import json
from unittest.mock import MagicMock, patch

import pytest
from db.row_fetcher import FetchedRowSets
from processing.errors import FetchError
from processing.exporter import export_graph_and_balances
from processing.rows import SignupRow


def test_export_builds_pool_and_closes_it():
    pool = MagicMock()
    pool_factory = MagicMock(return_value=pool)
    row_sets = FetchedRowSets(block_number=3, signups=(SignupRow("0xA", True),))
    with patch("processing.exporter.fetch_row_sets", return_value=row_sets) as fetch:
        text = export_graph_and_balances("postgres://index", use_ssl=False, pool_factory=pool_factory)
    pool_factory.assert_called_once_with("postgres://index", use_ssl=False)
    fetch.assert_called_once_with(pool)
    pool.closeall.assert_called_once()
    assert json.loads(text) == {
        "blockNumber": 3,
        "safes": [{"id": "0xA", "organization": True, "outgoing": [], "incoming": [], "balances": []}],
    }

def test_pool_is_closed_when_fetch_fails():
    pool = MagicMock()
    with patch("processing.exporter.fetch_row_sets", side_effect=FetchError("Query 'block' failed")):
        with pytest.raises(FetchError):
            export_graph_and_balances("postgres://index", pool_factory=MagicMock(return_value=pool))
    pool.closeall.assert_called_once()
