"""
Tests for the map generation script
"""
import asyncio
import json
import pytest
from unittest.mock import AsyncMock, patch

import sys
sys.path.insert(0, '.')

import generate_map
from src.reports.exceptions import PersistenceError
from src.reports.repository import ReportRepository


class TestLoadReports:
    """Test suite for loading the board before rendering."""

    def test_closes_store_after_load(self, store):
        repository = ReportRepository(store)

        with patch.object(store, "close", new=AsyncMock()) as close:
            asyncio.run(generate_map.load_reports(repository))

        close.assert_awaited_once()

    def test_closes_store_when_load_fails(self, store):
        store.fail_list = True
        repository = ReportRepository(store)

        with patch.object(store, "close", new=AsyncMock()) as close:
            with pytest.raises(PersistenceError):
                asyncio.run(generate_map.load_reports(repository))

        close.assert_awaited_once()

    def test_main_reports_load_failure(self, store, tmp_path, capsys):
        store.fail_list = True
        output = tmp_path / "board.html"

        with patch.object(generate_map, "create_store", return_value=store), \
                patch.object(store, "close", new=AsyncMock()) as close:
            code = generate_map.main(["-o", str(output)])

        assert code == 1
        assert not output.exists()
        assert "could not load reports" in capsys.readouterr().out
        close.assert_awaited_once()

    def test_main_writes_map(self, store, stored_record, tmp_path):
        store._data = {"report:1": json.dumps(stored_record)}
        output = tmp_path / "board.html"

        with patch.object(generate_map, "create_store", return_value=store):
            code = generate_map.main(["-o", str(output)])

        assert code == 0
        assert output.exists()
