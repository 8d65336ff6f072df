"""Tests for table_writer module."""

import io

import pytest
from lxml import etree

from ron_balance_util.errors import BalanceWriteError
from ron_balance_util.table_writer import (
    build_balance_tree,
    round_modifier,
    write_balance_table,
)


def _render(table) -> bytes:
    buf = io.BytesIO()
    write_balance_table(table, buf)
    return buf.getvalue()


class TestRoundModifier:
    """Test integer rounding of modifiers."""

    def test_halves_round_away_from_zero(self):
        assert round_modifier(12.5) == 13
        assert round_modifier(2.5) == 3
        assert round_modifier(-12.5) == -13

    def test_nearest(self):
        assert round_modifier(99.4) == 99
        assert round_modifier(99.6) == 100
        assert round_modifier(100.0) == 100


class TestWriteBalanceTable:
    """Test balance.xml serialization."""

    def test_exact_layout(self):
        table = {
            "Hoplite": {"Hoplite": 150.0, "Slinger": 12.5},
            "Slinger": {"Hoplite": 75.0, "Slinger": 100.0},
        }
        assert _render(table) == (
            b"<?xml version='1.0' encoding='UTF-8'?>\n"
            b"<ROOT>\n"
            b"  <TABLE>\n"
            b'    <ENTRY name="Hoplite" Hoplite="150" Slinger="13"/>\n'
            b'    <ENTRY name="Slinger" Hoplite="75" Slinger="100"/>\n'
            b"  </TABLE>\n"
            b"</ROOT>\n"
        )

    def test_name_attribute_comes_first(self):
        tree = build_balance_tree({"B": {"A": 1.0, "B": 2.0}})
        entry = tree.getroot().find("TABLE/ENTRY")
        assert list(entry.attrib) == ["name", "A", "B"]

    def test_output_parses_back(self):
        table = {"A&B": {"A&B": 100.0}}
        root = etree.fromstring(_render(table))
        entry = root.find("TABLE/ENTRY")
        assert entry.get("name") == "A&B"

    def test_deterministic(self):
        table = {"A": {"A": 33.3333, "B": 66.6666}, "B": {"A": 1.0, "B": 0.0}}
        assert _render(table) == _render(table)

    def test_write_to_path(self, tmp_path):
        path = tmp_path / "balance_out.xml"
        write_balance_table({"A": {"A": 100.0}}, path)
        assert b'<ENTRY name="A" A="100"/>' in path.read_bytes()

    def test_unwritable_path(self, tmp_path):
        path = tmp_path / "missing_dir" / "balance_out.xml"
        with pytest.raises(BalanceWriteError) as excinfo:
            write_balance_table({"A": {"A": 100.0}}, path)
        assert "balance_out.xml" in str(excinfo.value)

    def test_invalid_attribute_name(self):
        with pytest.raises(BalanceWriteError):
            write_balance_table({"A": {"bad name": 100.0}}, io.BytesIO())
