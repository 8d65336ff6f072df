"""Serialize a repaired balance table back to balance.xml form.

Output layout (two-space indent, one self-closing ENTRY per row):

    <?xml version='1.0' encoding='UTF-8'?>
    <ROOT>
      <TABLE>
        <ENTRY name="Hoplite" Hoplite="100" Slinger="75" .../>
      </TABLE>
    </ROOT>
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import BinaryIO, Mapping, Union

from lxml import etree

from ron_balance_util.errors import BalanceWriteError

logger = logging.getLogger(__name__)


def round_modifier(value: float) -> int:
    """Round to the nearest integer, halves away from zero (12.5 → 13)."""
    return int(Decimal(value).to_integral_value(rounding=ROUND_HALF_UP))


def build_balance_tree(table: Mapping[str, Mapping[str, float]]) -> etree._ElementTree:
    """Build the ROOT/TABLE/ENTRY element tree for a balance table."""
    root = etree.Element("ROOT")
    table_elem = etree.SubElement(root, "TABLE")
    for entry_name, modifiers in table.items():
        entry = etree.SubElement(table_elem, "ENTRY")
        entry.set("name", entry_name)
        for target, modifier in modifiers.items():
            entry.set(target, str(round_modifier(modifier)))
    return etree.ElementTree(root)


def _sink_name(sink) -> str:
    if isinstance(sink, (str, Path)):
        return str(sink)
    return getattr(sink, "name", repr(sink))


def write_balance_table(table: Mapping[str, Mapping[str, float]],
                        sink: Union[str, Path, BinaryIO]) -> None:
    """Write the table as balance.xml to a path or binary stream.

    Raises:
        BalanceWriteError: The table cannot be encoded (e.g. a name that is
            not a valid XML attribute name) or the sink cannot be written.
    """
    logger.info("Writing new balance.xml to %s", _sink_name(sink))
    try:
        tree = build_balance_tree(table)
        if isinstance(sink, Path):
            sink = str(sink)
        tree.write(sink, encoding="UTF-8", xml_declaration=True, pretty_print=True)
    except (OSError, ValueError, etree.LxmlError) as e:
        raise BalanceWriteError(_sink_name(sink), str(e)) from e
