"""Sparse modifier table built from balance.xml.

balance.xml holds ``<ENTRY>`` elements whose ``name`` attribute is a unit,
meta name or OBJ_MASK category, and whose other attributes are targets:

    <ENTRY name="Flag_A_OBJMASK_ARMORED" Flag_U_OBJMASK_ARMORPIERCE="150"/>

Values are percentages (100 = neutral). Only the targets actually listed are
kept; the matrix builder supplies the neutral value for everything else.
"""

import logging
import math
from pathlib import Path
from typing import Iterable, Iterator, Mapping, Optional

from lxml import etree

from ron_balance_util.diagnostics import Diagnostics
from ron_balance_util.errors import (
    BalanceParseError,
    SourceFormatError,
    SourceNotFoundError,
)

logger = logging.getLogger(__name__)

NAME_KEY = "name"

ModifierTable = dict[str, dict[str, float]]


def read_balance_entries(path: Path) -> Iterator[dict[str, str]]:
    """Stream the attributes of every ``<ENTRY>`` element in balance.xml.

    Entries are matched at any depth; attributes keep document order.

    Raises:
        SourceNotFoundError: The file cannot be opened.
        SourceFormatError: The XML is malformed.
    """
    path = Path(path)
    try:
        fh = open(path, "rb")
    except OSError as e:
        raise SourceNotFoundError(path, e.strerror or str(e)) from e

    with fh:
        try:
            for _, entry in etree.iterparse(fh, events=("end",), tag="ENTRY"):
                yield dict(entry.attrib)
                entry.clear()
        except etree.XMLSyntaxError as e:
            raise SourceFormatError(path, str(e)) from e


def parse_modifier(entry: str, attribute: str, raw: str) -> float:
    """Parse one attribute value as a percentage modifier."""
    try:
        value = float(raw)
    except ValueError:
        raise BalanceParseError(
            f"Failed to parse attribute value in balance ENTRY '{entry}': "
            f"{attribute}={raw!r} is not a number",
            entry=entry, attribute=attribute, value=raw,
        ) from None
    if not math.isfinite(value):
        raise BalanceParseError(
            f"Failed to parse attribute value in balance ENTRY '{entry}': "
            f"{attribute}={raw!r} is not a finite number",
            entry=entry, attribute=attribute, value=raw,
        )
    return value


def build_modifier_table(
    entries: Iterable[Mapping[str, str]],
    diagnostics: Optional[Diagnostics] = None,
) -> ModifierTable:
    """Build the sparse name → {target: modifier} table.

    Args:
        entries: Attribute mappings of each ENTRY element, in document order.
        diagnostics: Collector for warnings (an entry overriding an earlier
            one with the same name).

    Returns:
        Ordered dict keyed by entry name. A later entry with the same name
        replaces the earlier one.

    Raises:
        BalanceParseError: An entry has no name, or a value is not numeric.
    """
    if diagnostics is None:
        diagnostics = Diagnostics()

    table: ModifierTable = {}
    for attribs in entries:
        name = attribs.get(NAME_KEY, "")
        if not name:
            raise BalanceParseError(
                'No "name" attribute found in a balance ENTRY element')

        modifiers: dict[str, float] = {}
        for key, raw in attribs.items():
            if key == NAME_KEY:
                continue
            modifiers[key] = parse_modifier(name, key, raw)

        if name in table:
            diagnostics.warn(f"balance ENTRY '{name}' is defined more than once, "
                             "keeping the last definition")
        table[name] = modifiers

    return table


def load_modifier_table(
    path: Path,
    diagnostics: Optional[Diagnostics] = None,
) -> ModifierTable:
    """Read a balance.xml file and build its sparse modifier table."""
    logger.info("Processing %s", Path(path).name)
    return build_modifier_table(read_balance_entries(path),
                                diagnostics=diagnostics)
