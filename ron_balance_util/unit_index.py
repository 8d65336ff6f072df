"""Unit → category membership index built from unitrules.xml.

unitrules.xml holds one ``<UNIT>`` element per unit:

    <UNIT>
        <NAME>Heavy Infantry</NAME>
        <OBJ_MASK>FHW</OBJ_MASK>
        ...
    </UNIT>

The index maps every (normalized) unit name to the set of OBJ_MASK category
names it belongs to, in first-seen order. After all units, a fixed list of
meta names (SIEGE, CITIES, AGE_0, ...) is appended with no categories so that
balance.xml rows addressed at them take part in the matrix.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional

from lxml import etree

from ron_balance_util.categories import categories_for_flags
from ron_balance_util.diagnostics import Diagnostics
from ron_balance_util.errors import SourceFormatError, SourceNotFoundError

logger = logging.getLogger(__name__)

UnitCategoryIndex = dict[str, set[str]]

# Wildlife and ambient units that never fight
UNIT_IGNORE_LIST: tuple[str, ...] = (
    "Fur_Trapper",
    "Wild_Bird",
    "Flock_Bird",
    "Gull_Bird",
    "Farm_Pig",
    "Farm_Chicken",
    "Herd_Horse",
    "Herd_Sheep",
    "Herd_Bison",
    "Herd_Bear",
    "Herd_Fish",
    "Herd_Whales",
    "Herd_Peacock",
)

# Entries in balance.xml that are not units but behave like them
META_NAMES: tuple[str, ...] = (
    "SIEGE",
    "FORTS",
    "TOWERS",
    "CITIES",
    "OBSPOST",
    "BUILDINGS",
    "UNITS",
    "AGE_0",
    "AGE_1",
    "AGE_2",
    "AGE_3",
    "AGE_4",
    "AGE_5",
    "AGE_6",
    "AGE_7",
)


@dataclass(frozen=True)
class UnitRecord:
    """One ``<UNIT>`` element: raw name and OBJ_MASK flag string."""

    name: str
    flags: str = ""


def normalize_unit_name(name: str) -> str:
    """Convert a unitrules.xml display name to its balance.xml form.

    Spaces become underscores and apostrophes are dropped, so
    ``"Heavy Infantry"`` → ``"Heavy_Infantry"``.
    """
    return name.replace(" ", "_").replace("'", "")


# ── Reading ──────────────────────────────────────────────────────────────────


def read_unit_records(path: Path) -> Iterator[UnitRecord]:
    """Stream the ``<UNIT>`` elements of a unitrules.xml file.

    Raises:
        SourceNotFoundError: The file cannot be opened.
        SourceFormatError: The XML is malformed or a unit has no NAME.
    """
    path = Path(path)
    try:
        fh = open(path, "rb")
    except OSError as e:
        raise SourceNotFoundError(path, e.strerror or str(e)) from e

    with fh:
        try:
            for _, unit in etree.iterparse(fh, events=("end",), tag="UNIT"):
                name = unit.findtext("NAME")
                if not name:
                    raise SourceFormatError(
                        path, f"UNIT element on line {unit.sourceline} has no NAME")
                flags = unit.findtext("OBJ_MASK") or ""
                yield UnitRecord(name=name, flags=flags.strip())
                unit.clear()
        except etree.XMLSyntaxError as e:
            raise SourceFormatError(path, str(e)) from e


# ── Building ─────────────────────────────────────────────────────────────────


def build_unit_index(
    records: Iterable[UnitRecord],
    ignore: Iterable[str] = UNIT_IGNORE_LIST,
    diagnostics: Optional[Diagnostics] = None,
) -> UnitCategoryIndex:
    """Build the unit → categories index.

    Args:
        records: Unit records in document order.
        ignore: Normalized unit names to leave out entirely.
        diagnostics: Collector for unknown-flag and duplicate-unit warnings.

    Returns:
        Ordered dict of unit name → set of category names, followed by the
        META_NAMES not already present (each with an empty set).
    """
    if diagnostics is None:
        diagnostics = Diagnostics()
    ignored = set(ignore)

    index: UnitCategoryIndex = {}
    for record in records:
        name = normalize_unit_name(record.name)
        if name in ignored:
            continue

        categories = categories_for_flags(record.flags, diagnostics)
        existing = index.get(name)
        if existing is None:
            index[name] = categories
            continue

        if existing != categories:
            diagnostics.warn(
                f"different units named '{name}' have differing OBJ_MASK values")
        existing |= categories

    for meta in META_NAMES:
        index.setdefault(meta, set())

    return index


def load_unit_index(
    path: Path,
    ignore: Iterable[str] = UNIT_IGNORE_LIST,
    diagnostics: Optional[Diagnostics] = None,
) -> UnitCategoryIndex:
    """Read a unitrules.xml file and build its unit index."""
    logger.info("Processing %s", Path(path).name)
    return build_unit_index(read_unit_records(path), ignore=ignore,
                            diagnostics=diagnostics)
