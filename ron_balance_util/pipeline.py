"""End-to-end repair of a balance.xml file.

    result = repair_balance(Path("Data/balance.xml"))
    write_balance_table(result.table, Path("balance_out.xml"))
    for warning in result.diagnostics.warnings:
        ...

unitrules.xml is looked up next to the balance file unless given explicitly.
Nothing is written here; the caller decides where the table goes.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from ron_balance_util.balance_matrix import BalanceTable, build_balance_table
from ron_balance_util.diagnostics import Diagnostics
from ron_balance_util.modifier_table import ModifierTable, load_modifier_table
from ron_balance_util.unit_index import (
    UNIT_IGNORE_LIST,
    UnitCategoryIndex,
    load_unit_index,
)

BALANCE_FILE_NAME = "balance.xml"
UNIT_RULES_FILE_NAME = "unitrules.xml"


@dataclass
class RepairResult:
    """Repaired table plus the intermediate tables and warnings."""

    table: BalanceTable
    index: UnitCategoryIndex
    modifiers: ModifierTable
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


def resolve_sources(path: Path,
                    unit_rules_path: Optional[Path] = None) -> tuple[Path, Path]:
    """Work out the balance.xml and unitrules.xml paths.

    Args:
        path: Either the balance file itself or the game data directory.
        unit_rules_path: Explicit unitrules.xml, overriding the lookup.

    Returns:
        (balance_path, unit_rules_path).
    """
    path = Path(path)
    if path.is_dir():
        balance_path = path / BALANCE_FILE_NAME
    else:
        balance_path = path
    if unit_rules_path is None:
        unit_rules_path = balance_path.parent / UNIT_RULES_FILE_NAME
    return balance_path, Path(unit_rules_path)


def repair_balance(
    path: Path,
    unit_rules_path: Optional[Path] = None,
    ignore: Iterable[str] = UNIT_IGNORE_LIST,
) -> RepairResult:
    """Rebuild a complete balance table from balance.xml and unitrules.xml.

    Args:
        path: balance.xml, or the directory holding it.
        unit_rules_path: unitrules.xml; defaults to the balance file's sibling.
        ignore: Unit names to leave out of the table.

    Returns:
        RepairResult with the neutralized table and collected warnings.

    Raises:
        BalanceToolError: Any input is missing, malformed or non-numeric.
    """
    balance_path, unit_rules_path = resolve_sources(path, unit_rules_path)
    diagnostics = Diagnostics()

    index = load_unit_index(unit_rules_path, ignore=ignore, diagnostics=diagnostics)
    modifiers = load_modifier_table(balance_path, diagnostics=diagnostics)
    table = build_balance_table(index, modifiers)

    return RepairResult(table=table, index=index, modifiers=modifiers,
                        diagnostics=diagnostics)
