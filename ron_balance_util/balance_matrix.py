"""Dense balance matrix reconstructed from the unit index and sparse table.

For an attacker A and defender B, every rule that applies is multiplied in
as a ratio against 100:

    balance(A, B) = 100 * Π  table[a][b] / 100
                         a ∈ {A} ∪ categories(A)
                         b ∈ {B} ∪ categories(B)

A missing entry or target counts as 100 (no effect). This gives every pair
the combined unit and category modifiers that the game's own table only
partly contains.

The game engine applies category modifiers a second time on its own, so the
final pass (:func:`neutralize_categories`) resets every cell addressed by an
OBJ_MASK category name, as attacker or as defender, to 100.
"""

import logging
from typing import Iterable

from ron_balance_util.categories import CATEGORY_NAMES, ordered_categories
from ron_balance_util.modifier_table import ModifierTable
from ron_balance_util.unit_index import UnitCategoryIndex

logger = logging.getLogger(__name__)

NEUTRAL_MODIFIER = 100.0

BalanceTable = dict[str, dict[str, float]]


def _names_for(name: str, index: UnitCategoryIndex) -> list[str]:
    """The name itself followed by its categories in table order."""
    return [name, *ordered_categories(index.get(name, ()))]


def modifier_between(attacker: str, defender: str,
                     index: UnitCategoryIndex, table: ModifierTable) -> float:
    """Compute the combined modifier of one attacker against one defender.

    Args:
        attacker: Unit or meta name (row).
        defender: Unit or meta name (column).
        index: Unit → category membership.
        table: Sparse modifiers from balance.xml.

    Returns:
        Percentage modifier (100.0 = neutral).
    """
    balance = NEUTRAL_MODIFIER
    defender_names = _names_for(defender, index)
    for attacker_key in _names_for(attacker, index):
        entry = table.get(attacker_key)
        if entry is None:
            continue
        for defender_key in defender_names:
            balance *= entry.get(defender_key, NEUTRAL_MODIFIER) / NEUTRAL_MODIFIER
    return balance


def compute_balance_matrix(index: UnitCategoryIndex,
                           table: ModifierTable) -> BalanceTable:
    """Compute the full attacker × defender matrix over every indexed name.

    Rows and columns both follow index order. Neither input is modified.
    """
    matrix: BalanceTable = {}
    for attacker in index:
        matrix[attacker] = {
            defender: modifier_between(attacker, defender, index, table)
            for defender in index
        }
    logger.debug("Computed %d x %d balance matrix", len(matrix), len(index))
    return matrix


def neutralize_categories(matrix: BalanceTable,
                          names: Iterable[str],
                          categories: Iterable[str] = CATEGORY_NAMES) -> BalanceTable:
    """Reset every category-addressed cell of the matrix to 100, in place.

    A row is (re)written for each category covering all ``names``, then each
    row's category columns are set to 100. The matrix stays square: its rows
    and columns are ``names`` followed by the categories.

    Args:
        matrix: Output of :func:`compute_balance_matrix`; modified in place.
        names: The indexed names the matrix was computed over.
        categories: Category names to neutralize.

    Returns:
        The same matrix object.
    """
    names = list(names)
    categories = list(categories)

    for category in categories:
        matrix[category] = {name: NEUTRAL_MODIFIER for name in names}

    for row in matrix.values():
        for category in categories:
            row[category] = NEUTRAL_MODIFIER

    return matrix


def build_balance_table(index: UnitCategoryIndex,
                        table: ModifierTable) -> BalanceTable:
    """Compute the dense matrix and neutralize its category cells."""
    matrix = compute_balance_matrix(index, table)
    return neutralize_categories(matrix, index)
