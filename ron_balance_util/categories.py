"""OBJ_MASK category flags used by Rise of Nations unit rules.

Each unit in unitrules.xml carries an OBJ_MASK string whose characters are
category codes. balance.xml addresses those categories by their attribute
names (``Flag_<code>_OBJMASK_<NAME>``), e.g.:

  - A: Flag_A_OBJMASK_ARMORED
  - N: Flag_N_OBJMASK_NAVAL
  - S: Flag_S_OBJMASK_SIEGE

There are exactly 32 codes. An unknown code in a flag string is not an error;
it is reported as a warning and skipped.
"""

from typing import Iterable, Optional

from ron_balance_util.diagnostics import Diagnostics

# ── Code → category name ────────────────────────────────────────────────────

CATEGORY_TABLE: dict[str, str] = {
    "A": "Flag_A_OBJMASK_ARMORED",
    "B": "Flag_B_OBJMASK_BOMBARD",
    "C": "Flag_C_OBJMASK_CIVILIAN",
    "D": "Flag_D_OBJMASK_MUSKET_INF",
    "E": "Flag_E_OBJMASK_ELEPHANT",
    "F": "Flag_F_OBJMASK_FOOT",
    "G": "Flag_G_OBJMASK_GUN",
    "H": "Flag_H_OBJMASK_HEAVY_INF",
    "I": "Flag_I_OBJMASK_MODERN_INF",
    "J": "Flag_J_OBJMASK_CARRY_AIR",
    "K": "Flag_K_OBJMASK_FOOT_ARCHER",
    "L": "Flag_L_OBJMASK_LARGE",
    "M": "Flag_M_OBJMASK_MOUNTED",
    "N": "Flag_N_OBJMASK_NAVAL",
    "O": "Flag_O_OBJMASK_HORSE_ARCHER",
    "P": "Flag_P_OBJMASK_SPARSE",
    "Q": "Flag_Q_OBJMASK_LIGHT_INF",
    "R": "Flag_R_OBJMASK_ARCHERY",
    "S": "Flag_S_OBJMASK_SIEGE",
    "T": "Flag_T_OBJMASK_WAR_MACHINE",
    "U": "Flag_U_OBJMASK_ARMORPIERCE",
    "V": "Flag_V_OBJMASK_VEHICLE",
    "W": "Flag_W_OBJMASK_MELEE",
    "X": "Flag_X_OBJMASK_EXPLOSIVE",
    "Y": "Flag_Y_OBJMASK_HEAVY_CAV",
    "Z": "Flag_Z_OBJMASK_DETECT",
    "1": "Flag_1_OBJMASK_UNUSED",
    "2": "Flag_2_OBJMASK_MISSILE",
    "3": "Flag_3_OBJMASK_AIR",
    "4": "Flag_4_OBJMASK_LIGHT_CAV",
    "5": "Flag_5_OBJMASK_PIKE",
    "6": "Flag_6_OBJMASK_ANTI_AIR",
}

# Canonical names in table order
CATEGORY_NAMES: tuple[str, ...] = tuple(CATEGORY_TABLE.values())

_CATEGORY_RANK: dict[str, int] = {name: i for i, name in enumerate(CATEGORY_NAMES)}


# ── Query functions ──────────────────────────────────────────────────────────


def category_for(code: str) -> Optional[str]:
    """Get the category name for a single OBJ_MASK code. None if unknown."""
    return CATEGORY_TABLE.get(code)


def is_category(name: str) -> bool:
    """Check if a name is one of the 32 fixed category names."""
    return name in _CATEGORY_RANK


def categories_for_flags(flags: str,
                         diagnostics: Optional[Diagnostics] = None) -> set[str]:
    """Translate an OBJ_MASK flag string into a set of category names.

    Args:
        flags: Flag string from unitrules.xml (e.g. "FHW").
        diagnostics: Collector for unknown-code warnings.

    Returns:
        Set of category names. Unknown codes are skipped with a warning.
    """
    if diagnostics is None:
        diagnostics = Diagnostics()

    categories: set[str] = set()
    for code in flags:
        name = category_for(code)
        if name is None:
            diagnostics.warn(f"unknown OBJ_MASK flag found '{code}'")
            continue
        categories.add(name)
    return categories


def ordered_categories(names: Iterable[str]) -> list[str]:
    """Sort category names into table order.

    Membership sets are iterated through this so that modifier products are
    always evaluated in the same order.
    """
    return sorted(names, key=lambda n: (_CATEGORY_RANK.get(n, len(_CATEGORY_RANK)), n))
