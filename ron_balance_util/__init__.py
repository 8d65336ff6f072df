"""RoN Balance Util — OBJ_MASK balance table repair for Rise of Nations.

Provides:
- categories: The 32 OBJ_MASK category flags and their balance.xml names
- unit_index: Unit → category membership from unitrules.xml
- modifier_table: Sparse attacker → target modifiers from balance.xml
- balance_matrix: Dense matrix composition and category neutralization
- table_writer: balance.xml serialization
- pipeline: End-to-end repair of a game data directory
"""

__version__ = "0.1.0"
