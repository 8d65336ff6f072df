"""Shared test fixtures for RoN Balance Util tests."""

import pytest

UNIT_RULES_XML = """\
<?xml version="1.0"?>
<ROOT>
  <UNIT>
    <NAME>Hoplite</NAME>
    <OBJ_MASK>FHW</OBJ_MASK>
  </UNIT>
  <UNIT>
    <NAME>Slinger</NAME>
    <OBJ_MASK>FQR</OBJ_MASK>
  </UNIT>
  <UNIT>
    <NAME>King's Guard</NAME>
    <OBJ_MASK>F</OBJ_MASK>
  </UNIT>
  <UNIT>
    <NAME>Herd Horse</NAME>
    <OBJ_MASK>M</OBJ_MASK>
  </UNIT>
</ROOT>
"""

BALANCE_XML = """\
<?xml version="1.0"?>
<ROOT>
  <TABLE>
    <ENTRY name="Hoplite" Slinger="50"/>
    <ENTRY name="Flag_W_OBJMASK_MELEE" Flag_R_OBJMASK_ARCHERY="200" Flag_F_OBJMASK_FOOT="150"/>
    <ENTRY name="Flag_R_OBJMASK_ARCHERY" Flag_H_OBJMASK_HEAVY_INF="75"/>
    <ENTRY name="SIEGE" CITIES="300"/>
  </TABLE>
</ROOT>
"""


@pytest.fixture
def data_dir(tmp_path):
    """Game data directory with a small unitrules.xml and balance.xml."""
    (tmp_path / "unitrules.xml").write_text(UNIT_RULES_XML, encoding="utf-8")
    (tmp_path / "balance.xml").write_text(BALANCE_XML, encoding="utf-8")
    return tmp_path


@pytest.fixture
def write_xml(tmp_path):
    """Write an XML document under tmp_path and return its path."""
    def _write(name, text):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write
