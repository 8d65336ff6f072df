"""Collector for non-fatal conditions found while building the tables."""

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class Diagnostics:
    """Accumulates warnings for one repair run.

    Every warning is also forwarded to the ``ron_balance_util`` logger so a
    command-line run shows it as it happens, while callers (and tests) can
    inspect :attr:`warnings` afterwards.
    """

    warnings: list[str] = field(default_factory=list)

    def warn(self, message: str) -> None:
        self.warnings.append(message)
        logger.warning(message)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def __len__(self) -> int:
        return len(self.warnings)
