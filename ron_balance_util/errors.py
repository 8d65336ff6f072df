"""Fatal error types raised while repairing a balance table.

Every error carries enough context (file path, entry, attribute) to be shown
to the user as a single line. Non-fatal conditions never raise; they are
recorded on a :class:`~ron_balance_util.diagnostics.Diagnostics` instead.
"""


class BalanceToolError(Exception):
    """Base class for all errors that abort a repair run."""


class SourceNotFoundError(BalanceToolError):
    """An input file is missing or cannot be opened."""

    def __init__(self, path, reason: str = ""):
        self.path = path
        msg = f"Failed to open {path}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class SourceFormatError(BalanceToolError):
    """An input document is not well-formed or lacks a required field."""

    def __init__(self, path, reason: str):
        self.path = path
        super().__init__(f"Failed to read {path}: {reason}")


class BalanceParseError(BalanceToolError):
    """A balance ENTRY element cannot be turned into modifiers."""

    def __init__(self, reason: str, entry: str = "", attribute: str = "",
                 value: str | None = None):
        self.entry = entry
        self.attribute = attribute
        self.value = value
        super().__init__(reason)


class BalanceWriteError(BalanceToolError):
    """The repaired table could not be written to its sink."""

    def __init__(self, sink: str, reason: str):
        self.sink = sink
        super().__init__(f"Failed to write new balance.xml file to {sink}: {reason}")
