class ExportError(Exception):
    """Base exception for trust graph export failures."""
    pass

class ConfigurationError(ExportError):
    """No connection string in the CLI arguments or in the environment."""
    pass

class FetchError(ExportError):
    """One of the index queries failed, so the snapshot is incomplete."""
    pass

class MalformedRowError(ExportError):
    """A row returned by the index is missing a required column."""

    def __init__(self, row_type: str, column: str, row=None):
        self.row_type = row_type
        self.column = column
        self.row = row
        super().__init__(f"{row_type} row is missing required column '{column}': {row!r}")
