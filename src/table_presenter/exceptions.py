"""Custom exceptions for the Table Presenter package."""


class TablePresenterError(Exception):
    """Base exception for table presentation failures."""


class SchemaValidationError(TablePresenterError):
    """Raised when a table schema file cannot be parsed or validated."""


class ExportEncodingError(TablePresenterError):
    """Raised when CSV or spreadsheet encoding fails."""


class PrintRenderError(TablePresenterError):
    """Raised when the print document cannot be rendered."""


class ExportWriteError(TablePresenterError):
    """Raised when an export payload cannot be written to disk."""
