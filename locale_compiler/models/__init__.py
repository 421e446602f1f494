"""Domain models for the XLSX -> locale resource compiler.

This package contains the value objects passed between the pipeline stages:
configuration, classified sheet rows and the import/write results.
"""

from .config_models import ImportConfig
from .processing_result import EmitResult, ImportResult, ImportStatus, ReadResult, WriteResult
from .sheet_row import LocaleTree, MessageNode, SheetRow, SheetSchema

__all__ = [
    # Configuration models
    "ImportConfig",
    # Sheet models
    "LocaleTree",
    "MessageNode",
    "SheetRow",
    "SheetSchema",
    # Result models
    "EmitResult",
    "ImportResult",
    "ImportStatus",
    "ReadResult",
    "WriteResult",
]
