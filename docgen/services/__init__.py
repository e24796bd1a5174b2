"""Application services."""

from docgen.services.document_service import (
    DocumentGenerationError,
    DocumentService,
    missing_required,
)

__all__ = [
    "DocumentService",
    "DocumentGenerationError",
    "missing_required",
]
