"""Abstract base classes and errors for the document generator."""

from docgen.interfaces.template import (
    ArchiveError,
    BaseTemplateEngine,
    BaseTemplateSource,
    FetchError,
    MissingContentError,
    PackagingError,
    TemplateError,
)

__all__ = [
    "BaseTemplateEngine",
    "BaseTemplateSource",
    "TemplateError",
    "ArchiveError",
    "MissingContentError",
    "PackagingError",
    "FetchError",
]
