"""Template engine and template source interfaces.

Defines abstract base classes for the document generator core and the
error taxonomy surfaced to callers.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any


class TemplateError(Exception):
    """Base class for all template processing failures."""

    pass


class ArchiveError(TemplateError):
    """Exception raised when template bytes are not a valid DOCX package."""

    pass


class MissingContentError(TemplateError):
    """Exception raised when the document body member is absent."""

    pass


class PackagingError(TemplateError):
    """Exception raised when the rendered package cannot be written."""

    pass


class FetchError(TemplateError):
    """Exception raised when template bytes cannot be retrieved."""

    pass


class BaseTemplateEngine(ABC):
    """Abstract base class for placeholder extraction and substitution.

    Implementations are stateless: each call opens the package, transforms
    it and returns, so a single instance can be shared freely.
    """

    @abstractmethod
    def extract_variables(self, template: bytes) -> list[str]:
        """Extract placeholder names from a template.

        Args:
            template: Raw DOCX bytes.

        Returns:
            Unique variable names in order of first appearance.

        Raises:
            ArchiveError: If the bytes are not a valid package.
            MissingContentError: If the document body is absent.
        """

    @abstractmethod
    def render(self, template: bytes, values: Mapping[str, Any]) -> bytes:
        """Substitute values into a template.

        Args:
            template: Raw DOCX bytes.
            values: Mapping of variable name to str, list of str or bool.

        Returns:
            The rendered DOCX bytes.

        Raises:
            ArchiveError: If the bytes are not a valid package.
            MissingContentError: If the document body is absent.
            PackagingError: If the output package cannot be written.
        """

    @abstractmethod
    def find_unresolved(self, document: bytes) -> list[str]:
        """Return placeholder names still present in a rendered document."""

    @abstractmethod
    def document_text(self, document: bytes) -> list[str]:
        """Return the readable paragraph texts of a document, for previews."""

    @property
    @abstractmethod
    def supported_extensions(self) -> set[str]:
        """Return supported file extensions."""


class BaseTemplateSource(ABC):
    """Abstract base class for retrieving template bytes."""

    @abstractmethod
    async def fetch(self, ref: str) -> bytes:
        """Fetch the raw bytes of a template.

        Args:
            ref: Template reference (relative path or URL path).

        Returns:
            The template bytes.

        Raises:
            FetchError: If the template cannot be retrieved.
        """
