"""Document generation service.

Orchestrates template fetching, field inference and rendering for the
document kinds in the catalog. This is the single entry point used by the
presentation layer.
"""

import logging
import time
from collections.abc import Iterable, Mapping
from typing import Any

from docgen.core.catalog import DocumentKind, get_document_kind
from docgen.core.factory import ComponentFactory, get_factory
from docgen.core.providers import ProviderConfigError
from docgen.interfaces.template import TemplateError
from docgen.strategies.template_engine.models import (
    DOCX_MEDIA_TYPE,
    FieldDescriptor,
    FormDefinition,
    GeneratedDocument,
)

logger = logging.getLogger(__name__)


class DocumentGenerationError(Exception):
    """Exception raised when a document cannot be generated."""

    pass


def build_output_filename(kind: DocumentKind, timestamp_ms: int | None = None) -> str:
    """Return ``<kind>-<unix-ms>.<ext>`` for a generated document."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{kind.id}-{timestamp_ms}.{kind.output_format}"


def missing_required(
    fields: Iterable[FieldDescriptor], values: Mapping[str, Any]
) -> list[str]:
    """Return the names of required fields without a usable value.

    Empty strings, whitespace, empty lists and absent keys count as
    missing. Booleans never do: an unchecked box is an answer.
    """
    missing = []
    for field in fields:
        if not field.required:
            continue

        value = values.get(field.name)
        if isinstance(value, bool):
            continue
        if value is None:
            missing.append(field.name)
        elif isinstance(value, str) and not value.strip():
            missing.append(field.name)
        elif isinstance(value, (list, tuple)) and not value:
            missing.append(field.name)

    return missing


class DocumentService:
    """Loads forms for and generates documents from catalog templates."""

    def __init__(self, factory: ComponentFactory | None = None) -> None:
        """Initialize the service.

        Args:
            factory: Component factory. If None, uses the global factory.
        """
        self._factory = factory or get_factory()

    async def detect_variables(self, kind: DocumentKind | str) -> list[str]:
        """Return the raw variables found in a kind's template.

        Returns an empty list if the template cannot be read.
        """
        kind = self._resolve(kind)

        try:
            template = await self._factory.get_template_source().fetch(kind.template_path)
            return self._factory.get_template_engine().extract_variables(template)
        except (TemplateError, ProviderConfigError) as e:
            logger.error(f"Variable detection failed for {kind.id}: {e}")
            return []

    async def load_form(self, kind: DocumentKind | str) -> FormDefinition:
        """Build the form for a document kind.

        Inferred fields are all optional. Falls back to the kind's
        predefined fields, with their required markers, when the template
        cannot be fetched or read.
        """
        kind = self._resolve(kind)
        logger.info(f"Loading form for {kind.id}")

        try:
            template = await self._factory.get_template_source().fetch(kind.template_path)
            variables = self._factory.get_template_engine().extract_variables(template)
            fields = self._factory.get_field_inferencer().infer_fields(variables)
        except (TemplateError, ProviderConfigError) as e:
            logger.warning(
                f"Could not read template for {kind.id}, using fallback fields: {e}"
            )
            return FormDefinition(
                kind=kind.id,
                fields=list(kind.fallback_fields),
                from_fallback=True,
            )

        logger.info(f"Form for {kind.id}: {len(fields)} fields from {len(variables)} variables")
        return FormDefinition(kind=kind.id, fields=fields, variables=variables)

    async def generate(
        self,
        kind: DocumentKind | str,
        values: Mapping[str, Any],
        timestamp_ms: int | None = None,
    ) -> GeneratedDocument:
        """Render a document from submitted form values.

        Raises:
            DocumentGenerationError: If the template cannot be fetched,
                read or rendered, or the provider table cannot be loaded.
                No partial output is produced.
        """
        kind = self._resolve(kind)
        logger.info(f"Generating {kind.id} with {len(values)} values")

        try:
            engine = self._factory.get_template_engine()
            template = await self._factory.get_template_source().fetch(kind.template_path)
            content = engine.render(template, values)
            unresolved = engine.find_unresolved(content)
        except (TemplateError, ProviderConfigError) as e:
            logger.error(f"Document generation failed for {kind.id}: {e}", exc_info=True)
            raise DocumentGenerationError(
                f"Impossible de générer le document {kind.title}"
            ) from e

        filename = build_output_filename(kind, timestamp_ms)
        logger.info(f"Generated {filename}: {len(content)} bytes")
        return GeneratedDocument(
            filename=filename,
            content=content,
            media_type=DOCX_MEDIA_TYPE,
            unresolved=unresolved,
        )

    def preview(self, document: GeneratedDocument) -> list[str]:
        """Return the paragraph texts of a generated document.

        Returns an empty list if the document cannot be opened.
        """
        try:
            return self._factory.get_template_engine().document_text(document.content)
        except (TemplateError, ProviderConfigError) as e:
            logger.warning(f"Preview unavailable for {document.filename}: {e}")
            return []

    @staticmethod
    def _resolve(kind: DocumentKind | str) -> DocumentKind:
        if isinstance(kind, DocumentKind):
            return kind
        return get_document_kind(kind)
