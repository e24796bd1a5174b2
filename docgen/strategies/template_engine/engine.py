"""DOCX template engine strategy.

Extracts ``{name}`` placeholders from the document body of a Word package
and substitutes user values back into it by plain textual replacement,
leaving every other package member untouched.
"""

import io
import logging
import re
import zipfile
from collections.abc import Mapping
from typing import Any

from docgen.core.providers import ProviderRegistry
from docgen.interfaces.template import (
    ArchiveError,
    BaseTemplateEngine,
    MissingContentError,
    PackagingError,
)
from docgen.strategies.template_engine.fields import (
    is_provider_field,
    provider_attribute,
)

logger = logging.getLogger(__name__)


DOCUMENT_MEMBER = "word/document.xml"
PLACEHOLDER_PATTERN = re.compile(r"\{([^}]+)\}")

BOOLEAN_TOKENS = {True: "Oui", False: "Non"}
LIST_SEPARATOR = ", "


class DocxTemplateEngine(BaseTemplateEngine):
    """Flat placeholder substitution over ``word/document.xml``.

    Values are inserted verbatim, without XML escaping. Placeholders with no
    matching value are left in the output as literal text.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        encoding: str = "utf-8",
    ) -> None:
        """Initialize the engine.

        Args:
            registry: Provider registry used to expand provider selections.
            encoding: Character encoding of the document body.
        """
        self._registry = registry
        self._encoding = encoding

    def extract_variables(self, template: bytes) -> list[str]:
        """Extract unique placeholder names in order of first appearance."""
        markup = self._read_markup(template)
        variables = list(dict.fromkeys(PLACEHOLDER_PATTERN.findall(markup)))
        logger.info(f"Extracted {len(variables)} variables from template")
        return variables

    def render(self, template: bytes, values: Mapping[str, Any]) -> bytes:
        """Substitute values into the template and re-package it."""
        markup = self._read_markup(template)

        effective = self._expand_providers(markup, values)

        replacement_count = 0
        for key, value in effective.items():
            replacement = self._format_value(value)
            if replacement is None:
                logger.debug(
                    f"Skipping {key}: unsupported value type {type(value).__name__}"
                )
                continue

            token = "{" + key + "}"
            occurrences = markup.count(token)
            if occurrences:
                markup = markup.replace(token, replacement)
                replacement_count += occurrences

        unresolved = self._unresolved(markup)
        if unresolved:
            logger.warning(
                f"{len(unresolved)} placeholders left unresolved: {', '.join(unresolved)}"
            )

        logger.info(f"Rendered template: {replacement_count} replacements")
        return self._repackage(template, markup)

    def find_unresolved(self, document: bytes) -> list[str]:
        """Return placeholder names still present in a document."""
        return self._unresolved(self._read_markup(document))

    def document_text(self, document: bytes) -> list[str]:
        """Return the non-empty paragraph texts of a document.

        Raises:
            ArchiveError: If python-docx cannot open the package.
        """
        from docx import Document
        from docx.opc.exceptions import PackageNotFoundError

        try:
            doc = Document(io.BytesIO(document))
        except (PackageNotFoundError, zipfile.BadZipFile, KeyError) as e:
            raise ArchiveError(f"Not a valid DOCX package: {e}") from e

        return [p.text for p in doc.paragraphs if p.text.strip()]

    def _read_markup(self, template: bytes) -> str:
        try:
            with zipfile.ZipFile(io.BytesIO(template)) as zf:
                try:
                    raw = zf.read(DOCUMENT_MEMBER)
                except KeyError as e:
                    raise MissingContentError(
                        f"Template has no {DOCUMENT_MEMBER} member"
                    ) from e
        except zipfile.BadZipFile as e:
            raise ArchiveError(f"Template is not a valid DOCX archive: {e}") from e

        try:
            return raw.decode(self._encoding)
        except UnicodeDecodeError as e:
            raise MissingContentError(
                f"Cannot decode {DOCUMENT_MEMBER} as {self._encoding}: {e}"
            ) from e

    def _expand_providers(
        self, markup: str, values: Mapping[str, Any]
    ) -> dict[str, Any]:
        """Add values for provider-derived placeholders.

        For each provider selection in ``values`` that names a registered
        provider, every derived placeholder in the markup that the caller
        did not fill explicitly receives the provider's attribute. The
        caller's mapping is not modified.
        """
        effective = dict(values)

        selections = [
            value
            for key, value in values.items()
            if is_provider_field(key) and isinstance(value, str)
        ]
        if not selections:
            return effective

        derived = [
            name
            for name in dict.fromkeys(PLACEHOLDER_PATTERN.findall(markup))
            if provider_attribute(name) is not None
        ]

        for display_name in selections:
            record = self._registry.lookup_by_name(display_name)
            if record is None:
                logger.warning(f"Unknown provider selected: {display_name!r}")
                continue

            for name in derived:
                if name not in effective:
                    effective[name] = getattr(record, provider_attribute(name))
                    logger.debug(f"Expanded {name} from provider {record.key}")

        return effective

    @staticmethod
    def _format_value(value: Any) -> str | None:
        if isinstance(value, bool):
            return BOOLEAN_TOKENS[value]
        if isinstance(value, str):
            return value
        if isinstance(value, (list, tuple)):
            return LIST_SEPARATOR.join(str(item) for item in value)
        return None

    @staticmethod
    def _unresolved(markup: str) -> list[str]:
        return list(dict.fromkeys(PLACEHOLDER_PATTERN.findall(markup)))

    def _repackage(self, template: bytes, markup: str) -> bytes:
        try:
            buffer = io.BytesIO()
            with zipfile.ZipFile(io.BytesIO(template)) as zin:
                with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zout:
                    for item in zin.infolist():
                        if item.filename == DOCUMENT_MEMBER:
                            zout.writestr(item, markup.encode(self._encoding))
                        else:
                            zout.writestr(item, zin.read(item.filename))
            return buffer.getvalue()
        except Exception as e:
            logger.error(f"Repackaging failed: {e}", exc_info=True)
            raise PackagingError(f"Could not write rendered document: {e}") from e

    @property
    def supported_extensions(self) -> set[str]:
        """Return supported file extensions."""
        return {".docx"}
