"""Unit tests for the document service, catalog and component factory."""

import asyncio
import json
import re

import pytest

from docgen.core.catalog import (
    DOCUMENT_KINDS,
    MENTIONS_LEGALES,
    POLITIQUE_CONFIDENTIALITE,
    get_document_kind,
)
from docgen.core.config import Settings
from docgen.core.factory import ComponentFactory
from docgen.core.providers import ProviderConfigError, ProviderRegistry
from docgen.interfaces.template import PackagingError
from docgen.services.document_service import (
    DocumentGenerationError,
    DocumentService,
    build_output_filename,
    missing_required,
)
from docgen.strategies.template_engine.models import (
    DOCX_MEDIA_TYPE,
    FieldDescriptor,
    FieldKind,
    GeneratedDocument,
)
from docgen.strategies.template_engine.sources import (
    HttpTemplateSource,
    LocalTemplateSource,
)


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a temporary template directory."""
    templates = tmp_path / "templates"
    templates.mkdir()
    return Settings(templates_dir=templates, log_dir=tmp_path / "logs")


@pytest.fixture
def factory(settings):
    """A factory bound to the temporary settings."""
    return ComponentFactory(settings)


@pytest.fixture
def service(factory):
    """A document service bound to the temporary factory."""
    return DocumentService(factory)


# =============================================================================
# Catalog Tests
# =============================================================================


class TestCatalog:
    """Test suite for the document catalog."""

    def test_known_kinds(self):
        """Test that both legal documents are registered."""
        assert list(DOCUMENT_KINDS) == ["mentions-legales", "politique-confidentialite"]
        assert get_document_kind("mentions-legales") is MENTIONS_LEGALES

    def test_unknown_kind(self):
        """Test that unknown ids raise KeyError."""
        with pytest.raises(KeyError, match="Unknown document kind"):
            get_document_kind("cgv")

    def test_fallback_required_markers(self):
        """Test which predefined fields the fallback forms mark as required."""
        required = {
            kind_id: [f.name for f in kind.fallback_fields if f.required]
            for kind_id, kind in DOCUMENT_KINDS.items()
        }

        assert required == {
            "mentions-legales": [
                "nomSociete",
                "adresse",
                "codePostal",
                "ville",
                "telephone",
                "email",
                "siret",
                "dirigeant",
            ],
            "politique-confidentialite": ["nomSociete", "adresse", "email"],
        }


# =============================================================================
# Helper Tests
# =============================================================================


class TestHelpers:
    """Test suite for service helper functions."""

    def test_build_output_filename(self):
        """Test the <kind>-<unix-ms>.<ext> filename convention."""
        assert (
            build_output_filename(MENTIONS_LEGALES, 1700000000123)
            == "mentions-legales-1700000000123.docx"
        )

    def test_build_output_filename_uses_current_time(self):
        """Test that a timestamp is generated when none is given."""
        filename = build_output_filename(POLITIQUE_CONFIDENTIALITE)

        assert re.fullmatch(r"politique-confidentialite-\d{13}\.docx", filename)

    def test_missing_required(self):
        """Test detection of empty required values."""
        fields = [
            FieldDescriptor(name="nom", label="Nom", required=True),
            FieldDescriptor(name="adresse", label="Adresse", required=True),
            FieldDescriptor(name="tags", label="Tags", required=True),
            FieldDescriptor(name="absent", label="Absent", required=True),
            FieldDescriptor(
                name="accepte", label="Accepte", kind=FieldKind.CHECKBOX, required=True
            ),
            FieldDescriptor(name="optionnel", label="Optionnel"),
        ]
        values = {"nom": "ACME", "adresse": "   ", "tags": [], "accepte": False}

        assert missing_required(fields, values) == ["adresse", "tags", "absent"]


# =============================================================================
# Factory Tests
# =============================================================================


class TestComponentFactory:
    """Test suite for ComponentFactory."""

    def test_components_are_cached(self, factory):
        """Test that repeated calls return the same instances."""
        assert factory.get_template_engine() is factory.get_template_engine()
        assert factory.get_field_inferencer() is factory.get_field_inferencer()
        assert factory.get_provider_registry() is factory.get_provider_registry()

    def test_clear_cache(self, factory):
        """Test that clearing the cache creates new instances."""
        engine = factory.get_template_engine()
        factory.clear_cache()

        assert factory.get_template_engine() is not engine

    def test_local_source_by_default(self, factory):
        """Test that the filesystem source is used without a base URL."""
        assert isinstance(factory.get_template_source(), LocalTemplateSource)

    def test_http_source_when_base_url_set(self, tmp_path):
        """Test that a base URL selects the HTTP source."""
        settings = Settings(
            templates_dir=tmp_path,
            template_base_url="https://static.example.com/",
        )

        source = ComponentFactory(settings).get_template_source()

        assert isinstance(source, HttpTemplateSource)
        assert source.base_url == "https://static.example.com"

    def test_http_source_requires_base_url(self, factory):
        """Test that requesting the HTTP source without a URL fails."""
        with pytest.raises(ValueError, match="TEMPLATE_BASE_URL"):
            factory.get_template_source("http")

    def test_unknown_source_type(self, factory):
        """Test that unknown source types are rejected."""
        with pytest.raises(ValueError, match="Unknown template source type"):
            factory.get_template_source("ftp")

    def test_providers_file(self, tmp_path):
        """Test that a configured provider file replaces the built-in table."""
        providers = tmp_path / "providers.json"
        providers.write_text(
            json.dumps({"o2switch": {"name": "o2switch", "address": "Clermont-Ferrand"}}),
            encoding="utf-8",
        )
        settings = Settings(templates_dir=tmp_path, providers_file=providers)

        registry = ComponentFactory(settings).get_provider_registry()

        assert isinstance(registry, ProviderRegistry)
        assert registry.list_display_names() == ["o2switch"]

    def test_invalid_providers_file(self, tmp_path):
        """Test that an unreadable provider file raises ProviderConfigError."""
        broken = tmp_path / "providers.json"
        broken.write_text("{not json", encoding="utf-8")

        for providers_file in (broken, tmp_path / "missing.json"):
            factory = ComponentFactory(
                Settings(templates_dir=tmp_path, providers_file=providers_file)
            )
            with pytest.raises(ProviderConfigError, match="DOCGEN_PROVIDERS_FILE"):
                factory.get_provider_registry()


# =============================================================================
# Service Tests
# =============================================================================


class TestDocumentService:
    """Test suite for DocumentService."""

    def test_load_form_infers_fields(self, service, settings, make_docx):
        """Test form inference leaves every inferred field optional."""
        (settings.templates_dir / "mentions_legale.docx").write_bytes(
            make_docx(
                [
                    "{nomSociete} - {formeJuridique}",
                    "Siège : {adresse}",
                    "Hébergeur : {hebergeur}, {adresseHebergeur}",
                    "Capital : {capital}",
                ]
            )
        )

        form = asyncio.run(service.load_form("mentions-legales"))

        assert form.from_fallback is False
        assert form.kind == "mentions-legales"
        assert form.variables == [
            "nomSociete",
            "formeJuridique",
            "adresse",
            "hebergeur",
            "adresseHebergeur",
            "capital",
        ]
        by_name = {f.name: f for f in form.fields}
        assert list(by_name) == [
            "nomSociete",
            "formeJuridique",
            "adresse",
            "hebergeur",
            "capital",
        ]
        assert not any(f.required for f in form.fields)
        assert by_name["adresse"].kind == FieldKind.TEXTAREA
        assert by_name["formeJuridique"].kind == FieldKind.SELECT
        assert by_name["hebergeur"].options[0] == "OVH"

    def test_load_form_falls_back_when_template_missing(self, service):
        """Test the predefined fields are used when the template is absent."""
        form = asyncio.run(service.load_form("politique-confidentialite"))

        assert form.from_fallback is True
        assert form.fields == list(POLITIQUE_CONFIDENTIALITE.fallback_fields)
        assert form.variables == []

    def test_load_form_falls_back_on_invalid_template(self, service, settings):
        """Test the predefined fields are used when the template is corrupt."""
        (settings.templates_dir / "mentions_legale.docx").write_bytes(b"corrupt")

        form = asyncio.run(service.load_form(MENTIONS_LEGALES))

        assert form.from_fallback is True
        assert form.fields[0].name == "nomSociete"

    def test_detect_variables(self, service, settings, make_docx):
        """Test raw variable detection for the overview."""
        (settings.templates_dir / "mentions_legale.docx").write_bytes(
            make_docx(["{siret} {adresseHebergeur}"])
        )

        variables = asyncio.run(service.detect_variables("mentions-legales"))

        assert variables == ["siret", "adresseHebergeur"]

    def test_detect_variables_failure_is_empty(self, service):
        """Test that detection failures produce an empty list."""
        assert asyncio.run(service.detect_variables("mentions-legales")) == []

    def test_generate(self, service, settings, make_docx, read_body):
        """Test rendering a document from form values."""
        (settings.templates_dir / "politique_de_confidentialite.docx").write_bytes(
            make_docx(["{nomSociete} utilise des cookies : {cookies}", "{hebergeur}, {adresseHebergeur}"])
        )

        document = asyncio.run(
            service.generate(
                "politique-confidentialite",
                {"nomSociete": "ACME", "cookies": True, "hebergeur": "IONOS"},
                timestamp_ms=1700000000000,
            )
        )

        assert document.filename == "politique-confidentialite-1700000000000.docx"
        assert document.media_type == DOCX_MEDIA_TYPE
        body = read_body(document.content)
        assert "ACME utilise des cookies : Oui" in body
        assert "IONOS, Montabaur, Allemagne" in body

    def test_generate_failure(self, service):
        """Test that a missing template surfaces as DocumentGenerationError."""
        with pytest.raises(DocumentGenerationError) as exc_info:
            asyncio.run(service.generate("mentions-legales", {"nomSociete": "ACME"}))

        assert exc_info.value.__cause__ is not None

    def test_generate_reports_unresolved(self, service, settings, make_docx):
        """Test that placeholders left without a value are reported."""
        (settings.templates_dir / "mentions_legale.docx").write_bytes(
            make_docx(["{nomSociete} - {siret} - {ville}"])
        )

        document = asyncio.run(
            service.generate("mentions-legales", {"nomSociete": "ACME"})
        )

        assert document.unresolved == ["siret", "ville"]

    def test_generate_packaging_failure(self, service, settings, make_docx):
        """Test that a failed re-encoding surfaces as DocumentGenerationError."""
        (settings.templates_dir / "mentions_legale.docx").write_bytes(
            make_docx(["{nomSociete}"])
        )

        with pytest.raises(DocumentGenerationError) as exc_info:
            asyncio.run(service.generate("mentions-legales", {"nomSociete": "\ud800"}))

        assert isinstance(exc_info.value.__cause__, PackagingError)

    def test_preview(self, service, settings, make_word_docx):
        """Test the paragraph preview of a generated document."""
        (settings.templates_dir / "mentions_legale.docx").write_bytes(
            make_word_docx(["Éditeur : {nomSociete}", "Ville : {ville}"])
        )
        document = asyncio.run(
            service.generate("mentions-legales", {"nomSociete": "ACME", "ville": "Lille"})
        )

        assert service.preview(document) == ["Éditeur : ACME", "Ville : Lille"]

    def test_preview_invalid_document(self, service):
        """Test that an unreadable document gives an empty preview."""
        document = GeneratedDocument(filename="broken.docx", content=b"not a docx")

        assert service.preview(document) == []


class TestDocumentServiceProviderConfig:
    """Test suite for DocumentService with a broken provider file."""

    @pytest.fixture
    def service(self, settings, make_docx):
        """A service whose provider file is not valid JSON."""
        broken = settings.templates_dir.parent / "providers.json"
        broken.write_text("{not json", encoding="utf-8")
        (settings.templates_dir / "mentions_legale.docx").write_bytes(
            make_docx(["{nomSociete} {hebergeur}"])
        )
        settings = settings.model_copy(update={"providers_file": broken})
        return DocumentService(ComponentFactory(settings))

    def test_load_form_falls_back(self, service):
        """Test that the predefined fields are used."""
        form = asyncio.run(service.load_form("mentions-legales"))

        assert form.from_fallback is True
        assert form.fields == list(MENTIONS_LEGALES.fallback_fields)

    def test_detect_variables_is_empty(self, service):
        """Test that detection reports nothing."""
        assert asyncio.run(service.detect_variables("mentions-legales")) == []

    def test_generate_failure(self, service):
        """Test that generation fails with DocumentGenerationError."""
        with pytest.raises(DocumentGenerationError) as exc_info:
            asyncio.run(service.generate("mentions-legales", {"nomSociete": "ACME"}))

        assert isinstance(exc_info.value.__cause__, ProviderConfigError)
