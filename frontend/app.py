"""Streamlit frontend for the legal document generator.

Lets the user pick a document kind, fills in a form inferred from the
template's placeholders and offers the rendered .docx as a download.

Run with: streamlit run frontend/app.py
"""

import asyncio
import logging
from typing import Any

import streamlit as st

from docgen.core.catalog import DOCUMENT_KINDS, DocumentKind
from docgen.core.logging_config import setup_logging
from docgen.services.document_service import (
    DocumentGenerationError,
    DocumentService,
    missing_required,
)
from docgen.strategies.template_engine.models import (
    FieldDescriptor,
    FieldKind,
    FormDefinition,
)

# Page config
st.set_page_config(
    page_title="Générateur de Documents",
    page_icon="📄",
    layout="centered",
    initial_sidebar_state="expanded",
)

setup_logging()
logger = logging.getLogger(__name__)


# =============================================================================
# Service Access
# =============================================================================


@st.cache_resource
def get_service() -> DocumentService:
    """Create the document service once per Streamlit process."""
    return DocumentService()


@st.cache_data(show_spinner="Analyse des templates en cours...")
def load_form(kind_id: str) -> FormDefinition:
    """Load and cache the form definition for a document kind."""
    return asyncio.run(get_service().load_form(kind_id))


@st.cache_data(show_spinner=False)
def detect_variables(kind_id: str) -> list[str]:
    """Load and cache the raw variables detected in a template."""
    return asyncio.run(get_service().detect_variables(kind_id))


# =============================================================================
# UI Components
# =============================================================================


def render_sidebar() -> DocumentKind:
    """Render the sidebar with the document picker and detected fields.

    Returns:
        The selected document kind.
    """
    with st.sidebar:
        st.title("📄 Générateur")

        st.divider()

        kind_id = st.radio(
            "Document",
            options=list(DOCUMENT_KINDS),
            format_func=lambda k: DOCUMENT_KINDS[k].title,
        )

        st.divider()

        st.subheader("Champs détectés dans votre template")
        variables = detect_variables(kind_id)
        if variables:
            st.markdown(" ".join(f"`{v}`" for v in variables))
        else:
            st.caption("Aucun champ détecté.")

    return DOCUMENT_KINDS[kind_id]


def render_field(field: FieldDescriptor, kind_id: str) -> Any:
    """Render one input widget and return its value.

    Args:
        field: The field descriptor to render.
        kind_id: Document kind, used to keep widget keys distinct.

    Returns:
        The widget value (str, list[str] or bool).
    """
    key = f"{kind_id}_{field.name}"
    label = f"{field.label} *" if field.required else field.label
    placeholder = field.placeholder or f"Saisissez {field.label.lower()}"

    match field.kind:
        case FieldKind.TEXTAREA:
            return st.text_area(label, key=key, placeholder=placeholder, height=100)
        case FieldKind.SELECT:
            options = field.options or []
            choice = st.selectbox(
                label,
                options=options,
                index=None,
                key=key,
                placeholder=field.placeholder or "Sélectionnez une option",
            )
            return choice or ""
        case FieldKind.CHECKBOX:
            return st.checkbox(field.label, key=key)
        case FieldKind.DATE:
            value = st.date_input(label, value=None, key=key, format="DD/MM/YYYY")
            return value.strftime("%d/%m/%Y") if value else ""
        case _:
            return st.text_input(label, key=key, placeholder=placeholder)


def render_form(kind: DocumentKind, form: FormDefinition) -> None:
    """Render the generation form and handle submission.

    Args:
        kind: The selected document kind.
        form: The inferred (or fallback) form definition.
    """
    st.title(f"Générateur de {kind.title}")
    st.write(kind.description)

    if form.from_fallback:
        st.warning(
            "⚠️ Le template n'a pas pu être analysé, formulaire par défaut affiché."
        )

    with st.form(key=f"form_{kind.id}"):
        values = {field.name: render_field(field, kind.id) for field in form.fields}
        submitted = st.form_submit_button(
            "📥 Générer le Document DOCX", type="primary", use_container_width=True
        )

    if not submitted:
        return

    missing = missing_required(form.fields, values)
    if missing:
        labels = [f.label for f in form.fields if f.name in missing]
        st.error(f"Ce champ est requis : {', '.join(labels)}")
        return

    try:
        with st.spinner("Génération en cours..."):
            document = asyncio.run(get_service().generate(kind, values))
    except DocumentGenerationError as e:
        logger.error(f"Generation failed: {e}")
        st.error("Erreur lors de la génération du document")
        return

    st.success("✅ Document DOCX généré avec succès !")
    if document.unresolved:
        st.warning(
            "Champs non remplis dans le document : "
            + ", ".join(f"`{name}`" for name in document.unresolved)
        )

    st.download_button(
        label="💾 Télécharger",
        data=document.content,
        file_name=document.filename,
        mime=document.media_type,
        type="primary",
    )

    with st.expander("👁️ Aperçu du document"):
        paragraphs = get_service().preview(document)
        if paragraphs:
            for text in paragraphs:
                st.write(text)
        else:
            st.caption("Aperçu indisponible.")


# =============================================================================
# Main App
# =============================================================================


def main() -> None:
    """Main application entry point."""
    kind = render_sidebar()
    form = load_form(kind.id)
    render_form(kind, form)


if __name__ == "__main__":
    main()
