"""Catalog of the document kinds the generator can produce.

Each kind names its template and the fields to show when the template cannot
be read. Only those fallback fields carry required markers.
"""

from pydantic import BaseModel, ConfigDict, Field

from docgen.strategies.template_engine.models import FieldDescriptor, FieldKind


class DocumentKind(BaseModel):
    """A generatable legal document."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Slug used in output filenames")
    title: str
    description: str
    template_path: str = Field(description="Template reference passed to the source")
    fallback_fields: tuple[FieldDescriptor, ...] = Field(default=())
    output_format: str = Field(default="docx")


MENTIONS_LEGALES = DocumentKind(
    id="mentions-legales",
    title="Mentions Légales",
    description=(
        "Remplissez les informations ci-dessous pour générer vos mentions "
        "légales personnalisées."
    ),
    template_path="mentions_legale.docx",
    fallback_fields=(
        FieldDescriptor(name="nomSociete", label="Nom de la société", required=True),
        FieldDescriptor(
            name="adresse", label="Adresse", kind=FieldKind.TEXTAREA, required=True
        ),
        FieldDescriptor(name="codePostal", label="Code postal", required=True),
        FieldDescriptor(name="ville", label="Ville", required=True),
        FieldDescriptor(name="telephone", label="Téléphone", required=True),
        FieldDescriptor(
            name="email", label="Email", kind=FieldKind.EMAIL, required=True
        ),
        FieldDescriptor(name="siteWeb", label="Site web"),
        FieldDescriptor(name="siret", label="SIRET", required=True),
        FieldDescriptor(name="dirigeant", label="Dirigeant", required=True),
    ),
)

POLITIQUE_CONFIDENTIALITE = DocumentKind(
    id="politique-confidentialite",
    title="Politique de Confidentialité",
    description=(
        "Remplissez les informations ci-dessous pour générer votre politique "
        "de confidentialité personnalisée."
    ),
    template_path="politique_de_confidentialite.docx",
    fallback_fields=(
        FieldDescriptor(name="nomSociete", label="Nom de la société", required=True),
        FieldDescriptor(
            name="adresse", label="Adresse", kind=FieldKind.TEXTAREA, required=True
        ),
        FieldDescriptor(
            name="email", label="Email de contact", kind=FieldKind.EMAIL, required=True
        ),
        FieldDescriptor(name="siteWeb", label="Site web"),
        FieldDescriptor(
            name="collecteDonnees",
            label="Types de données collectées",
            kind=FieldKind.TEXTAREA,
        ),
        FieldDescriptor(
            name="finaliteDonnees",
            label="Finalité de la collecte",
            kind=FieldKind.TEXTAREA,
        ),
        FieldDescriptor(name="dureeConservation", label="Durée de conservation"),
        FieldDescriptor(
            name="destinataires",
            label="Destinataires des données",
            kind=FieldKind.TEXTAREA,
        ),
        FieldDescriptor(
            name="droitsUtilisateur",
            label="Droits des utilisateurs",
            kind=FieldKind.TEXTAREA,
        ),
        FieldDescriptor(
            name="cookies", label="Utilisation de cookies", kind=FieldKind.CHECKBOX
        ),
    ),
)

DOCUMENT_KINDS: dict[str, DocumentKind] = {
    kind.id: kind for kind in (MENTIONS_LEGALES, POLITIQUE_CONFIDENTIALITE)
}


def get_document_kind(kind_id: str) -> DocumentKind:
    """Look up a document kind by id.

    Raises:
        KeyError: If the kind is unknown.
    """
    try:
        return DOCUMENT_KINDS[kind_id]
    except KeyError:
        raise KeyError(
            f"Unknown document kind: {kind_id}. "
            f"Valid options: {', '.join(DOCUMENT_KINDS)}"
        ) from None
