"""Template engine domain models.

Pydantic models shared by field inference, the template engine and the
document service.
"""

import enum
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

FormValue = str | list[str] | bool
FormValues = Mapping[str, FormValue]

DOCX_MEDIA_TYPE = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)


class FieldKind(str, enum.Enum):
    """Input kind used to render a form field."""

    TEXT = "text"
    EMAIL = "email"
    TEXTAREA = "textarea"
    SELECT = "select"
    CHECKBOX = "checkbox"
    DATE = "date"


class FieldDescriptor(BaseModel):
    """Rendering metadata inferred for one template placeholder."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Raw variable name as found in the template")
    label: str = Field(description="Human readable label")
    kind: FieldKind = Field(default=FieldKind.TEXT)
    required: bool = Field(default=False)
    placeholder: str | None = Field(default=None)
    options: list[str] | None = Field(
        default=None, description="Choices, only set for select fields"
    )


class FormDefinition(BaseModel):
    """Fields to render for one document kind."""

    kind: str
    fields: list[FieldDescriptor]
    variables: list[str] = Field(default_factory=list)
    from_fallback: bool = Field(
        default=False, description="True when the template could not be read"
    )


class GeneratedDocument(BaseModel):
    """A rendered document ready to be offered as a download."""

    filename: str
    content: bytes
    media_type: str = Field(default=DOCX_MEDIA_TYPE)
    unresolved: list[str] = Field(
        default_factory=list,
        description="Placeholders left in the output because no value was given",
    )
