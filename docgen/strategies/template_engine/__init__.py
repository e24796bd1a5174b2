"""Template engine strategies.

Implements placeholder extraction, field inference and value substitution
for Word documents.
"""

from docgen.strategies.template_engine.engine import DocxTemplateEngine
from docgen.strategies.template_engine.fields import (
    FieldInferencer,
    format_field_label,
    guess_field_type,
)
from docgen.strategies.template_engine.models import (
    FieldDescriptor,
    FieldKind,
)
from docgen.strategies.template_engine.sources import (
    HttpTemplateSource,
    LocalTemplateSource,
)

__all__ = [
    "DocxTemplateEngine",
    "FieldInferencer",
    "FieldDescriptor",
    "FieldKind",
    "HttpTemplateSource",
    "LocalTemplateSource",
    "format_field_label",
    "guess_field_type",
]
