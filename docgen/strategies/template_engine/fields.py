"""Field inference strategy.

Derives a form schema from raw template variable names using naming
conventions, so templates need no separate schema file. Identifiers are
French legal-document vocabulary (``nomSociete``, ``adresseSiege`` ...).
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from docgen.core.providers import ProviderRegistry
from docgen.strategies.template_engine.models import FieldDescriptor, FieldKind

logger = logging.getLogger(__name__)


PROVIDER_TOKEN = "hebergeur"
PROVIDER_FIELD_LABEL = "Hébergeur"
PROVIDER_FIELD_PLACEHOLDER = "Sélectionnez un hébergeur"

LEGAL_FORM_OPTIONS = [
    "SARL",
    "SAS",
    "EURL",
    "Auto-entrepreneur",
    "Association",
    "Autre",
]

# Tokens naming a provider attribute, mapped to the ProviderRecord field.
PROVIDER_ATTRIBUTE_TOKENS: dict[str, str] = {
    "adresse": "address",
    "address": "address",
    "site": "site",
    "nom": "name",
    "name": "name",
}

_SEPARATORS = re.compile(r"[\s_\-.]+")
_CAPITAL = re.compile(r"([A-Z])")


@dataclass(frozen=True)
class KindRule:
    """Assigns ``kind`` to names containing any of ``tokens``."""

    tokens: tuple[str, ...]
    kind: FieldKind

    def matches(self, name: str) -> bool:
        lowered = name.lower()
        return any(token in lowered for token in self.tokens)


# Evaluated in order, first match wins.
KIND_RULES: tuple[KindRule, ...] = (
    KindRule(("email", "mail"), FieldKind.EMAIL),
    KindRule(("adresse", "description", "commentaire"), FieldKind.TEXTAREA),
    KindRule(("date",), FieldKind.DATE),
    KindRule(("accepte", "coche", "oui", "non"), FieldKind.CHECKBOX),
)

SELECT_OVERRIDE_RULE = KindRule(("forme", "type"), FieldKind.SELECT)


def normalize_identifier(name: str) -> str:
    """Lowercase a variable name and strip separators.

    ``adresse_hebergeur``, ``adresseHebergeur`` and ``Adresse-Hebergeur``
    all normalize to ``adressehebergeur``.
    """
    return _SEPARATORS.sub("", name).lower()


def format_field_label(name: str) -> str:
    """Turn a camelCase variable name into a display label.

    Example: ``nomSociete`` -> ``Nom Societe``.
    """
    spaced = _CAPITAL.sub(r" \1", name)
    if spaced:
        spaced = spaced[0].upper() + spaced[1:]
    return spaced.strip()


def guess_field_type(name: str, rules: Iterable[KindRule] = KIND_RULES) -> FieldKind:
    """Pick an input kind from the variable name."""
    for rule in rules:
        if rule.matches(name):
            return rule.kind
    return FieldKind.TEXT


def is_provider_field(name: str) -> bool:
    """Whether ``name`` is the provider selection field itself."""
    return normalize_identifier(name) == PROVIDER_TOKEN


def provider_attribute(name: str) -> str | None:
    """Return the ProviderRecord attribute a derived variable denotes.

    Returns None for names that are not provider-derived, including the
    provider selection field.
    """
    normalized = normalize_identifier(name)
    if PROVIDER_TOKEN not in normalized or normalized == PROVIDER_TOKEN:
        return None

    remainder = normalized.replace(PROVIDER_TOKEN, "", 1)
    for token, attribute in PROVIDER_ATTRIBUTE_TOKENS.items():
        if token in remainder:
            return attribute
    return None


def is_provider_derived(name: str) -> bool:
    """Whether ``name`` is filled automatically from the provider registry."""
    return provider_attribute(name) is not None


class FieldInferencer:
    """Builds FieldDescriptor objects from extracted variable names."""

    def __init__(
        self,
        registry: ProviderRegistry,
        kind_rules: tuple[KindRule, ...] = KIND_RULES,
        legal_form_options: list[str] | None = None,
    ) -> None:
        """Initialize the inferencer.

        Args:
            registry: Provider registry used for the provider select options.
            kind_rules: Ordered kind rules, first match wins.
            legal_form_options: Choices for legal-form select fields.
        """
        self._registry = registry
        self._kind_rules = kind_rules
        self._legal_form_options = list(legal_form_options or LEGAL_FORM_OPTIONS)

    def infer_fields(self, variables: Iterable[str]) -> list[FieldDescriptor]:
        """Infer one descriptor per user-facing variable.

        Args:
            variables: Variable names in order of first appearance.

        Returns:
            Descriptors in the same order, provider-derived names removed.
        """
        fields: list[FieldDescriptor] = []
        seen: set[str] = set()

        for name in variables:
            if name in seen:
                continue
            seen.add(name)

            if is_provider_derived(name):
                logger.debug(f"Suppressing provider-derived variable: {name}")
                continue

            fields.append(self.describe(name))

        logger.info(f"Inferred {len(fields)} fields from {len(seen)} variables")
        return fields

    def describe(self, name: str) -> FieldDescriptor:
        """Build the descriptor for a single variable name."""
        if is_provider_field(name):
            return FieldDescriptor(
                name=name,
                label=PROVIDER_FIELD_LABEL,
                kind=FieldKind.SELECT,
                placeholder=PROVIDER_FIELD_PLACEHOLDER,
                options=self._registry.list_display_names(),
            )

        if SELECT_OVERRIDE_RULE.matches(name):
            return FieldDescriptor(
                name=name,
                label=format_field_label(name),
                kind=FieldKind.SELECT,
                options=list(self._legal_form_options),
            )

        return FieldDescriptor(
            name=name,
            label=format_field_label(name),
            kind=guess_field_type(name, self._kind_rules),
        )
