"""Hosting provider registry.

A read-only table of hosting providers ("hébergeurs") used to expand a
selected provider name into its registered details at render time.
"""

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)


class ProviderConfigError(ValueError):
    """Exception raised when the configured provider table cannot be loaded."""

    pass


class ProviderRecord(BaseModel):
    """A registered hosting provider."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(description="Internal registry key")
    name: str = Field(description="Display name")
    address: str = Field(default="", description="Postal address")
    site: str = Field(default="", description="Website URL")


DEFAULT_PROVIDERS: dict[str, dict[str, str]] = {
    "ovh": {
        "name": "OVH",
        "address": "2 rue Kellermann, 59100 Roubaix, France",
        "site": "https://www.ovh.com",
    },
    "planet-hoster": {
        "name": "PlanetHoster",
        "address": "4416 Louis B. Mayer, Laval, QC H7P 0G1, Canada",
        "site": "https://www.planethoster.com",
    },
    "ionos": {
        "name": "IONOS",
        "address": "Montabaur, Allemagne",
        "site": "https://www.ionos.fr",
    },
    "hostinger": {
        "name": "Hostinger",
        "address": "61 Lordou Vironos Street, 6023 Larnaca, Chypre",
        "site": "https://www.hostinger.fr",
    },
    "autre": {
        "name": "Autre",
        "address": "",
        "site": "",
    },
}


class ProviderRegistry:
    """Immutable lookup table of hosting providers.

    Records keep their declaration order, which is also the order used to
    populate the provider selection field.
    """

    def __init__(self, records: Iterable[ProviderRecord]) -> None:
        """Initialize the registry.

        Args:
            records: Provider records in declaration order.

        Raises:
            ValueError: If two records share the same key.
        """
        by_key: dict[str, ProviderRecord] = {}
        for record in records:
            if record.key in by_key:
                raise ValueError(f"Duplicate provider key: {record.key}")
            by_key[record.key] = record

        self._records = MappingProxyType(by_key)
        logger.debug(f"ProviderRegistry initialized: {len(by_key)} providers")

    @classmethod
    def from_mapping(cls, table: dict[str, dict[str, str]]) -> "ProviderRegistry":
        """Build a registry from a ``{key: {name, address, site}}`` table."""
        try:
            return cls(
                ProviderRecord(key=key, **entry) for key, entry in table.items()
            )
        except (TypeError, ValidationError) as e:
            raise ValueError(f"Invalid provider table: {e}") from e

    @classmethod
    def from_json(cls, path: Path | str) -> "ProviderRegistry":
        """Load a registry from a JSON file.

        Args:
            path: Path to a JSON object of ``{key: {name, address, site}}``.

        Returns:
            The loaded registry.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            ValueError: If the file is not a valid provider table.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Provider file not found: {path}")

        try:
            table = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Provider file is not valid JSON: {path}: {e}") from e

        if not isinstance(table, dict):
            raise ValueError(f"Provider file must contain a JSON object: {path}")

        logger.info(f"Loading {len(table)} providers from {path}")
        return cls.from_mapping(table)

    def lookup_by_name(self, display_name: str) -> ProviderRecord | None:
        """Find a provider by its display name.

        Matching is exact and case-sensitive against ``name``, not the key.
        Returns None when no provider matches.
        """
        for record in self._records.values():
            if record.name == display_name:
                return record
        return None

    def list_display_names(self) -> list[str]:
        """Return provider display names in declaration order."""
        return [record.name for record in self._records.values()]


def default_registry() -> ProviderRegistry:
    """Build the registry from the built-in provider table."""
    return ProviderRegistry.from_mapping(DEFAULT_PROVIDERS)
