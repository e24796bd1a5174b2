"""Component Factory for strategy instantiation.

The Factory Pattern allows the application to instantiate
different strategy implementations at runtime based on
configuration or environment variables.
"""

import logging

from docgen.core.config import Settings, get_settings
from docgen.core.providers import (
    ProviderConfigError,
    ProviderRegistry,
    default_registry,
)
from docgen.interfaces.template import BaseTemplateEngine, BaseTemplateSource
from docgen.strategies.template_engine.engine import DocxTemplateEngine
from docgen.strategies.template_engine.fields import FieldInferencer
from docgen.strategies.template_engine.sources import (
    HttpTemplateSource,
    LocalTemplateSource,
)

logger = logging.getLogger(__name__)


class ComponentFactory:
    """Factory for creating component instances based on configuration.

    Example:
        ```python
        factory = ComponentFactory(get_settings())

        source = factory.get_template_source()
        engine = factory.get_template_engine()
        inferencer = factory.get_field_inferencer()
        ```
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the factory with optional settings.

        Args:
            settings: Application settings. If None, uses global settings.
        """
        self._settings = settings or get_settings()
        self._registry_cache: ProviderRegistry | None = None
        self._engine_cache: BaseTemplateEngine | None = None
        self._inferencer_cache: FieldInferencer | None = None
        self._source_cache: BaseTemplateSource | None = None

    def get_provider_registry(self) -> ProviderRegistry:
        """Get the provider registry.

        Loads ``providers_file`` when configured, else the built-in table.

        Raises:
            ProviderConfigError: If the configured provider file is missing
                or invalid.
        """
        if self._registry_cache is None:
            providers_file = self._settings.providers_file
            if providers_file is not None:
                logger.info(f"Instantiating provider registry from {providers_file}")
                try:
                    self._registry_cache = ProviderRegistry.from_json(providers_file)
                except (FileNotFoundError, ValueError) as e:
                    logger.error(f"Provider registry could not be loaded: {e}")
                    raise ProviderConfigError(
                        f"Invalid DOCGEN_PROVIDERS_FILE {providers_file}: {e}"
                    ) from e
            else:
                logger.info("Instantiating built-in provider registry")
                self._registry_cache = default_registry()

        return self._registry_cache

    def get_template_engine(self) -> BaseTemplateEngine:
        """Get a template engine instance."""
        if self._engine_cache is None:
            logger.info("Instantiating template engine")
            self._engine_cache = DocxTemplateEngine(
                registry=self.get_provider_registry()
            )

        return self._engine_cache

    def get_field_inferencer(self) -> FieldInferencer:
        """Get a field inferencer instance."""
        if self._inferencer_cache is None:
            logger.info("Instantiating field inferencer")
            self._inferencer_cache = FieldInferencer(
                registry=self.get_provider_registry()
            )

        return self._inferencer_cache

    def get_template_source(self, source_type: str | None = None) -> BaseTemplateSource:
        """Get a template source instance.

        Args:
            source_type: 'local' or 'http'. If None, 'http' is used when
                ``template_base_url`` is configured, else 'local'.

        Returns:
            A BaseTemplateSource implementation instance.

        Raises:
            ValueError: If the source type is unknown or misconfigured.
        """
        if self._source_cache is None or source_type is not None:
            source_type = source_type or (
                "http" if self._settings.template_base_url else "local"
            )

            logger.info(f"Instantiating template source: {source_type}")

            match source_type:
                case "local":
                    self._source_cache = LocalTemplateSource(
                        base_dir=self._settings.templates_dir
                    )
                case "http":
                    if not self._settings.template_base_url:
                        raise ValueError(
                            "DOCGEN_TEMPLATE_BASE_URL is required for the http source"
                        )
                    self._source_cache = HttpTemplateSource(
                        base_url=self._settings.template_base_url,
                        timeout=self._settings.fetch_timeout,
                    )
                case _:
                    raise ValueError(
                        f"Unknown template source type: {source_type}. "
                        f"Valid options: 'local', 'http'"
                    )

        return self._source_cache

    def clear_cache(self) -> None:
        """Clear all cached component instances.

        This forces new instances to be created on next access.
        Useful for testing or when settings change.
        """
        self._registry_cache = None
        self._engine_cache = None
        self._inferencer_cache = None
        self._source_cache = None
        logger.debug("Component factory cache cleared")


# Global factory instance
_factory: ComponentFactory | None = None


def get_factory() -> ComponentFactory:
    """Get or create the global ComponentFactory instance.

    Returns:
        The singleton ComponentFactory instance.
    """
    global _factory
    if _factory is None:
        _factory = ComponentFactory()
    return _factory
