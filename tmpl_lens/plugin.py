"""Plugin wiring the template-aware service into a host language service.

The host process owns the plugin lifecycle: it creates the plugin with
`create_plugin()`, calls `initialize()` with its settings, then asks for
a composite service with `decorate()`.
"""

import logging
from typing import Any, Dict, Optional

from .config import TemplateServiceConfig
from .decorator import ComposedLanguageService, LanguageServiceDecorator, SupportedFixRegistry
from .documents import DocumentStore
from .service.base import TemplateLanguageService
from .templates import TaggedTemplateFinder, TemplateLocator
from .trace import trace

logger = logging.getLogger(__name__)


class TemplateServicePlugin:
    """Builds composite language services for embedded templates.

    One plugin holds one document store and one template locator; every
    composite service it produces shares them.
    """

    def __init__(self):
        self._initialized = False
        self._config = TemplateServiceConfig()
        self._documents = DocumentStore()
        self._locator: Optional[TemplateLocator] = None
        self._fix_registry: Optional[SupportedFixRegistry] = None

    @property
    def name(self) -> str:
        return "tmpl_lens"

    @property
    def config(self) -> TemplateServiceConfig:
        return self._config

    @property
    def documents(self) -> DocumentStore:
        return self._documents

    @property
    def locator(self) -> Optional[TemplateLocator]:
        return self._locator

    @property
    def fix_registry(self) -> Optional[SupportedFixRegistry]:
        """Fix registry of the most recent decorate() call, if one was built."""
        return self._fix_registry

    def initialize(self, config: Optional[Dict[str, Any]] = None) -> None:
        """Initialize the plugin.

        Args:
            config: Optional settings, see TemplateServiceConfig for keys.
        """
        self._config = TemplateServiceConfig.from_dict(config or {})
        self._locator = TemplateLocator(
            self._documents,
            finder=TaggedTemplateFinder(self._config.tags),
            cache=self._config.cache_templates,
        )
        self._initialized = True
        logger.info("Template service initialized with tags: %s", ", ".join(self._config.tags))
        trace("Plugin", f"initialized: {self._config.to_dict()}")

    def shutdown(self) -> None:
        """Drop cached templates and forget open documents."""
        if self._locator is not None:
            self._locator.invalidate()
        for name in self._documents.names():
            self._documents.close(name)
        self._locator = None
        self._fix_registry = None
        self._initialized = False
        trace("Plugin", "shutdown")

    def decorate(self, host: Any, template_service: TemplateLanguageService) -> ComposedLanguageService:
        """Compose `host` with `template_service`.

        Raises:
            RuntimeError: If the plugin has not been initialized.
        """
        if not self._initialized or self._locator is None:
            raise RuntimeError("Template service plugin is not initialized")

        decorator = LanguageServiceDecorator(
            host,
            template_service,
            self._locator,
            trace_dispatch=self._config.trace_dispatch,
        )
        self._fix_registry = decorator.fix_registry
        return decorator.decorate()


def create_plugin() -> TemplateServicePlugin:
    """Factory function for plugin discovery."""
    return TemplateServicePlugin()
