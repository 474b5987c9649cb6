"""Provider Selector — Chooses and constructs the provider backing all searches.

Selection happens once, at startup, from an explicit ``ProviderConfig``. The
selector never reads the environment itself; ``Settings.provider_config()`` is
the boundary where configuration enters.
"""

from __future__ import annotations

import importlib
import logging

from ragbrowser.models.provider import CREDENTIAL_ENV, ProviderConfig, ProviderDescriptor, ProviderType
from ragbrowser.providers.base.adapter import SearchProvider
from ragbrowser.providers.base.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Maps provider identifiers to (module_path, class_name) for lazy import.
# Dict order is the fallback order.
_PROVIDER_MAP: dict[ProviderType, tuple[str, str]] = {
    ProviderType.TAVILY: ("ragbrowser.providers.tavily.adapter", "TavilyProvider"),
    ProviderType.APIFY: ("ragbrowser.providers.apify.adapter", "ApifyProvider"),
}

_CREDENTIAL_HELP: dict[ProviderType, str] = {
    ProviderType.TAVILY: "Get your API key from: https://tavily.com",
    ProviderType.APIFY: "Get your API token from: https://console.apify.com/account/integrations",
}


class AdapterNotFoundError(ConfigurationError):
    """Raised when a provider identifier has no adapter class."""


class ProviderSelector:
    """Decides which provider backs the process and builds it.

    Example:
        >>> selector = ProviderSelector(settings.provider_config())
        >>> provider_type = selector.resolve_configured()
        >>> provider = selector.instantiate(provider_type)
        >>> await provider.initialize()
    """

    def __init__(self, config: ProviderConfig) -> None:
        self.config = config

    def list_available(self) -> list[ProviderDescriptor]:
        """Describe every known provider, in fallback order."""
        descriptors: list[ProviderDescriptor] = []
        for provider_type in self.known_providers:
            available = bool(self.config.credential(provider_type))
            descriptors.append(
                ProviderDescriptor(
                    type=provider_type,
                    available=available,
                    reason=None if available else f"{CREDENTIAL_ENV[provider_type]} not set",
                )
            )
        return descriptors

    def resolve_configured(self) -> ProviderType:
        """Return the configured provider, or the first available one.

        Raises:
            ConfigurationError: If no provider has its credential set.
        """
        descriptors = self.list_available()
        configured = self.config.configured

        if configured:
            provider_type = ProviderType.parse(configured)
            descriptor = next((d for d in descriptors if d.type == provider_type), None)
            if descriptor is not None and descriptor.available:
                return descriptor.type
            reason = descriptor.reason if descriptor is not None else "unknown provider"
            logger.warning("Configured provider '%s' is not available: %s", configured, reason)

        available = [d for d in descriptors if d.available]
        if not available:
            names = " or ".join(CREDENTIAL_ENV[d.type] for d in descriptors)
            raise ConfigurationError(
                f"No search providers are configured. Please set either {names} in your environment variables."
            )

        fallback = available[0].type
        logger.info("Using fallback provider: %s", fallback.value)
        return fallback

    def instantiate(self, provider_type: ProviderType | str) -> SearchProvider:
        """Construct the adapter for *provider_type*.

        Plain identifiers are accepted case-insensitively (``"tavily"``, ``"APIFY"``).

        Raises:
            AdapterNotFoundError: If no adapter is mapped to the identifier.
            ConfigurationError: If the provider's credential is not set.
        """
        resolved = ProviderType.parse(provider_type)
        entry = _PROVIDER_MAP.get(resolved) if resolved is not None else None
        if resolved is None or entry is None:
            raise AdapterNotFoundError(
                f"No provider registered with name '{getattr(provider_type, 'value', provider_type)}'. "
                f"Available providers: {[p.value for p in self.known_providers]}"
            )
        provider_type = resolved

        credential = self.config.credential(provider_type)
        if not credential:
            env_name = CREDENTIAL_ENV[provider_type]
            raise ConfigurationError(
                f"{env_name} is required but not set. "
                "Please set it in your environment variables or .env file. "
                f"{_CREDENTIAL_HELP[provider_type]}"
            )

        module_path, class_name = entry
        module = importlib.import_module(module_path)
        provider_class: type[SearchProvider] = getattr(module, class_name)

        kwargs = dict(self.config.options.get(provider_type, {}))
        provider = provider_class(credential, **kwargs)
        logger.info("Instantiated search provider: %s", provider_type.value)
        return provider

    @property
    def known_providers(self) -> list[ProviderType]:
        """All provider identifiers, in fallback order."""
        return list(_PROVIDER_MAP)
