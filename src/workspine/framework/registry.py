"""Plugin registry for registering and discovering tool plugins.

Tags:
    workspine, framework, registry, plugin-discovery
"""

from collections.abc import Callable
from importlib import import_module
from typing import TYPE_CHECKING

from workspine.core.errors import PluginNotFoundError
from workspine.core.logging import get_logger

if TYPE_CHECKING:
    from workspine.framework.plugin import Plugin

logger = get_logger()

_BUILTIN_PLUGINS = (
    "workspine.plugins.jira",
    "workspine.plugins.zentao",
)

_registry: dict[str, type["Plugin"]] = {}
_loaded: bool = False


def register_plugin(name: str) -> Callable[[type["Plugin"]], type["Plugin"]]:
    """Decorator to register a plugin class."""

    def decorator(cls: type["Plugin"]) -> type["Plugin"]:
        if name in _registry:
            raise ValueError(f"Plugin '{name}' is already registered")
        cls.name = name
        _registry[name] = cls
        logger.debug("plugin_registered", name=name, cls=cls.__name__)
        return cls

    return decorator


def unregister_plugin(name: str) -> None:
    """Remove a plugin (for testing)."""
    _registry.pop(name, None)


def _ensure_loaded() -> None:
    global _loaded
    if not _loaded:
        _load_plugins()
        _loaded = True


def get_plugin(name: str) -> "Plugin":
    """Get a plugin instance by name."""
    _ensure_loaded()
    if name not in _registry:
        available = ", ".join(sorted(_registry.keys()))
        raise PluginNotFoundError(name, f"Plugin '{name}' not found. Available: {available}")
    return _registry[name]()


def list_plugins() -> list[str]:
    """List all registered plugin names."""
    _ensure_loaded()
    return sorted(_registry.keys())


def _load_plugins() -> None:
    """Import the built-in plugin packages so their decorators run."""
    for module in _BUILTIN_PLUGINS:
        import_module(module)
    logger.debug("plugin_registry_loaded", registered=len(_registry))
