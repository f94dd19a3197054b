"""
Deterministic domain ID generation.

Records pulled from different tools, and from different connections of the
same tool, are merged into one global entity space.  A domain ID is a pure
function of ``(entity kind, connection id, tool-local id)`` so that
re-converting the same raw row always yields the same upsert key.

Manifesto:
    - **Deterministic:** same inputs → same ID, across calls and processes
    - **Collision-free per kind:** the connection id is an integer, so the
      first separator after the kind prefix unambiguously ends it
    - **Distinct across kinds:** the prefix names both plugin and tool model
    - **No state:** a generator is a prefix plus string formatting

Architecture:
    ::

        DomainIdGenerator(ZentaoTask)          prefix = "zentao:ZentaoTask"
            .generate(7, 42)               →   "zentao:ZentaoTask:7:42"

        DomainIdGenerator(JiraBoard)           prefix = "jira:JiraBoard"
            .generate(1, "12")             →   "jira:JiraBoard:1:12"

Examples:
    >>> gen = DomainIdGenerator(ZentaoTask)
    >>> gen.generate(7, 42) == gen.generate(7, 42)
    True
    >>> gen.generate(7, 42) != DomainIdGenerator(ZentaoStory).generate(7, 42)
    True

Tags:
    domain-id, idempotency, upsert-key, workspine
"""

from __future__ import annotations

from typing import Any

_SEPARATOR = ":"


def _plugin_from_module(module: str) -> str:
    """Extract ``<plugin>`` from ``....plugins.<plugin>.models``."""
    parts = module.split(".")
    if "plugins" in parts:
        index = parts.index("plugins")
        if index + 1 < len(parts):
            return parts[index + 1]
    raise ValueError(f"cannot derive plugin name from module {module!r}; pass plugin= explicitly")


def _canonical(value: Any) -> str:
    # bool is an int subclass but never a valid tool identity
    if isinstance(value, bool):
        raise TypeError("tool-local ids must be int or str, got bool")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value
    raise TypeError(f"tool-local ids must be int or str, got {type(value).__name__}")


class DomainIdGenerator:
    """Generates domain IDs for one entity kind (one tool model).

    Args:
        model: Tool model class the IDs are derived from
        plugin: Plugin name; derived from ``model.__module__`` when omitted
    """

    def __init__(self, model: type, plugin: str | None = None) -> None:
        self.plugin = plugin or _plugin_from_module(model.__module__)
        self.prefix = f"{self.plugin}{_SEPARATOR}{model.__name__}"

    def generate(self, connection_id: int, local_id: int | str) -> str:
        """Return the domain ID for ``(connection_id, local_id)``.

        The local id is the last segment, so it may itself contain the separator.
        """
        return _SEPARATOR.join((self.prefix, _canonical(connection_id), _canonical(local_id)))

    def __repr__(self) -> str:
        return f"DomainIdGenerator({self.prefix!r})"


__all__ = ["DomainIdGenerator"]
