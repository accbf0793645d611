"""
voicing_tools/registry.py — Named access to the voicing tools.

Tools are found by walking voicing_tools.voicing for concrete VoicingTool
subclasses. On registration every chord parameter is checked against the
shared vocabularies in voicing_tools.voicing._common, so all tools accept
the same roots, qualities and densities.

Callers go through run(), which never raises for an unknown tool name; the
CLI uses catalogue() to print what is available.
"""

from __future__ import annotations

import functools
import importlib
import inspect
import logging
import pkgutil
from typing import Any

from voicing_tools.base import ToolResult, VoicingTool
from voicing_tools.voicing._common import DENSITY_CHOICES, NOTE_CHOICES, QUALITY_CHOICES

logger = logging.getLogger(__name__)

TOOLS_PACKAGE = "voicing_tools.voicing"

# Parameter name → the only choices a tool may declare for it
SHARED_CHOICES: dict[str, tuple[str, ...]] = {
    "root": NOTE_CHOICES,
    "quality": QUALITY_CHOICES,
    "density": DENSITY_CHOICES,
}


def _check_shared_choices(tool: VoicingTool) -> None:
    for param in tool.parameters:
        expected = SHARED_CHOICES.get(param.name)
        if expected is not None and tuple(param.choices or ()) != expected:
            raise ValueError(
                f"Tool '{tool.name}' parameter '{param.name}' must use the shared choices {expected}"
            )


class ToolRegistry:
    """Voicing tools keyed by name.

    Example:
        >>> registry = ToolRegistry()
        >>> registry.discover()
        5
        >>> registry.run("detect_voicing_pattern", roles="root,third,seventh").data["pattern"]["id"]
        'shell-a'
    """

    def __init__(self) -> None:
        self._tools: dict[str, VoicingTool] = {}

    def register(self, tool: VoicingTool) -> None:
        """Add ``tool``.

        Raises:
            ValueError: On a duplicate name, or a root/quality/density
                parameter whose choices differ from the shared ones.
        """
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' is already registered")
        _check_shared_choices(tool)
        self._tools[tool.name] = tool

    def names(self) -> list[str]:
        """Sorted names of all registered tools."""
        return sorted(self._tools)

    def run(self, name: str, **kwargs: Any) -> ToolResult:
        """Call tool ``name``; an unknown name is a failed result."""
        tool = self._tools.get(name)
        if tool is None:
            return ToolResult(
                success=False,
                error=f"Unknown tool '{name}'. Available: {', '.join(self.names())}",
            )
        return tool(**kwargs)

    def catalogue(self) -> list[dict[str, Any]]:
        """One line of help per tool, sorted by name.

        Each entry has the tool name, the first sentence of its description
        and its required parameter names.
        """
        entries = []
        for name in self.names():
            info = self._tools[name].to_dict()
            entries.append(
                {
                    "name": name,
                    "summary": info["description"].split(". ")[0].rstrip("."),
                    "required": [p["name"] for p in info["parameters"] if p["required"]],
                }
            )
        return entries

    def discover(self, package_name: str = TOOLS_PACKAGE) -> int:
        """Register every concrete VoicingTool defined in ``package_name``.

        A class imported into another module is registered once, from the
        module that defines it.

        Returns:
            Number of tools registered. 0 when the package cannot be
            imported or is a plain module.
        """
        try:
            package = importlib.import_module(package_name)
        except ImportError:
            logger.warning("Tool package %r could not be imported", package_name)
            return 0
        if not hasattr(package, "__path__"):
            return 0

        count = 0
        for module_info in pkgutil.walk_packages(package.__path__, prefix=f"{package_name}."):
            module = importlib.import_module(module_info.name)
            for _name, obj in inspect.getmembers(module, inspect.isclass):
                if (
                    issubclass(obj, VoicingTool)
                    and obj.__module__ == module_info.name
                    and not inspect.isabstract(obj)
                ):
                    self.register(obj())
                    count += 1

        logger.debug("Discovered %d tools in %s", count, package_name)
        return count

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools


@functools.cache
def get_registry() -> ToolRegistry:
    """Shared registry, discovered on first use."""
    registry = ToolRegistry()
    registry.discover()
    return registry
