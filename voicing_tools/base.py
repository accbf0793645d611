"""
Tool base class and common types.

All voicing tools inherit from VoicingTool and implement execute().
This ensures a consistent interface for the tool registry and the CLI.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolParameter:
    """
    Tool parameter specification.

    Attributes:
        name: Parameter name
        type: Python type (str, int, float, etc.)
        description: Human-readable description
        required: Whether parameter is required
        default: Default value if not required
        choices: Allowed values, or None for any value of the right type
    """

    name: str
    type: type
    description: str
    required: bool = True
    default: Any = None
    choices: tuple[Any, ...] | None = None

    def validate(self, value: Any) -> tuple[bool, str | None]:
        """
        Validate parameter value.

        Args:
            value: Value to validate

        Returns:
            Tuple of (is_valid, error_message)
        """
        if value is None:
            if self.required:
                return False, f"Required parameter '{self.name}' is missing"
            return True, None

        # bool is an int subclass; never accept it for numeric parameters
        if isinstance(value, bool) and self.type is not bool:
            return False, f"Parameter '{self.name}' must be {self.type.__name__}, got bool"

        if not isinstance(value, self.type):
            return (
                False,
                f"Parameter '{self.name}' must be {self.type.__name__}, got {type(value).__name__}",
            )

        if self.choices is not None and value not in self.choices:
            options = ", ".join(str(choice) for choice in self.choices)
            return False, f"Parameter '{self.name}' must be one of: {options}. Got: {value!r}"

        return True, None


@dataclass(frozen=True)
class ToolResult:
    """
    Result from tool execution.

    Attributes:
        success: Whether execution succeeded
        data: Result data (dict, list, str, etc.)
        error: Error message if success=False
        metadata: Optional metadata (counts, output paths, etc.)
    """

    success: bool
    data: Any = None
    error: str | None = None
    metadata: dict[str, Any] | None = None


class VoicingTool(ABC):
    """
    Abstract base class for all voicing tools.

    Voicing tools are deterministic wrappers around voicing_core: they take
    raw string parameters, validate them, call the engine and return plain
    JSON-friendly data.

    Subclasses must implement:
        - name: Unique tool identifier
        - description: Clear description of what the tool answers
        - parameters: List of ToolParameter specs
        - execute(): Core tool logic

    Example:
        class ExploreChord(VoicingTool):
            @property
            def name(self) -> str:
                return "explore_chord"

            def execute(self, **kwargs) -> ToolResult:
                return ToolResult(success=True, data={...})
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique tool identifier (lowercase, underscores)."""

    @property
    @abstractmethod
    def description(self) -> str:
        """
        Human-readable description of the tool.

        Be specific about the musical question the tool answers.

        Good: "Place an ordered set of chord tones into octaves and name the voicing"
        Bad: "Voice chord"
        """

    @property
    @abstractmethod
    def parameters(self) -> list[ToolParameter]:
        """
        List of parameters this tool accepts.

        Order matters — positional parameters come first.
        """

    def validate_inputs(self, **kwargs) -> tuple[bool, str | None]:
        """
        Validate all input parameters.

        Args:
            **kwargs: Parameter values to validate

        Returns:
            Tuple of (is_valid, error_message)
        """
        for param in self.parameters:
            value = kwargs.get(param.name)
            is_valid, error = param.validate(value)
            if not is_valid:
                return False, error

        return True, None

    def with_defaults(self, **kwargs) -> dict[str, Any]:
        """Fill in declared defaults for parameters that were not passed."""
        resolved = dict(kwargs)
        for param in self.parameters:
            if resolved.get(param.name) is None and not param.required:
                resolved[param.name] = param.default
        return resolved

    @abstractmethod
    def execute(self, **kwargs) -> ToolResult:
        """
        Execute tool with validated parameters.

        Args:
            **kwargs: Tool parameters (already validated, defaults filled in)

        Returns:
            ToolResult with success status and data
        """

    def __call__(self, **kwargs) -> ToolResult:
        """
        Execute tool with automatic validation.

        This is the main entry point — validates inputs then calls execute().
        Engine ValueErrors become failed results; anything else is logged
        with its traceback and also returned as a failed result.

        Args:
            **kwargs: Tool parameters

        Returns:
            ToolResult (error if validation fails)
        """
        is_valid, error = self.validate_inputs(**kwargs)
        if not is_valid:
            logger.warning("%s rejected input: %s", self.name, error)
            return ToolResult(success=False, error=error)

        try:
            return self.execute(**self.with_defaults(**kwargs))
        except ValueError as e:
            logger.warning("%s rejected input: %s", self.name, e)
            return ToolResult(success=False, error=str(e))
        except Exception as e:
            logger.exception("%s failed", self.name)
            return ToolResult(success=False, error=f"Tool execution failed: {str(e)}")

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize tool for listing and help output.

        Returns dict with name, description, parameters.
        """
        return {
            "name": self.name,
            "description": self.description,
            "parameters": [
                {
                    "name": p.name,
                    "type": p.type.__name__,
                    "description": p.description,
                    "required": p.required,
                    "default": p.default,
                    "choices": list(p.choices) if p.choices is not None else None,
                }
                for p in self.parameters
            ],
        }
