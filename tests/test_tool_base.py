"""
Tests for tool base classes and validation.
"""

from voicing_tools.base import ToolParameter, ToolResult, VoicingTool


class TestToolParameter:
    """Test ToolParameter validation."""

    def test_required_parameter_missing(self):
        """Required parameter with None should fail validation."""
        param = ToolParameter(name="root", type=str, description="Chord root", required=True)

        is_valid, error = param.validate(None)
        assert not is_valid
        assert "Required parameter 'root' is missing" in error

    def test_required_parameter_present(self):
        """Required parameter with value should pass validation."""
        param = ToolParameter(name="root", type=str, description="Chord root", required=True)

        is_valid, error = param.validate("D")
        assert is_valid
        assert error is None

    def test_optional_parameter_missing(self):
        """Optional parameter with None should pass validation."""
        param = ToolParameter(
            name="velocity", type=int, description="Velocity", required=False, default=90
        )

        is_valid, error = param.validate(None)
        assert is_valid
        assert error is None

    def test_type_mismatch(self):
        """Parameter with wrong type should fail validation."""
        param = ToolParameter(name="velocity", type=int, description="Velocity", required=True)

        is_valid, error = param.validate("loud")
        assert not is_valid
        assert "must be int, got str" in error

    def test_bool_is_not_an_int(self):
        """bool is an int subclass but must not pass as a number."""
        param = ToolParameter(name="velocity", type=int, description="Velocity")

        is_valid, error = param.validate(True)
        assert not is_valid
        assert "got bool" in error

    def test_choices_enforced(self):
        """Values outside choices should fail validation."""
        param = ToolParameter(
            name="density", type=str, description="Density", choices=("compact", "spread")
        )

        assert param.validate("spread") == (True, None)
        is_valid, error = param.validate("wide")
        assert not is_valid
        assert "must be one of: compact, spread" in error


class TestToolResult:
    """Test ToolResult data structure."""

    def test_success_result(self):
        """Successful result with data."""
        result = ToolResult(success=True, data={"symbol": "Dm7"}, metadata={"source": "test"})

        assert result.success is True
        assert result.data == {"symbol": "Dm7"}
        assert result.error is None
        assert result.metadata == {"source": "test"}

    def test_failure_result(self):
        """Failed result with error message."""
        result = ToolResult(success=False, error="Unknown note")

        assert result.success is False
        assert result.data is None
        assert result.error == "Unknown note"


class DummyTool(VoicingTool):
    """Dummy tool for testing base class."""

    @property
    def name(self) -> str:
        return "dummy_tool"

    @property
    def description(self) -> str:
        return "A dummy tool for testing"

    @property
    def parameters(self) -> list[ToolParameter]:
        return [
            ToolParameter(name="text", type=str, description="Some text", required=True),
            ToolParameter(
                name="count", type=int, description="A number", required=False, default=1
            ),
        ]

    def execute(self, **kwargs) -> ToolResult:
        """Echo back the inputs; 'bad' and 'boom' trigger failures."""
        if kwargs["text"] == "bad":
            raise ValueError("bad text")
        if kwargs["text"] == "boom":
            raise RuntimeError("exploded")
        return ToolResult(success=True, data=kwargs)


class TestVoicingTool:
    """Test VoicingTool base class."""

    def test_tool_properties(self):
        """Tool should expose name, description, parameters."""
        tool = DummyTool()

        assert tool.name == "dummy_tool"
        assert "dummy tool" in tool.description.lower()
        assert len(tool.parameters) == 2

    def test_validate_inputs_missing_required(self):
        """Missing required parameter should fail validation."""
        tool = DummyTool()

        is_valid, error = tool.validate_inputs(count=5)
        assert not is_valid
        assert "Required parameter 'text' is missing" in error

    def test_call_with_valid_inputs(self):
        """Calling tool with valid inputs should succeed."""
        tool = DummyTool()

        result = tool(text="hello", count=3)
        assert result.success is True
        assert result.data == {"text": "hello", "count": 3}

    def test_call_fills_defaults(self):
        """Optional parameters not passed should arrive with their default."""
        result = DummyTool()(text="hello")
        assert result.data == {"text": "hello", "count": 1}

    def test_call_with_invalid_inputs(self):
        """Calling tool with invalid inputs should return error."""
        result = DummyTool()(count=5)
        assert result.success is False
        assert "Required parameter" in result.error

    def test_value_error_becomes_failed_result(self):
        """ValueError from execute() is reported verbatim."""
        result = DummyTool()(text="bad")
        assert result.success is False
        assert result.error == "bad text"

    def test_unexpected_error_is_caught(self, caplog):
        """Other exceptions are logged and reported as execution failures."""
        result = DummyTool()(text="boom")
        assert result.success is False
        assert result.error == "Tool execution failed: exploded"
        assert "dummy_tool failed" in caplog.text

    def test_to_dict(self):
        """to_dict should list every parameter with its metadata."""
        data = DummyTool().to_dict()
        assert data["name"] == "dummy_tool"
        assert [p["name"] for p in data["parameters"]] == ["text", "count"]
        assert data["parameters"][1] == {
            "name": "count",
            "type": "int",
            "description": "A number",
            "required": False,
            "default": 1,
            "choices": None,
        }
