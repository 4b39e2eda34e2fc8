"""Tests for the protocol and tool error hierarchies."""

from toolwire.protocol import constants
from toolwire.protocol.errors import (
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    MissingParametersError,
    ParseError,
    ProtocolError,
    ToolNotFoundError,
)
from toolwire.tools.errors import (
    DuplicateToolError,
    HandlerError,
    ToolDefinitionError,
    ToolError,
)


class TestProtocolErrorHierarchy:
    def test_all_are_protocol_errors(self) -> None:
        for cls in (ParseError, InvalidRequestError, MethodNotFoundError, InvalidParamsError, InternalError):
            assert issubclass(cls, ProtocolError)

    def test_tool_lookup_and_missing_args_are_invalid_params(self) -> None:
        assert issubclass(ToolNotFoundError, InvalidParamsError)
        assert issubclass(MissingParametersError, InvalidParamsError)

    def test_codes(self) -> None:
        assert ParseError().code == constants.PARSE_ERROR
        assert InvalidRequestError("x").code == constants.INVALID_REQUEST
        assert MethodNotFoundError("x").code == constants.METHOD_NOT_FOUND
        assert ToolNotFoundError("x").code == constants.INVALID_PARAMS
        assert InternalError("x").code == constants.INTERNAL_ERROR


class TestToolNotFoundError:
    def test_attributes(self) -> None:
        err = ToolNotFoundError("search")
        assert err.name == "search"
        assert "search" in str(err)
        assert err.to_data() == {"cause": "missing-tool", "tool": "search"}


class TestMissingParametersError:
    def test_message_lists_missing(self) -> None:
        err = MissingParametersError(["a", "b"], provided=[], required=["a", "b"])
        assert str(err) == "Missing tool parameters: a, b"


class TestMethodNotFoundError:
    def test_message(self) -> None:
        err = MethodNotFoundError("foo/bar")
        assert err.method == "foo/bar"
        assert err.message == "Method not found: foo/bar"


class TestInternalError:
    def test_message_and_data(self) -> None:
        err = InternalError("disk full")
        assert err.message == "Internal error: disk full"
        assert err.to_data() == {"cause": "internal"}


class TestParseError:
    def test_detail_in_data(self) -> None:
        err = ParseError("Expecting value")
        assert err.message == "Parse error"
        assert err.to_data() == {"cause": "parse", "detail": "Expecting value"}

    def test_without_detail(self) -> None:
        assert ParseError().to_data() == {"cause": "parse"}


class TestToolErrors:
    def test_hierarchy(self) -> None:
        assert issubclass(HandlerError, ToolError)
        assert issubclass(DuplicateToolError, ToolDefinitionError)
        assert issubclass(ToolDefinitionError, ValueError)

    def test_handler_error(self) -> None:
        err = HandlerError("add", "boom")
        assert err.tool_name == "add"
        assert err.message == "boom"
        assert err.cause == "handler-exception"
