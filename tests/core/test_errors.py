"""Tests for error types and codes."""

import pytest

from regionscope.core.errors import (
    ConfigError,
    ErrorCode,
    InternalError,
    PatternError,
    RegionScopeError,
)


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.CONFIG_INVALID_VALUE, 2000),
            (ErrorCode.PATTERN_INVALID_REGEX, 3000),
            (ErrorCode.PATTERN_MISSING_PAIR, 3000),
            (ErrorCode.INTERNAL_ERROR, 9000),
            (ErrorCode.PRECONDITION_FAILED, 9000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        """Error codes fall within their designated numeric range."""
        # Given
        error_code = code

        # When
        value = error_code.value

        # Then
        assert expected_range <= value < expected_range + 1000


class TestRegionScopeError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        """Error serializes to dict with all required fields."""
        # Given
        error = PatternError(
            code=ErrorCode.PATTERN_INVALID_REGEX,
            message="Test message",
            retryable=True,
            details={"key": "value"},
        )

        # When
        result = error.to_dict()

        # Then
        assert result == {
            "code": 3001,
            "error": "PATTERN_INVALID_REGEX",
            "message": "Test message",
            "retryable": True,
            "details": {"key": "value"},
        }

    def test_given_error_when_str_then_human_readable(self) -> None:
        """Error string representation is human readable."""
        # Given
        error = InternalError(code=ErrorCode.INTERNAL_ERROR, message="Something broke")

        # When
        result = str(error)

        # Then
        assert result == "[9001] INTERNAL_ERROR: Something broke"

    def test_given_subclass_error_when_raised_then_caught_as_base(self) -> None:
        """Every specific error is a RegionScopeError."""
        with pytest.raises(RegionScopeError) as exc_info:
            raise ConfigError.parse_error("/bad.yaml", "mapping values are not allowed here")

        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR


class TestConfigError:
    """ConfigError factory method tests."""

    @pytest.mark.parametrize(
        ("factory", "kwargs", "expected_code"),
        [
            (
                "parse_error",
                {"path": "/foo", "reason": "bad yaml"},
                ErrorCode.CONFIG_PARSE_ERROR,
            ),
            (
                "invalid_value",
                {"field": "sync.outline_debounce_sec", "value": -1, "reason": "must be >= 0"},
                ErrorCode.CONFIG_INVALID_VALUE,
            ),
        ],
    )
    def test_given_factory_when_called_then_correct_code(
        self, factory: str, kwargs: dict[str, object], expected_code: ErrorCode
    ) -> None:
        """Factory methods produce errors with the right code."""
        # When
        error = getattr(ConfigError, factory)(**kwargs)

        # Then
        assert isinstance(error, ConfigError)
        assert error.code == expected_code

    def test_given_invalid_value_when_created_then_value_stringified(self) -> None:
        """Invalid values are stored as strings in details."""
        error = ConfigError.invalid_value("modifiers.cache_max_entries", 0, "too small")

        assert error.details == {
            "field": "modifiers.cache_max_entries",
            "value": "0",
            "reason": "too small",
        }
        assert "modifiers.cache_max_entries" in error.message


class TestPatternError:
    """PatternError factory method tests."""

    def test_given_invalid_regex_when_created_then_details_name_language(self) -> None:
        """Invalid regex errors carry language, pattern and reason."""
        error = PatternError.invalid_regex("python", "(unclosed", "missing )")

        assert error.code == ErrorCode.PATTERN_INVALID_REGEX
        assert error.details == {
            "language_id": "python",
            "pattern": "(unclosed",
            "reason": "missing )",
        }
        assert "'python'" in error.message

    def test_given_missing_pair_when_created_then_names_missing_side(self) -> None:
        """Missing pair errors say which side is absent."""
        error = PatternError.missing_pair("lua", "end")

        assert error.code == ErrorCode.PATTERN_MISSING_PAIR
        assert error.message.endswith("has no end pattern")


class TestInternalError:
    """InternalError factory method tests."""

    def test_given_precondition_failed_when_created_then_names_component(self) -> None:
        """Precondition failures name the component and reason."""
        error = InternalError.precondition_failed("OutlineSession", "no document is open")

        assert error.code == ErrorCode.PRECONDITION_FAILED
        assert error.message == "OutlineSession: no document is open"
        assert error.details["component"] == "OutlineSession"
