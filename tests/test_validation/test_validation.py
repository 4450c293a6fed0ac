"""Tests for interpolated value validation."""

import pytest

from styledpass.errors import EvaluationError, InvalidInterpolationError
from styledpass.model.ast import Identifier, RawExpression
from styledpass.model.diagnostic import Severity
from styledpass.model.values import UNDEFINED, EvaluatedError, to_js_string
from styledpass.validation import is_serializable, throw_if_invalid, validate_interpolation


NODE = RawExpression("theme.size")


# ---------------------------------------------------------------------------
# is_serializable
# ---------------------------------------------------------------------------


class TestIsSerializable:
    @pytest.mark.parametrize("value", [None, True, 1, 1.5, "x", [1, "a"], {"a": [None]}])
    def test_json_like_values(self, value):
        assert is_serializable(value)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), UNDEFINED, object(), {"a": float("nan")}])
    def test_other_values(self, value):
        assert not is_serializable(value)


# ---------------------------------------------------------------------------
# throw_if_invalid
# ---------------------------------------------------------------------------


class TestThrowIfInvalid:
    @pytest.mark.parametrize("value", [42, 0.5, "red", "", {"a": 1}, [1, 2], None, len])
    def test_accepts(self, value):
        throw_if_invalid(value, NODE)

    def test_nan(self):
        with pytest.raises(InvalidInterpolationError) as exc_info:
            throw_if_invalid(float("nan"), NODE)
        assert "The expression evaluated to 'NaN'" in str(exc_info.value)
        assert exc_info.value.fix == "String(theme.size)"

    def test_infinity(self):
        with pytest.raises(InvalidInterpolationError, match="'Infinity'"):
            throw_if_invalid(float("inf"), NODE)

    def test_undefined(self):
        with pytest.raises(InvalidInterpolationError, match="'undefined'"):
            throw_if_invalid(UNDEFINED, Identifier("x"))

    def test_message_suggests_string_cast(self):
        with pytest.raises(InvalidInterpolationError) as exc_info:
            throw_if_invalid(UNDEFINED, Identifier("x"))
        assert str(exc_info.value).endswith("e.g. - 'String(x)'.")

    def test_evaluated_error(self):
        with pytest.raises(EvaluationError) as exc_info:
            throw_if_invalid(EvaluatedError("window is not defined"), NODE)
        message = str(exc_info.value)
        assert message.startswith(
            "An error occurred when evaluating the expression: window is not defined."
        )
        assert "browser or Node specific API" in message

    def test_python_exception(self):
        with pytest.raises(EvaluationError, match="boom"):
            throw_if_invalid(ValueError("boom"), NODE)


# ---------------------------------------------------------------------------
# validate_interpolation
# ---------------------------------------------------------------------------


class TestValidateInterpolation:
    def test_valid_value_has_no_diagnostic(self):
        assert validate_interpolation("red", NODE) is None

    def test_invalid_value(self):
        diag = validate_interpolation(float("nan"), NODE)
        assert diag is not None
        assert diag.code == "invalid-interpolation"
        assert diag.severity is Severity.ERROR
        assert diag.fix == "String(theme.size)"

    def test_error_value(self):
        diag = validate_interpolation(EvaluatedError("nope"), NODE)
        assert diag.code == "evaluation-error"


# ---------------------------------------------------------------------------
# to_js_string
# ---------------------------------------------------------------------------


class TestToJsString:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, "null"),
            (UNDEFINED, "undefined"),
            (True, "true"),
            (3.0, "3"),
            (2.5, "2.5"),
            (float("-inf"), "-Infinity"),
            ({"a": 1}, '{"a":1}'),
            ("x", "x"),
        ],
    )
    def test_rendering(self, value, expected):
        assert to_js_string(value) == expected
