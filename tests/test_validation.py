"""Tests for wren.validation — keyword rules, schema checks and request validation."""

from wren.http.request import Request
from wren.validation import RequestValidator, ValidationFinding, check_schema, coerce_value, validate_request
from wren.validation.rules import (
    matches,
    max_items,
    max_length,
    maximum,
    min_items,
    min_length,
    minimum,
    of_type,
    one_of,
    unique_items,
)
from wren.validation.schema import SchemaViolation, format_path

# ---------------------------------------------------------------------------
# Individual rule tests
# ---------------------------------------------------------------------------


class TestOfType:
    def test_string(self) -> None:
        assert of_type("string")("abc") is None
        assert of_type("string")(3) == "Must be of type string"

    def test_integer_accepts_integral_float(self) -> None:
        assert of_type("integer")(3.0) is None
        assert of_type("integer")(3.5) is not None

    def test_bool_is_not_a_number(self) -> None:
        assert of_type("integer")(True) is not None
        assert of_type("number")(False) is not None

    def test_type_list(self) -> None:
        assert of_type(["string", "null"])(None) is None
        assert of_type(["string", "null"])(1) == "Must be of type string or null"

    def test_unknown_type_accepts(self) -> None:
        assert of_type("file")(object()) is None


class TestStringRules:
    def test_min_length(self) -> None:
        assert min_length(3)("abc") is None
        assert min_length(3)("ab") == "Must be at least 3 characters"

    def test_max_length(self) -> None:
        assert max_length(3)("abc") is None
        assert max_length(3)("abcd") == "Must be at most 3 characters"

    def test_length_ignores_non_strings(self) -> None:
        assert min_length(3)(1) is None

    def test_pattern_is_unanchored(self) -> None:
        assert matches(r"\d")("abc1") is None
        assert matches(r"^\d+$")("abc") == r"Must match pattern: ^\d+$"


class TestChoiceAndNumbers:
    def test_one_of(self) -> None:
        assert one_of(["true", "false"])("true") is None
        assert one_of(["true", "false"])("maybe") == "Must be one of: true, false"

    def test_minimum(self) -> None:
        assert minimum(1)(1) is None
        assert minimum(1)(0) == "Must be at least 1"

    def test_exclusive_minimum(self) -> None:
        assert minimum(1, exclusive=True)(1) == "Must be greater than 1"

    def test_maximum(self) -> None:
        assert maximum(10)(10) is None
        assert maximum(10)(11) == "Must be at most 10"

    def test_exclusive_maximum(self) -> None:
        assert maximum(10, exclusive=True)(10) == "Must be less than 10"

    def test_bounds_ignore_strings(self) -> None:
        assert minimum(5)("1") is None


class TestArrayRules:
    def test_min_items(self) -> None:
        assert min_items(1)([]) == "Must contain at least 1 items"

    def test_max_items(self) -> None:
        assert max_items(1)([1, 2]) == "Must contain at most 1 items"

    def test_unique_items(self) -> None:
        assert unique_items(True)([1, 2]) is None
        assert unique_items(True)([1, 1]) == "Must not contain duplicate items"
        assert unique_items(False)([1, 1]) is None


# ---------------------------------------------------------------------------
# Schema checks
# ---------------------------------------------------------------------------


class TestCheckSchema:
    def test_conforming_value(self) -> None:
        assert check_schema("abcdef", {"type": "string", "minLength": 3}) == []

    def test_type_mismatch_reported_alone(self) -> None:
        violations = check_schema(5, {"type": "string", "minLength": 3, "enum": ["a"]})
        assert violations == [SchemaViolation("type", "Must be of type string")]

    def test_multiple_keywords(self) -> None:
        violations = check_schema("a", {"minLength": 3, "pattern": r"^\d+$"})
        assert [v.keyword for v in violations] == ["minLength", "pattern"]

    def test_nullable(self) -> None:
        assert check_schema(None, {"type": "string", "nullable": True}) == []

    def test_required_properties(self) -> None:
        schema = {"type": "object", "required": ["something"]}
        assert check_schema({}, schema) == [
            SchemaViolation("required", "This field is required", ("something",)),
        ]

    def test_nested_properties(self) -> None:
        schema = {
            "type": "object",
            "properties": {"owner": {"type": "object", "properties": {"name": {"minLength": 2}}}},
        }
        violations = check_schema({"owner": {"name": "a"}}, schema)
        assert violations == [SchemaViolation("minLength", "Must be at least 2 characters", ("owner", "name"))]

    def test_additional_properties_false(self) -> None:
        schema = {"type": "object", "properties": {"a": {}}, "additionalProperties": False}
        violations = check_schema({"a": 1, "b": 2}, schema)
        assert violations == [SchemaViolation("additionalProperties", "Unexpected field", ("b",))]

    def test_additional_properties_schema(self) -> None:
        schema = {"type": "object", "additionalProperties": {"type": "integer"}}
        violations = check_schema({"a": "x"}, schema)
        assert violations == [SchemaViolation("type", "Must be of type integer", ("a",))]

    def test_array_items(self) -> None:
        schema = {"type": "array", "items": {"type": "object", "required": ["name"]}}
        violations = check_schema([{"name": "a"}, {}], schema)
        assert violations == [SchemaViolation("required", "This field is required", (1, "name"))]


class TestFormatPath:
    def test_empty(self) -> None:
        assert format_path(()) == ""

    def test_mixed(self) -> None:
        assert format_path(("items", 0, "name")) == "items[0].name"

    def test_leading_index(self) -> None:
        assert format_path((1, "name")) == "[1].name"


class TestCoerceValue:
    def test_integer(self) -> None:
        assert coerce_value("42", {"type": "integer"}) == 42

    def test_negative_number(self) -> None:
        assert coerce_value("-1.5", {"type": "number"}) == -1.5

    def test_boolean(self) -> None:
        assert coerce_value("true", {"type": "boolean"}) is True
        assert coerce_value("false", {"type": "boolean"}) is False

    def test_uncoercible_is_unchanged(self) -> None:
        assert coerce_value("abc", {"type": "integer"}) == "abc"

    def test_array_items(self) -> None:
        assert coerce_value(["1", "2"], {"type": "array", "items": {"type": "integer"}}) == [1, 2]

    def test_string_schema_untouched(self) -> None:
        assert coerce_value("42", {"type": "string"}) == "42"


# ---------------------------------------------------------------------------
# Request validation
# ---------------------------------------------------------------------------

_LENGTH3 = {"type": "string", "minLength": 3}


def _finding(code: str, location: str, message: str, path: str) -> ValidationFinding:
    return ValidationFinding(error_code=code, location=location, message=message, path=path)


class TestPathParameters:
    validator = RequestValidator({"parameters": [{"in": "path", "name": "something", "schema": _LENGTH3}]})

    def test_good(self) -> None:
        request = Request.build("GET", "/p").with_path_params({"something": "abcdef"})
        assert self.validator.validate(request) is None

    def test_bad(self) -> None:
        request = Request.build("GET", "/p").with_path_params({"something": "ab"})
        result = self.validator.validate(request)
        assert result is not None
        assert result.status == 400
        assert result.errors == (
            _finding("minLength.openapi.validation", "path", "Must be at least 3 characters", "something"),
        )


class TestHeaders:
    required = RequestValidator(
        {"parameters": [{"in": "header", "name": "x-something", "required": True, "schema": _LENGTH3}]}
    )
    optional = RequestValidator({"parameters": [{"in": "header", "name": "x-something", "schema": _LENGTH3}]})

    def test_good(self) -> None:
        request = Request.build("GET", "/p", headers={"X-Something": "abcdef"})
        assert self.required.validate(request) is None

    def test_missing_required(self) -> None:
        result = self.required.validate(Request.build("GET", "/p"))
        assert result is not None
        assert result.errors == (
            _finding("required.openapi.validation", "headers", "This field is required", "x-something"),
        )

    def test_bad_optional(self) -> None:
        result = self.optional.validate(Request.build("GET", "/p", headers={"x-something": ""}))
        assert result is not None
        assert result.errors == (
            _finding("minLength.openapi.validation", "headers", "Must be at least 3 characters", "x-something"),
        )

    def test_missing_optional(self) -> None:
        assert self.optional.validate(Request.build("GET", "/p")) is None


class TestQueryParameters:
    def test_missing_required(self) -> None:
        validator = RequestValidator(
            {"parameters": [{"in": "query", "name": "something", "required": True, "schema": _LENGTH3}]}
        )
        result = validator.validate(Request.build("GET", "/p"))
        assert result is not None
        assert result.errors == (
            _finding("required.openapi.validation", "query", "This field is required", "something"),
        )

    def test_bad_optional(self) -> None:
        validator = RequestValidator({"parameters": [{"in": "query", "name": "something", "schema": _LENGTH3}]})
        result = validator.validate(Request.build("GET", "/p?something=a"))
        assert result is not None
        assert result.errors[0].error_code == "minLength.openapi.validation"

    def test_integer_is_coerced(self) -> None:
        validator = RequestValidator(
            {"parameters": [{"in": "query", "name": "limit", "schema": {"type": "integer", "maximum": 50}}]}
        )
        assert validator.validate(Request.build("GET", "/p?limit=20")) is None
        result = validator.validate(Request.build("GET", "/p?limit=80"))
        assert result is not None
        assert result.errors[0].message == "Must be at most 50"

    def test_coercion_disabled(self) -> None:
        validator = RequestValidator(
            {"parameters": [{"in": "query", "name": "limit", "schema": {"type": "integer"}}]},
            coerce=False,
        )
        result = validator.validate(Request.build("GET", "/p?limit=20"))
        assert result is not None
        assert result.errors[0].error_code == "type.openapi.validation"

    def test_array_reads_every_value(self) -> None:
        validator = RequestValidator(
            {"parameters": [{"in": "query", "name": "tag", "schema": {"type": "array", "maxItems": 1}}]}
        )
        result = validator.validate(Request.build("GET", "/p?tag=a&tag=b"))
        assert result is not None
        assert result.errors[0].error_code == "maxItems.openapi.validation"

    def test_enum(self) -> None:
        validator = RequestValidator(
            {"parameters": [{"in": "query", "name": "ip", "schema": {"type": "string", "enum": ["true", "false"]}}]}
        )
        result = validator.validate(Request.build("GET", "/p?ip=maybe"))
        assert result is not None
        assert result.errors[0].error_code == "enum.openapi.validation"


class TestCookies:
    def test_missing_required_cookie(self) -> None:
        validator = RequestValidator({"parameters": [{"in": "cookie", "name": "session", "required": True}]})
        result = validator.validate(Request.build("GET", "/p", headers={"cookie": "theme=dark"}))
        assert result is not None
        assert result.errors[0].location == "cookies"

    def test_present_cookie(self) -> None:
        validator = RequestValidator({"parameters": [{"in": "cookie", "name": "session", "required": True}]})
        assert validator.validate(Request.build("GET", "/p", headers={"cookie": "session=abc"})) is None


class TestBody:
    validator = RequestValidator({
        "requestBody": {
            "content": {
                "application/json": {
                    "schema": {
                        "type": "object",
                        "properties": {"something": _LENGTH3},
                        "required": ["something"],
                    }
                }
            }
        }
    })

    def test_good(self) -> None:
        request = Request.build("PUT", "/p", body={"something": "abcdef"})
        assert self.validator.validate(request) is None

    def test_bad(self) -> None:
        result = self.validator.validate(Request.build("PUT", "/p", body={"something": "a"}))
        assert result is not None
        assert result.errors == (
            _finding("minLength.openapi.validation", "body", "Must be at least 3 characters", "something"),
        )

    def test_missing_property(self) -> None:
        result = self.validator.validate(Request.build("PUT", "/p", body={}))
        assert result is not None
        assert result.errors == (
            _finding("required.openapi.validation", "body", "This field is required", "something"),
        )

    def test_optional_body_may_be_absent(self) -> None:
        assert self.validator.validate(Request.build("PUT", "/p")) is None

    def test_required_body_missing(self) -> None:
        validator = RequestValidator({"requestBody": {"required": True, "content": {"application/json": {}}}})
        result = validator.validate(Request.build("PUT", "/p"))
        assert result is not None
        assert result.errors == (
            _finding("required.openapi.validation", "body", "Request body is required", ""),
        )

    def test_schema_for_content_type(self) -> None:
        validator = RequestValidator({
            "requestBody": {
                "content": {
                    "application/json": {"schema": {"type": "object"}},
                    "text/plain": {"schema": {"type": "string"}},
                }
            }
        })
        request = Request.build("PUT", "/p", headers={"content-type": "text/plain; charset=utf-8"}, body="hi")
        assert validator.validate(request) is None


class TestValidateRequest:
    def test_no_parameters(self) -> None:
        assert validate_request({}, Request.build("GET", "/p")) is None

    def test_custom_status(self) -> None:
        operation = {"parameters": [{"in": "query", "name": "q", "required": True}]}
        result = validate_request(operation, Request.build("GET", "/p"), status=422)
        assert result is not None
        assert result.status == 422

    def test_unknown_location_is_ignored(self) -> None:
        operation = {"parameters": [{"in": "matrix", "name": "q", "required": True}]}
        assert validate_request(operation, Request.build("GET", "/p")) is None

    def test_findings_serialise(self) -> None:
        finding = _finding("minLength.openapi.validation", "path", "Must be at least 3 characters", "something")
        assert finding.to_dict() == {
            "errorCode": "minLength.openapi.validation",
            "location": "path",
            "message": "Must be at least 3 characters",
            "path": "something",
        }
