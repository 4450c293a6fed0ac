"""Tests for JavaScript code generation."""

import pytest

from styledpass.codegen import generate
from styledpass.model.ast import (
    ArrayExpression,
    ArrowFunctionExpression,
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    Identifier,
    MemberExpression,
    NullLiteral,
    NumericLiteral,
    ObjectExpression,
    ObjectProperty,
    RawExpression,
    StringLiteral,
    TemplateElement,
    TemplateLiteral,
)


class TestLiterals:
    @pytest.mark.parametrize(
        "node, expected",
        [
            (Identifier("x"), "x"),
            (StringLiteral("a"), '"a"'),
            (StringLiteral("it's", quote="'"), "'it\\'s'"),
            (StringLiteral('say "hi"'), '"say \\"hi\\""'),
            (NumericLiteral(3.0), "3"),
            (NumericLiteral(1.5), "1.5"),
            (BooleanLiteral(False), "false"),
            (NullLiteral(), "null"),
            (RawExpression("  a + b "), "a + b"),
        ],
    )
    def test_leaf(self, node, expected):
        assert generate(node) == expected


class TestExpressions:
    def test_member(self):
        assert generate(MemberExpression(Identifier("styled"), Identifier("div"))) == "styled.div"

    def test_call(self):
        node = CallExpression(Identifier("f"), (Identifier("a"), StringLiteral("b")))
        assert generate(node) == 'f(a, "b")'

    def test_arrow_callee_is_parenthesized(self):
        node = CallExpression(ArrowFunctionExpression((), RawExpression("props.color")))
        assert generate(node) == "(() => props.color)()"

    def test_complex_raw_callee_is_parenthesized(self):
        node = CallExpression(RawExpression("a || b"))
        assert generate(node) == "(a || b)()"

    def test_dotted_raw_callee(self):
        node = CallExpression(RawExpression("theme.fn"))
        assert generate(node) == "theme.fn()"

    def test_arrow_with_params(self):
        node = ArrowFunctionExpression((Identifier("a"), Identifier("b")), Identifier("a"))
        assert generate(node) == "(a, b) => a"

    def test_arrow_object_body(self):
        node = ArrowFunctionExpression((), ObjectExpression(()))
        assert generate(node) == "() => ({})"

    def test_empty_block(self):
        assert generate(ArrowFunctionExpression((), BlockStatement())) == "() => {}"

    def test_array(self):
        assert generate(ArrayExpression((NumericLiteral(1.0), StringLiteral("px")))) == '[1, "px"]'

    def test_template(self):
        node = TemplateLiteral(
            (TemplateElement("a "), TemplateElement(" b")),
            (Identifier("x"),),
        )
        assert generate(node) == "`a ${x} b`"

    def test_template_shape_is_checked(self):
        with pytest.raises(ValueError):
            TemplateLiteral((TemplateElement("a"),), (Identifier("x"),))


class TestObjects:
    def test_empty(self):
        assert generate(ObjectExpression(())) == "{}"

    def test_nested_objects_are_indented(self):
        node = ObjectExpression((
            ObjectProperty(Identifier("a"), NumericLiteral(1.0)),
            ObjectProperty(
                StringLiteral("b"),
                ObjectExpression((ObjectProperty(Identifier("c"), NullLiteral()),)),
            ),
        ))
        assert generate(node) == '{\n  a: 1,\n  "b": {\n    c: null\n  }\n}'

    def test_lookup_by_key(self):
        node = ObjectExpression((ObjectProperty(StringLiteral("k"), Identifier("v")),))
        assert node.get("k") == Identifier("v")


class TestUnknownNodes:
    def test_unsupported_node_raises(self):
        with pytest.raises(TypeError):
            generate(object())  # type: ignore[arg-type]
