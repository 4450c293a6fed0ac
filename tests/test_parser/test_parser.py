"""Tests for locating and parsing styled call sites."""

import pytest

from styledpass.model.ast import Identifier, RawExpression
from styledpass.model.params import ValueType
from styledpass.parser import (
    ParseError,
    find_call_sites,
    parse_call_site,
    parse_constants,
    parse_imports,
)
from styledpass.parser.transformer import CallOp, MemberOp, parse_call_head


def _kinds(site):
    return tuple(p.kind for p in site.params)


# ---------------------------------------------------------------------------
# Call-site heads
# ---------------------------------------------------------------------------


class TestCallHead:
    def test_member(self):
        head = parse_call_head("styled.div")
        assert head.callee == "styled"
        assert head.ops == (MemberOp("div"),)

    def test_string_argument(self):
        [op] = parse_call_head("styled('a')").ops
        assert isinstance(op, CallOp)
        [arg] = op.args
        assert arg.kind is ValueType.CONST
        assert arg.value == "a"

    def test_identifier_argument(self):
        [arg] = parse_call_head("styled(Button)").ops[0].args
        assert arg.kind is ValueType.LAZY
        assert arg.is_identifier
        assert arg.source == "Button"

    @pytest.mark.parametrize(
        "text",
        [
            "styled(props => null)",
            "styled((props) => <div {...props} />)",
            "styled(function Box(props) { return null; })",
        ],
    )
    def test_function_argument(self, text):
        [arg] = parse_call_head(text).ops[0].args
        assert arg.kind is ValueType.FUNCTION

    def test_function_argument_source_is_kept(self):
        [arg] = parse_call_head("styled((p) => p.x)").ops[0].args
        assert arg.source == "(p) => p.x"

    def test_expression_argument(self):
        [arg] = parse_call_head("styled(ui.Button)").ops[0].args
        assert arg.kind is ValueType.LAZY
        assert not arg.is_identifier

    def test_number_argument(self):
        [arg] = parse_call_head("styled(42)").ops[0].args
        assert arg.kind is ValueType.CONST
        assert arg.value == 42.0

    def test_several_arguments_and_calls(self):
        head = parse_call_head("styled('a')({ name: 'x', vars: [1, 2] })")
        assert len(head.ops) == 2
        assert all(isinstance(op, CallOp) for op in head.ops)

    def test_syntax_error(self):
        with pytest.raises(ParseError):
            parse_call_head("styled(a,)")


# ---------------------------------------------------------------------------
# parse_call_site
# ---------------------------------------------------------------------------


class TestParseCallSite:
    def test_member_site(self):
        site = parse_call_site("styled.div`color: red;`")
        assert _kinds(site) == ("callee", "member", "template")
        assert site.params[0].node == Identifier("styled")
        assert site.params[1].name == "div"
        assert site.params[2].template.quasis[0].value == "color: red;"

    def test_string_site(self):
        site = parse_call_site('styled("a")`x`')
        [value] = site.params[1].args
        assert value.kind is ValueType.CONST
        assert value.value == "a"

    def test_imported_reference(self):
        site = parse_call_site("styled(Button)``", imports={"Button": ["./Button"]})
        [value] = site.params[1].args
        assert value.ex == Identifier("Button")
        assert value.imported_from == ("./Button",)

    def test_local_reference(self):
        site = parse_call_site("styled(Button)``", imports={})
        assert site.params[1].args[0].imported_from == ()

    def test_function_site(self):
        site = parse_call_site("styled(props => null)``")
        assert site.params[1].args[0].kind is ValueType.FUNCTION

    def test_template_expressions(self):
        site = parse_call_site("styled.div`color: ${c}; width: ${w}px;`")
        template = site.params[2].template
        assert [q.value for q in template.quasis] == ["color: ", "; width: ", "px;"]
        assert template.expressions == (RawExpression("c"), RawExpression("w"))

    def test_nested_template_in_expression(self):
        site = parse_call_site('styled.div`a: ${x ? `b${y}` : "}"};`')
        [expr] = site.params[2].template.expressions
        assert expr.source == 'x ? `b${y}` : "}"'

    def test_expression_location(self):
        site = parse_call_site("styled.div`\n  color: ${c};`")
        [expr] = site.params[2].template.expressions
        assert expr.loc.start.line == 2
        assert expr.loc.start.column == 11

    def test_transformed_site(self):
        site = parse_call_site("styled('a')({ name: \"x\" })")
        assert _kinds(site) == ("callee", "call", "call")

    def test_requires_exactly_one_site(self):
        with pytest.raises(ParseError):
            parse_call_site("styled.a`` ; styled.b``")

    def test_custom_tag(self):
        site = parse_call_site("css.div``", tag="css")
        assert site.params[0].node == Identifier("css")


# ---------------------------------------------------------------------------
# find_call_sites
# ---------------------------------------------------------------------------


SOURCE = '''\
import { Button } from "./Button";
// styled.span`not a site`
const note = "styled.p`also not a site`";
export const Title = styled.h1`
  font-size: 2em;
`;
const Link = styled(Button)`color: ${p => p.color};`;
const call = styled(Button);
'''


class TestFindCallSites:
    def test_skips_strings_comments_and_plain_calls(self):
        sites = find_call_sites(SOURCE)
        assert [s.binding for s in sites] == ["Title", "Link"]

    def test_indexes_and_locations(self):
        sites = find_call_sites(SOURCE, filename="App.js")
        assert [s.idx for s in sites] == [0, 1]
        assert sites[0].loc.start.line == 4
        assert sites[0].loc.filename == "App.js"
        assert str(sites[0].loc).startswith("App.js:4:")

    def test_text_is_the_exact_span(self):
        sites = find_call_sites(SOURCE)
        assert sites[1].text == "styled(Button)`color: ${p => p.color};`"
        assert SOURCE[sites[1].start:sites[1].end] == sites[1].text

    def test_imports_default_to_module_imports(self):
        link = find_call_sites(SOURCE)[1]
        assert link.params[1].args[0].imported_from == ("./Button",)

    def test_member_named_like_tag_is_ignored(self):
        assert find_call_sites("theme.styled.div``") == []

    def test_site_without_binding(self):
        [site] = find_call_sites("export default styled.div``;")
        assert site.binding is None

    def test_typed_binding(self):
        [site] = find_call_sites("const Box: StyledComponent = styled.div``;")
        assert site.binding == "Box"

    def test_bad_head_raises_with_position(self):
        with pytest.raises(ParseError) as exc_info:
            find_call_sites("\nconst A = styled(a,)`x`;", filename="A.js")
        assert exc_info.value.line == 2

    def test_bad_head_is_reported_and_skipped(self):
        errors = []
        sites = find_call_sites(
            "const A = styled(a,)`x`;\nconst B = styled.b``;", on_error=errors.append
        )
        assert [s.binding for s in sites] == ["B"]
        assert len(errors) == 1

    def test_unterminated_template(self):
        with pytest.raises(ParseError, match="Unterminated"):
            find_call_sites("styled.div`color: red;")


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


class TestParseImports:
    def test_default_and_named(self):
        imports = parse_imports('import Button, { Link as A, Card } from "./ui";')
        assert imports == {"Button": ["./ui"], "A": ["./ui"], "Card": ["./ui"]}

    def test_namespace(self):
        assert parse_imports("import * as kit from 'ui-kit';") == {"kit": ["ui-kit"]}

    def test_type_import(self):
        assert parse_imports("import type { Props } from './types';") == {"Props": ["./types"]}

    def test_require(self):
        imports = parse_imports(
            "const { Box, Flex: F } = require('layout');\nconst lib = require(\"lib\");"
        )
        assert imports == {"Box": ["layout"], "F": ["layout"], "lib": ["lib"]}

    def test_name_imported_twice_keeps_every_source(self):
        imports = parse_imports("import A from './a';\nimport { A } from './b';")
        assert imports == {"A": ["./a", "./b"]}


class TestParseConstants:
    def test_numbers_and_strings(self):
        source = "const size = 12;\nexport const color = 'red';\nlet ratio = 1.5\n"
        assert parse_constants(source) == {"size": "12", "color": "'red'", "ratio": "1.5"}

    def test_ignores_expressions(self):
        assert parse_constants("const size = base * 2;") == {}
