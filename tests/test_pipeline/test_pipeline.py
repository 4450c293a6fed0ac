"""Tests for whole-module processing."""

import json

import pytest

from styledpass import StyledOptions, transform_source
from styledpass.model.diagnostic import Severity


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _processor(result, name):
    for item in result.sites:
        if item.site.binding == name:
            return item.processor
    raise AssertionError(f"no call site bound to {name}")


def _codes(result):
    return [d.code for d in result.diagnostics]


TITLE = """\
const size = 12;
export const Title = styled.h1`
  font-size: ${size}px;
  color: ${props => props.color};
`;
"""

CHAIN = """\
const A = styled.div`color: red;`;
const B = styled(A)`color: blue;`;
const C = styled(B)`color: green;`;
"""


# ---------------------------------------------------------------------------
# Runtime mode
# ---------------------------------------------------------------------------


class TestRuntimeMode:
    def test_replaces_call_site_with_wrapper(self):
        result = transform_source(TITLE)
        title = _processor(result, "Title")
        var_id = f"{title.slug}-0"
        assert result.diagnostics == []
        assert result.code.startswith("const size = 12;\nexport const Title = styled('h1')({\n")
        assert '  name: "Title",\n' in result.code
        assert f'  class: "{title.class_name}",\n' in result.code
        assert "  propsAsIs: false,\n" in result.code
        assert f'    "{var_id}": [(() => props => props.color)()]\n' in result.code
        assert result.code.endswith("});\n")

    def test_extracts_css(self):
        result = transform_source(TITLE)
        title = _processor(result, "Title")
        [rule] = result.rules.values()
        assert rule.selector == f".{title.class_name}"
        assert "font-size: 12px;" in rule.css_text
        assert f"color: var(--{title.slug}-0);" in rule.css_text
        assert rule.start.line == 2
        assert result.css == f"{rule.selector} {{{rule.css_text}}}"

    def test_replacement_is_pure(self):
        result = transform_source(TITLE)
        assert _processor(result, "Title").replacement_is_pure

    def test_extends_chain(self):
        result = transform_source(CHAIN)
        a, b, c = (_processor(result, n).class_name for n in "ABC")
        assert list(result.rules) == [f".{a}", f".{b}.{a}", f".{c}.{b}.{a}"]
        assert result.dependencies == ["A", "B"]

    def test_styled_component_as_selector(self):
        source = "const A = styled.div``;\nconst B = styled.div`${A}:hover { color: red; }`;\n"
        result = transform_source(source)
        a = _processor(result, "A")
        b = _processor(result, "B")
        assert b.css_text == f".{a.class_name}:hover {{ color: red; }}"
        assert b.interpolations == []

    def test_string_constant_is_inlined(self):
        result = transform_source("const c = 'red';\nconst A = styled.p`color: ${c};`;\n")
        assert _processor(result, "A").css_text == "color: red;"

    def test_default_display_name_from_filename(self):
        result = transform_source("export default styled.div`color: red;`;\n", filename="src/Card.js")
        [item] = result.sites
        assert item.processor.display_name == "Card0"

    def test_custom_tag(self):
        result = transform_source("const A = css.div``;", options=StyledOptions(tag="css"))
        assert result.code.startswith("const A = css('div')({")


# ---------------------------------------------------------------------------
# Eval mode
# ---------------------------------------------------------------------------


class TestEvalMode:
    def test_replaces_with_metadata(self):
        result = transform_source(CHAIN, mode="eval")
        b = _processor(result, "B")
        assert '"displayName": "B"' in result.code
        assert f'"className": "{b.class_name}"' in result.code
        assert '"extends": A()' in result.code
        assert '"extends": null' in result.code
        assert not b.replacement_is_pure

    def test_extracts_rules(self):
        result = transform_source(CHAIN, mode="eval")
        a, b, c = (_processor(result, n).class_name for n in "ABC")
        assert list(result.rules) == [f".{a}", f".{b}.{a}", f".{c}.{b}.{a}"]
        assert result.rules[f".{c}.{b}.{a}"].css_text == "color: green;"
        assert result.css.startswith(f".{a} {{color: red;}}")

    def test_unknown_mode(self):
        with pytest.raises(ValueError, match="Unknown mode"):
            transform_source(CHAIN, mode="compile")


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------


class TestDiagnostics:
    def test_invalid_usage_leaves_site_untouched(self):
        source = "const Bad = styled(42)`color: red;`;\nconst Good = styled.a`color: blue;`;\n"
        result = transform_source(source)
        assert _codes(result) == ["invalid-usage"]
        assert result.has_errors
        assert result.diagnostics[0].loc.start.line == 1
        assert "styled(42)`color: red;`" in result.code
        assert "styled('a')({" in result.code
        assert len(result.rules) == 1

    def test_nan_interpolation(self):
        result = transform_source("const T = styled.div`width: ${NaN};`;\n")
        [diag] = result.diagnostics
        assert diag.code == "invalid-interpolation"
        assert diag.fix == "String(NaN)"
        assert result.code == "const T = styled.div`width: ${NaN};`;\n"

    def test_cyclic_extends(self):
        source = "const A = styled(B)`color: red;`;\nconst B = styled(A)`color: blue;`;\n"
        result = transform_source(source)
        assert _codes(result) == ["cyclic-extends-error", "cyclic-extends-error"]

    def test_parse_error_is_reported(self):
        source = "const A = styled(a,)`x`;\nconst B = styled.b``;\n"
        result = transform_source(source)
        assert _codes(result) == ["parse-error"]
        assert result.diagnostics[0].loc.start.line == 1
        assert "styled('b')({" in result.code

    def test_unscannable_module(self):
        source = "const A = styled.div`color: red;"
        result = transform_source(source)
        assert _codes(result) == ["parse-error"]
        assert result.code == source

    def test_already_processed_site_is_skipped(self):
        source = 'const X = styled("div")({ name: "X" });\n'
        result = transform_source(source)
        assert result.code == source
        assert result.diagnostics == []
        assert result.sites == []

    def test_unresolved_import_is_a_warning(self, tmp_path):
        (tmp_path / "package.json").write_text(json.dumps({"linaria": {"components": "src/**"}}))
        app = tmp_path / "src" / "App.js"
        app.parent.mkdir()
        source = 'import Missing from "./Missing";\nconst X = styled(Missing)`color: red;`;\n'
        app.write_text(source)
        result = transform_source(source, filename=str(app))
        [diag] = result.diagnostics
        assert diag.code == "unresolved-import"
        assert diag.severity is Severity.WARNING
        assert not result.has_errors
        assert _processor(result, "X").component.is_foreign

    def test_broken_manifest_is_a_warning(self, tmp_path):
        (tmp_path / "package.json").write_text(json.dumps({"name": "app"}))
        lib = tmp_path / "node_modules" / "lib"
        lib.mkdir(parents=True)
        (lib / "package.json").write_text("{not json")
        (lib / "index.js").write_text("export default 1;\n")
        app = tmp_path / "src" / "App.js"
        app.parent.mkdir()
        source = (
            'import L from "lib";\n'
            "const X = styled(L)`color: red;`;\n"
            "const Box = styled.div`color: blue;`;\n"
        )
        app.write_text(source)
        result = transform_source(source, filename=str(app))
        [diag] = result.diagnostics
        assert diag.code == "invalid-manifest"
        assert diag.severity is Severity.WARNING
        assert not result.has_errors
        assert _processor(result, "X").component.is_foreign
        box = _processor(result, "Box")
        assert result.rules[f".{box.class_name}"].css_text == "color: blue;"

    def test_relative_filename_resolves_own_package(self, tmp_path, monkeypatch):
        (tmp_path / "package.json").write_text(json.dumps({"name": "app"}))
        src = tmp_path / "src"
        src.mkdir()
        (src / "Button.js").write_text("export default 1;\n")
        source = 'import Button from "./Button";\nconst X = styled(Button)`color: red;`;\n'
        monkeypatch.chdir(tmp_path)
        result = transform_source(source, filename="src/App.js")
        assert result.diagnostics == []
        assert not _processor(result, "X").component.is_foreign
        assert result.dependencies == ["Button"]
