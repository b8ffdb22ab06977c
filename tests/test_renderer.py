import pytest

from codegen import ModuleRenderer, RenderOptions, quote_string, render_export, render_import
from specifiers import (
    ExportDeclaration,
    ImportDeclaration,
    InvalidNodeError,
    SourceClause,
    Specifier,
    SpecifierKind,
)

DEFAULT = SpecifierKind.DEFAULT
NAMESPACE = SpecifierKind.NAMESPACE


def _import(*specifiers, source="mod"):
    clause = SourceClause(value=source) if source is not None else None
    return ImportDeclaration(specifiers=tuple(specifiers), source=clause)


def _declaration_renderer(node):
    return f"function {node['name']}() {{}}"


def _expression_renderer(node):
    return str(node["value"])


def test_import_single_specifier():
    node = _import(Specifier("a", "a"))
    assert render_import(node) == 'import {a} from "mod";'


def test_import_renamed_and_plain_specifiers():
    node = _import(Specifier("a", "b"), Specifier("c", "c"))
    assert render_import(node) == 'import {a as b,c} from "mod";'


def test_import_default_and_namespace_shortcut():
    node = _import(Specifier("*default*", "x", DEFAULT), Specifier("*", "y", NAMESPACE))
    assert render_import(node) == 'import x, * as y from "mod";'


def test_import_namespace_and_default_shortcut():
    node = _import(Specifier("*", "y", NAMESPACE), Specifier("*default*", "x", DEFAULT))
    assert render_import(node) == 'import * as y, x from "mod";'


def test_import_default_only():
    node = _import(Specifier("x", "x", DEFAULT))
    assert render_import(node) == 'import x from "mod";'


def test_import_namespace_only():
    node = _import(Specifier("*", "ns", NAMESPACE))
    assert render_import(node) == 'import * as ns from "mod";'


def test_import_default_followed_by_brace_list_uses_remaining_specifiers():
    node = _import(
        Specifier("x", "x", DEFAULT), Specifier("a", "a"), Specifier("b", "c")
    )
    assert render_import(node) == 'import x, {a,b as c} from "mod";'


def test_import_namespace_followed_by_brace_list():
    node = _import(Specifier("*", "ns", NAMESPACE), Specifier("a", "a"))
    assert render_import(node) == 'import * as ns, {a} from "mod";'


@pytest.mark.parametrize(
    "node",
    [
        _import(),
        _import(Specifier("a", "a"), source=None),
        _import(Specifier("a", "a"), Specifier("x", "x", DEFAULT)),
        _import(
            Specifier("x", "x", DEFAULT),
            Specifier("*", "y", NAMESPACE),
            Specifier("a", "a"),
        ),
    ],
)
def test_import_rejects_invalid_nodes(node):
    with pytest.raises(InvalidNodeError):
        render_import(node)


def test_export_all():
    node = ExportDeclaration(
        specifiers=(Specifier("*", "*", NAMESPACE),), source=SourceClause(value="mod")
    )
    assert render_export(node) == 'export * from "mod";'


def test_export_all_with_namespace_name():
    node = ExportDeclaration(
        specifiers=(Specifier("*", "ns", NAMESPACE),), source=SourceClause(value="mod")
    )
    assert render_export(node) == 'export * as ns from "mod";'


def test_export_brace_list_without_source():
    node = ExportDeclaration(specifiers=(Specifier("a", "a"), Specifier("b", "c")))
    assert render_export(node) == "export {a,b as c};"


def test_export_brace_list_with_source_has_single_terminator():
    node = ExportDeclaration(
        specifiers=(Specifier("a", "a"),), source=SourceClause(value="mod")
    )
    assert render_export(node) == 'export {a} from "mod";'


def test_export_declaration_uses_declaration_renderer():
    node = ExportDeclaration(specifiers=(), declaration={"name": "f"})
    rendered = render_export(node, render_declaration=_declaration_renderer)
    assert rendered == "export function f() {};"


def test_export_default_uses_expression_renderer():
    node = ExportDeclaration(
        specifiers=(Specifier("default", "default", DEFAULT),),
        declaration={"value": 5},
    )
    rendered = render_export(node, render_expression=_expression_renderer)
    assert rendered == "export default " + _expression_renderer({"value": 5}) + ";"


def test_export_default_flag_without_specifiers():
    node = ExportDeclaration(specifiers=(), declaration={"value": 5}, default=True)
    assert render_export(node, render_expression=_expression_renderer) == "export default 5;"


def test_export_declaration_without_renderer_is_rejected():
    node = ExportDeclaration(specifiers=(), declaration={"name": "f"})
    with pytest.raises(InvalidNodeError):
        render_export(node)


@pytest.mark.parametrize(
    "node",
    [
        ExportDeclaration(specifiers=()),
        ExportDeclaration(specifiers=(Specifier("a", "a"),), declaration={"name": "f"}),
        ExportDeclaration(specifiers=(Specifier("*", "*", NAMESPACE),)),
        ExportDeclaration(specifiers=(Specifier("a", "a"), Specifier("*", "*", NAMESPACE))),
        ExportDeclaration(specifiers=(Specifier("x", "x", DEFAULT),)),
    ],
)
def test_export_rejects_invalid_nodes(node):
    with pytest.raises(InvalidNodeError):
        render_export(node, render_declaration=_declaration_renderer)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("mod", '"mod"'),
        ("", '""'),
        ("it's", '"it\'s"'),
        ('say "hi"', "'say \"hi\"'"),
        ("it's \"ok\"", '"it\'s \\"ok\\""'),
        ("a'b\"c", '"a\'b\\"c"'),
        ("a\"b\"c'", '"a\\"b\\"c\'"'),
        ("back\\slash", '"back\\\\slash"'),
        ("line\nbreak", '"line\\nbreak"'),
    ],
)
def test_quote_string(value, expected):
    assert quote_string(value) == expected


def test_raw_source_clause_is_emitted_verbatim():
    node = ImportDeclaration(
        specifiers=(Specifier("a", "a"),), source=SourceClause(value="mod", raw=" from 'mod';")
    )
    assert render_import(node) == "import {a} from 'mod';"


def test_module_renderer_skips_other_statements():
    program = {
        "type": "Program",
        "body": [
            {
                "type": "VariableDeclaration",
                "loc": {"start": {"line": 1, "column": 0}},
            },
            {
                "type": "ImportDeclaration",
                "specifiers": [{"id": {"name": "a"}, "name": None, "type": "ImportSpecifier"}],
                "source": {"value": "mod"},
            },
        ],
    }
    result = ModuleRenderer(RenderOptions(dialect="acorn")).render_program(program)
    assert result.statements == ['import {a} from "mod";']
    assert result.diagnostics == [
        "Skipped non-module statement: VariableDeclaration (line 1, column 0)"
    ]
    assert result.source == 'import {a} from "mod";\n'


def test_module_renderer_rejects_unknown_statement():
    renderer = ModuleRenderer()
    with pytest.raises(InvalidNodeError) as excinfo:
        renderer.render_statement(
            {"type": "IfStatement", "loc": {"start": {"line": 3, "column": 2}}}
        )
    assert "line 3, column 2" in str(excinfo.value)


def test_module_renderer_rejects_non_mapping_statement():
    with pytest.raises(InvalidNodeError, match="got NoneType"):
        ModuleRenderer().render_program({"type": "Program", "body": [None]})


def test_module_renderer_requires_program():
    with pytest.raises(InvalidNodeError):
        ModuleRenderer().render_program({"type": "Module"})
