from jsdepgraph.extractor import DEFAULT, FUNCTION, VARIABLE, extract, extract_calls, extract_exports, extract_imports


def test_keeps_only_relative_imports(parse):
    tree = parse(
        "import fs from 'fs';\n"
        "import React from 'react';\n"
        "import { a } from './a';\n"
        "import b from '../lib/b';\n"
        "import './side-effect';\n"
    )
    assert extract_imports(tree) == ["./a", "../lib/b", "./side-effect"]


def test_repeated_imports_are_kept(parse):
    tree = parse("import { a } from './a';\nimport { b } from './a';\n")
    assert extract_imports(tree) == ["./a", "./a"]


def test_reexports_and_import_equals_count_as_imports(parse):
    tree = parse(
        "export * from './all';\n"
        "export { one } from './one';\n"
        "export { pkg } from 'package';\n"
        "import legacy = require('./legacy');\n"
    )
    assert extract_imports(tree) == ["./all", "./one", "./legacy"]


def test_export_kinds(parse):
    tree = parse(
        "export function helper() {}\n"
        "export async function load() {}\n"
        "export const arrow = () => 1;\n"
        "export const expr = function () {};\n"
        "export const limit = 10;\n"
        "export let a = 1, b = () => 2;\n"
        "export class Service {}\n"
        "export interface Shape {}\n"
        "const main = () => 0;\n"
        "export default main;\n"
    )
    assert extract_exports(tree) == {
        "helper": FUNCTION,
        "load": FUNCTION,
        "arrow": FUNCTION,
        "expr": FUNCTION,
        "limit": VARIABLE,
        "a": VARIABLE,
        "b": FUNCTION,
        "Service": VARIABLE,
        "Shape": VARIABLE,
        "main": DEFAULT,
    }


def test_unexported_declarations_are_ignored(parse):
    tree = parse("function local() {}\nconst value = 1;\n")
    assert extract_exports(tree) == {}


def test_export_list_uses_local_kinds(parse):
    tree = parse(
        "export { run, config as settings };\n"
        "function run() {}\n"
        "const config = {};\n"
    )
    assert extract_exports(tree) == {"run": FUNCTION, "settings": VARIABLE}


def test_last_declaration_wins(parse):
    tree = parse("export const thing = 1;\nexport { thing as default2 };\nexport default thing;\n")
    exports = extract_exports(tree)
    assert exports["thing"] == DEFAULT


def test_call_shapes(parse):
    tree = parse(
        "foo();\n"
        "obj.method();\n"
        "a.b.c();\n"
        "this.save();\n"
        "handlers[name]();\n"
        "foo();\n"
        "import('./lazy');\n"
    )
    assert extract_calls(tree) == ["foo", "obj.method"]


def test_calls_inside_functions_and_arguments(parse):
    tree = parse(
        "export function render() {\n"
        "  return format(load(data));\n"
        "}\n"
        "const handler = () => logger.info('x');\n"
    )
    assert extract_calls(tree) == ["format", "load", "logger.info"]


def test_extract_combines_everything(parse):
    result = extract(parse("import { x } from './x';\nexport function y() { x(); }\n"))
    assert result.imports == ["./x"]
    assert result.exports == {"y": FUNCTION}
    assert result.calls == ["x"]
