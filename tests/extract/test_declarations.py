"""Tests for declaration classification."""

import pytest

from docmeta.extract.declarations import (
    Declaration,
    DeclarationKind,
    classify,
    find_declaration_brace,
)


class TestFindDeclarationBrace:
    """find_declaration_brace tests."""

    def test_given_plain_signature_then_first_brace(self) -> None:
        assert find_declaration_brace("\n  render() {\n}", 0) == 12

    def test_given_braces_in_parameters_then_skipped(self) -> None:
        text = "foo({a} = {}) {"

        assert find_declaration_brace(text, 0) == 14

    def test_given_no_brace_then_minus_one(self) -> None:
        assert find_declaration_brace("const x = 1;", 0) == -1

    def test_given_start_offset_then_search_begins_there(self) -> None:
        assert find_declaration_brace("{ a {", 1) == 4


class TestClassify:
    """classify tests."""

    @pytest.mark.parametrize(
        ("head", "name", "super_name"),
        [
            ("\nclass Mock extends BaseMock {", "Mock", "BaseMock"),
            ("\n export default class Mock extends Base.Mock {", "Mock", "Base.Mock"),
            ("\nexport class Plain\n{", "Plain", ""),
            ("\nmodule.exports = class Widget extends Base {", "Widget", "Base"),
            ("\nexports.Widget = class Widget {", "Widget", ""),
            ("\nconst Widget = class Widget extends ui.Base {", "Widget", "ui.Base"),
        ],
    )
    def test_given_class_head_then_class(self, head: str, name: str, super_name: str) -> None:
        assert classify(head) == Declaration(kind=DeclarationKind.CLASS, name=name, super_name=super_name)

    @pytest.mark.parametrize(
        ("head", "name", "accessor"),
        [
            ("\n    get readOnlyProperty() {", "readOnlyProperty", "get"),
            ("\n    set value(v) {", "value", "set"),
            ("\n    static get instance() {", "instance", "get"),
        ],
    )
    def test_given_accessor_head_then_property(self, head: str, name: str, accessor: str) -> None:
        assert classify(head) == Declaration(kind=DeclarationKind.PROPERTY, name=name, accessor=accessor)

    @pytest.mark.parametrize(
        ("head", "name"),
        [
            ("\n    render(options) {", "render"),
            ("\n    static create() {", "create"),
            ("\n    async load({ id, name }) {", "load"),
            ("\n    *items() {", "items"),
            ("\n    async *stream(a, b = fn(1)) {", "stream"),
            ("\n    get() {", "get"),
            ("\n    $emit(name,\n          payload) {", "$emit"),
        ],
    )
    def test_given_method_head_then_method(self, head: str, name: str) -> None:
        assert classify(head) == Declaration(kind=DeclarationKind.METHOD, name=name)

    @pytest.mark.parametrize(
        "head",
        [
            "\n    if (ready) {",
            "\n    for (const a of list) {",
            "\n    while (true) {",
            "\n    switch (kind) {",
            "\n    function helper() {",
            "\n    const x = 1;\n    foo() {",
            "\n    doThing();\n}\n    bar() {",
            "\n    return {",
            "\n    const config = {",
        ],
    )
    def test_given_non_declaration_head_then_none(self, head: str) -> None:
        assert classify(head).kind is DeclarationKind.NONE


class TestDeclaration:
    """Declaration value tests."""

    def test_only_getter_is_read_only(self) -> None:
        assert Declaration(kind=DeclarationKind.PROPERTY, name="a", accessor="get").read_only
        assert not Declaration(kind=DeclarationKind.PROPERTY, name="a", accessor="set").read_only
        assert not Declaration(kind=DeclarationKind.METHOD, name="get").read_only

    def test_none_factory(self) -> None:
        assert Declaration.none() == Declaration(kind=DeclarationKind.NONE)

    def test_to_dict_by_kind(self) -> None:
        assert Declaration(kind=DeclarationKind.METHOD, name="run").to_dict() == {"kind": "method", "name": "run"}
        assert Declaration(kind=DeclarationKind.PROPERTY, name="a", accessor="set").to_dict() == {
            "kind": "property",
            "name": "a",
            "accessor": "set",
        }
