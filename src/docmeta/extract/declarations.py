"""Classify the declaration that follows a comment block.

This is a lexical heuristic, not a grammar. The text between a comment close
and the first top-level ``{`` is matched against class, accessor and method
signature shapes. Known blind spots: string literals holding parentheses or
braces, comments inside a signature, and computed member names.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

_IDENT = r"[A-Za-z_$][\w$]*"

# Class expressions may be assigned: module.exports = class A {, const A = class A {
_ASSIGN_PREFIX = rf"(?:(?:module\.exports|exports\.{_IDENT}|(?:const|let|var)\s+{_IDENT})\s*=\s*)"
_CLASS_RE = re.compile(
    rf"\A\s*(?:export\s+(?:default\s+)?|{_ASSIGN_PREFIX})?class\s+(?P<name>{_IDENT})"
    rf"(?:\s+extends\s+(?P<super>{_IDENT}(?:\.{_IDENT})*))?\s*\{{\Z"
)
_ACCESSOR_RE = re.compile(rf"\A\s*(?:static\s+)?(?P<accessor>get|set)\s+(?P<name>{_IDENT})\s*\(")
_METHOD_RE = re.compile(rf"\A\s*(?:(?:static|async)\s+)*(?:\*\s*)?(?P<name>{_IDENT})\s*\(")

# Statement keywords whose "name(...) {" shape is not a method
_NOT_METHODS = frozenset(
    ("if", "for", "while", "switch", "catch", "function", "with", "return")
)


class DeclarationKind(StrEnum):
    """What a comment block documents."""

    CLASS = "class"
    METHOD = "method"
    PROPERTY = "property"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class Declaration:
    """A classified declaration signature."""

    kind: DeclarationKind
    name: str = ""
    super_name: str = ""  # class only
    accessor: str = ""  # property only: "get" or "set"

    @classmethod
    def none(cls) -> Declaration:
        return cls(kind=DeclarationKind.NONE)

    @property
    def read_only(self) -> bool:
        return self.kind is DeclarationKind.PROPERTY and self.accessor == "get"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"kind": self.kind.value, "name": self.name}
        if self.kind is DeclarationKind.CLASS:
            data["extends"] = self.super_name
        elif self.kind is DeclarationKind.PROPERTY:
            data["accessor"] = self.accessor
        return data


def find_declaration_brace(text: str, start: int) -> int:
    """Index of the first ``{`` outside parentheses at or after ``start``.

    Braces inside a parameter list (destructuring, default objects) do not
    open the declaration body. Returns -1 when there is none.
    """
    depth = 0
    for index in range(start, len(text)):
        char = text[index]
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(depth - 1, 0)
        elif char == "{" and depth == 0:
            return index
    return -1


def classify(head: str) -> Declaration:
    """Classify the text that runs from a comment close to its opening brace.

    ``head`` must include the brace. Only whitespace may sit between the
    comment and the signature; anything else classifies as NONE.
    """
    match = _CLASS_RE.match(head)
    if match:
        return Declaration(
            kind=DeclarationKind.CLASS,
            name=match.group("name"),
            super_name=match.group("super") or "",
        )

    match = _ACCESSOR_RE.match(head)
    if match and _opens_body_after_params(head, match.end() - 1):
        return Declaration(
            kind=DeclarationKind.PROPERTY,
            name=match.group("name"),
            accessor=match.group("accessor"),
        )

    match = _METHOD_RE.match(head)
    if (
        match
        and match.group("name") not in _NOT_METHODS
        and _opens_body_after_params(head, match.end() - 1)
    ):
        return Declaration(kind=DeclarationKind.METHOD, name=match.group("name"))

    return Declaration.none()


def _opens_body_after_params(head: str, open_paren: int) -> bool:
    """True when the parameter list at ``open_paren`` is followed only by ``{``."""
    depth = 0
    for index in range(open_paren, len(head)):
        char = head[index]
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return head[index + 1 :].strip() == "{"
    return False
