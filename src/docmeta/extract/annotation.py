"""Annotation phrase parsing.

An annotation phrase is a single comment line of the form

    @name [{type}] [value...]

The leading comment decoration (``*``, ``/**`` and whitespace) is tolerated,
so raw lines can be handed over as they appear in the source.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from docmeta.core.errors import AnnotationError

# Optional comment decoration, then @name and the rest of the line
_PHRASE_RE = re.compile(r"^\s*(?:/\*\*|\*)?\s*@(?P<name>[A-Za-z_$][\w$]*)(?P<rest>.*)$", re.DOTALL)
_NAME_RE = re.compile(r"^[A-Za-z_$][\w$]*$")
_COMMENT_CLOSE = "*/"


def _split_type(rest: str) -> tuple[str, str]:
    """Split the text after the name into (type, value).

    The type is the balanced brace group starting at the first non-blank
    character. Without a balancing close brace the whole rest is the value.
    """
    stripped = rest.strip()
    if not stripped.startswith("{"):
        return "", stripped

    depth = 0
    for index, char in enumerate(stripped):
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return stripped[1:index].strip(), stripped[index + 1 :].strip()
    return "", stripped


@dataclass(frozen=True, slots=True)
class Annotation:
    """One parsed ``@name {type} value`` tag."""

    name: str
    type: str = ""
    value: str = ""

    @classmethod
    def parse(cls, phrase: str) -> Annotation:
        """Parse a single annotation phrase.

        Raises:
            AnnotationError: If the phrase has no ``@identifier``.
        """
        match = _PHRASE_RE.match(phrase)
        if match is None:
            raise AnnotationError.malformed(phrase)

        rest = match.group("rest")
        # A one-line comment may end on the same line as its annotation
        close = rest.rfind(_COMMENT_CLOSE)
        if close != -1 and not rest[close + len(_COMMENT_CLOSE) :].strip():
            rest = rest[:close]

        type_, value = _split_type(rest)
        return cls(name=match.group("name"), type=type_, value=value)

    @classmethod
    def from_values(cls, name: str, value: str = "", type: str = "") -> Annotation:
        """Build an annotation from data instead of a phrase.

        Useful for attaching system data the author did not write.
        """
        if not _NAME_RE.match(name):
            raise AnnotationError.malformed(f"@{name}")
        return cls(name=name, type=type.strip(), value=value.strip())

    @property
    def phrase(self) -> str:
        """Rebuild the canonical ``@name {type} value`` phrase."""
        parts = [f"@{self.name}"]
        if self.type:
            parts.append(f"{{{self.type}}}")
        if self.value:
            parts.append(self.value)
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "type": self.type, "value": self.value}

    def __str__(self) -> str:
        return self.phrase
