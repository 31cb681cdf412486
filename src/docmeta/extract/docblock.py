"""Comment blocks and the annotations they carry.

A comment block is one ``/** ... */`` span. Blocks are built once from their
final text and never change afterwards; a declaration is attached by building
a bound copy.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from typing import Any

from docmeta.core.errors import AnnotationError, CommentError
from docmeta.extract.annotation import Annotation
from docmeta.extract.declarations import Declaration, DeclarationKind

COMMENT_OPEN = "/**"
COMMENT_CLOSE = "*/"

# Any body line whose first non-decoration character is '@'; LF or CRLF endings
_ANNOTATION_LINE_RE = re.compile(r"^[ \t]*(?:\*[ \t]*)?(@[^\r\n]*?)\r?$", re.MULTILINE)


@dataclass(frozen=True, slots=True)
class CommentSpan:
    """Location of one comment in a larger text."""

    start: int
    end: int  # index just after the closing marker
    text: str


def find_comment(text: str, start: int = 0) -> CommentSpan | None:
    """Find the next ``/** ... */`` span at or after ``start``.

    Returns None when no opener remains.

    Raises:
        CommentError: If an opener has no matching closer.
    """
    open_at = text.find(COMMENT_OPEN, start)
    if open_at == -1:
        return None
    # "/**/" is an empty comment, so the closer may share the opener's star
    close_at = text.find(COMMENT_CLOSE, open_at + 2)
    if close_at == -1:
        raise CommentError.unterminated(open_at)
    end = close_at + len(COMMENT_CLOSE)
    return CommentSpan(start=open_at, end=end, text=text[open_at:end])


def _comment_body(raw: str) -> str:
    body = raw
    if body.startswith(COMMENT_OPEN):
        body = body[len(COMMENT_OPEN) :]
    if body.endswith(COMMENT_CLOSE):
        body = body[: -len(COMMENT_CLOSE)]
    return body


def _parse_annotations(
    raw: str,
) -> tuple[dict[str, tuple[Annotation, ...]], tuple[AnnotationError, ...]]:
    grouped: dict[str, list[Annotation]] = {}
    errors: list[AnnotationError] = []
    for match in _ANNOTATION_LINE_RE.finditer(_comment_body(raw)):
        try:
            annotation = Annotation.parse(match.group(1))
        except AnnotationError as e:
            errors.append(e)
            continue
        grouped.setdefault(annotation.name, []).append(annotation)
    return {name: tuple(items) for name, items in grouped.items()}, tuple(errors)


@dataclass(frozen=True)
class CommentBlock:
    """One comment span with its annotations grouped by name."""

    raw_comment: str
    annotations: dict[str, tuple[Annotation, ...]] = field(default_factory=dict)
    errors: tuple[AnnotationError, ...] = ()
    declaration: Declaration = field(default_factory=Declaration.none)
    start: int = 0
    end: int = 0

    @classmethod
    def from_comment(cls, raw_comment: str, *, start: int = 0) -> CommentBlock:
        """Build a block from the full text of one comment."""
        annotations, errors = _parse_annotations(raw_comment)
        return cls(
            raw_comment=raw_comment,
            annotations=annotations,
            errors=errors,
            start=start,
            end=start + len(raw_comment),
        )

    @classmethod
    def from_span(cls, text: str, start: int = 0) -> CommentBlock | None:
        """Build a block from the next comment at or after ``start``.

        Returns None when no comment remains. ``block.end`` is the index just
        after the comment close, for continued scanning.

        Raises:
            CommentError: If the next comment is never closed.
        """
        span = find_comment(text, start)
        if span is None:
            return None
        return cls.from_comment(span.text, start=span.start)

    # -- annotation queries ------------------------------------------------

    def has_annotations(self) -> bool:
        return bool(self.annotations)

    def has_annotation(self, name: str) -> bool:
        return name in self.annotations

    def get_annotation(self, name: str) -> list[Annotation]:
        """All annotations with this name, in source order. Empty if none."""
        return list(self.annotations.get(name, ()))

    def first_value(self, name: str) -> str | None:
        """Value of the first annotation with this name, or None."""
        found = self.annotations.get(name)
        return found[0].value if found else None

    def annotation_names(self) -> list[str]:
        return list(self.annotations)

    def ordered(self) -> list[Annotation]:
        """Every annotation, group by group in first-seen order."""
        return [annotation for group in self.annotations.values() for annotation in group]

    def __iter__(self) -> Iterator[Annotation]:
        return iter(self.ordered())

    def __len__(self) -> int:
        return sum(len(group) for group in self.annotations.values())

    # -- derived blocks ----------------------------------------------------

    def with_annotation(self, name: str, value: str = "", type: str = "") -> CommentBlock:
        """Return a copy with a system-supplied annotation appended."""
        annotation = Annotation.from_values(name, value=value, type=type)
        annotations = dict(self.annotations)
        annotations[name] = (*annotations.get(name, ()), annotation)
        return replace(self, annotations=annotations)

    def bind(self, declaration: Declaration) -> CommentBlock:
        """Return a copy attached to the declaration that follows it."""
        return replace(self, declaration=declaration)

    # -- declaration view --------------------------------------------------

    @property
    def declaration_kind(self) -> DeclarationKind:
        return self.declaration.kind

    @property
    def declaration_name(self) -> str:
        return self.declaration.name

    @property
    def super_type_name(self) -> str:
        return self.declaration.super_name

    @property
    def is_read_only(self) -> bool:
        return self.declaration.read_only

    def to_dict(self) -> dict[str, Any]:
        return {
            "declaration": self.declaration.to_dict(),
            "annotations": {
                name: [annotation.to_dict() for annotation in group]
                for name, group in self.annotations.items()
            },
        }
