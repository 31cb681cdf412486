"""Pair comment blocks with the declarations they document.

The scanner walks one file's text once, from left to right:

1. Find the next ``/** ... */`` block from the cursor. None left: done.
2. A block without annotations is skipped.
3. Otherwise classify the text between the block and the next top-level
   ``{``. NONE: resume right after the comment, because that brace may open
   an unrelated inner block that holds further comments.
4. Record the class, property or method and resume after the brace.

An unterminated comment stops the scan; everything found before it is kept.
"""

from __future__ import annotations

import structlog

from docmeta.core.errors import CommentError
from docmeta.extract.declarations import (
    Declaration,
    DeclarationKind,
    classify,
    find_declaration_brace,
)
from docmeta.extract.docblock import CommentBlock
from docmeta.extract.models import FileMetadata

log = structlog.get_logger(__name__)


class DeclarationScanner:
    """Builds FileMetadata from the text of one source file."""

    def scan(self, text: str, file_name: str = "") -> FileMetadata:
        """Scan ``text`` and return the finished metadata record."""
        metadata = FileMetadata(file_name=file_name)
        cursor = 0

        while True:
            try:
                block = CommentBlock.from_span(text, cursor)
            except CommentError as e:
                error = e.for_file(file_name)
                metadata.errors.append(error)
                log.warning(
                    "unterminated_comment",
                    file=file_name,
                    offset=error.details.get("offset"),
                )
                break

            if block is None:
                break

            if not block.has_annotations():
                cursor = block.end
                continue

            brace = find_declaration_brace(text, block.end)
            declaration = (
                classify(text[block.end : brace + 1]) if brace != -1 else Declaration.none()
            )
            cursor = self._record(metadata, block.bind(declaration), brace)

        return metadata

    def _record(self, metadata: FileMetadata, block: CommentBlock, brace: int) -> int:
        """Store a classified block and return where scanning resumes."""
        declaration = block.declaration
        match declaration.kind:
            case DeclarationKind.NONE:
                log.debug("comment_skipped", file=metadata.file_name, offset=block.start)
                return block.end
            case DeclarationKind.CLASS:
                if not metadata.set_class(declaration.name, declaration.super_name, block):
                    log.debug(
                        "extra_class_ignored",
                        file=metadata.file_name,
                        name=declaration.name,
                    )
            case DeclarationKind.PROPERTY:
                metadata.add_property(declaration.name, declaration.accessor, block)
            case DeclarationKind.METHOD:
                metadata.add_method(declaration.name, block)

        metadata.errors.extend(block.errors)
        return brace + 1
