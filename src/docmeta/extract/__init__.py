"""Annotation and declaration extraction for a single source file."""

from docmeta.extract.annotation import Annotation
from docmeta.extract.declarations import (
    Declaration,
    DeclarationKind,
    classify,
    find_declaration_brace,
)
from docmeta.extract.docblock import (
    COMMENT_CLOSE,
    COMMENT_OPEN,
    CommentBlock,
    CommentSpan,
    find_comment,
)
from docmeta.extract.models import EntryKind, FileMetadata, MetadataEntry, PropertyDoc
from docmeta.extract.scanner import DeclarationScanner

__all__ = [
    "Annotation",
    "COMMENT_CLOSE",
    "COMMENT_OPEN",
    "CommentBlock",
    "CommentSpan",
    "Declaration",
    "DeclarationKind",
    "DeclarationScanner",
    "EntryKind",
    "FileMetadata",
    "MetadataEntry",
    "PropertyDoc",
    "classify",
    "find_comment",
    "find_declaration_brace",
]
