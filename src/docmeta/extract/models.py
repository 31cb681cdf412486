"""Per-file metadata records assembled by the declaration scanner."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from docmeta.core.errors import DocMetaError
from docmeta.extract.docblock import CommentBlock


class EntryKind(StrEnum):
    """Kinds of documented members, in walk order."""

    CLASS = "class"
    PROPERTY = "property"
    METHOD = "method"


@dataclass
class PropertyDoc:
    """A documented accessor pair.

    read_only starts True when a getter is documented and turns False as soon
    as a documented setter is seen, whichever comes first in the file.
    """

    doc: CommentBlock
    read_only: bool


@dataclass(frozen=True, slots=True)
class MetadataEntry:
    kind: EntryKind
    name: str
    doc: CommentBlock


@dataclass
class FileMetadata:
    """Documented class, properties and methods of one source file."""

    file_name: str = ""
    class_name: str = ""
    class_extends: str = ""
    class_doc: CommentBlock | None = None
    methods: dict[str, CommentBlock] = field(default_factory=dict)
    properties: dict[str, PropertyDoc] = field(default_factory=dict)
    errors: list[DocMetaError] = field(default_factory=list)

    @property
    def has_class(self) -> bool:
        return self.class_doc is not None

    @property
    def is_empty(self) -> bool:
        return self.class_doc is None and not self.methods and not self.properties

    def method_names(self) -> list[str]:
        return list(self.methods)

    def for_method(self, name: str) -> CommentBlock | None:
        return self.methods.get(name)

    def property_names(self) -> list[str]:
        return list(self.properties)

    def for_property(self, name: str) -> PropertyDoc | None:
        return self.properties.get(name)

    # -- population (scanner side) -----------------------------------------

    def set_class(self, name: str, extends: str, doc: CommentBlock) -> bool:
        """Record the class declaration. Only the first one counts."""
        if self.class_doc is not None:
            return False
        self.class_name = name
        self.class_extends = extends
        self.class_doc = doc
        return True

    def add_method(self, name: str, doc: CommentBlock) -> None:
        self.methods[name] = doc

    def add_property(self, name: str, accessor: str, doc: CommentBlock) -> None:
        """Merge an accessor doc into the property entry of that name."""
        existing = self.properties.get(name)
        if existing is None:
            self.properties[name] = PropertyDoc(doc=doc, read_only=accessor == "get")
        elif accessor == "set":
            existing.read_only = False

    # -- views ---------------------------------------------------------------

    def entries(self) -> list[MetadataEntry]:
        """Class doc, then properties, then methods."""
        result: list[MetadataEntry] = []
        if self.class_doc is not None:
            result.append(MetadataEntry(EntryKind.CLASS, self.class_name, self.class_doc))
        for name, prop in self.properties.items():
            result.append(MetadataEntry(EntryKind.PROPERTY, name, prop.doc))
        for name, doc in self.methods.items():
            result.append(MetadataEntry(EntryKind.METHOD, name, doc))
        return result

    def to_dict(self) -> dict[str, Any]:
        return {
            "file_name": self.file_name,
            "class_name": self.class_name,
            "class_extends": self.class_extends,
            "class_doc": self.class_doc.to_dict() if self.class_doc else None,
            "properties": {
                name: {"read_only": prop.read_only, **prop.doc.to_dict()}
                for name, prop in self.properties.items()
            },
            "methods": {name: doc.to_dict() for name, doc in self.methods.items()},
            "errors": [error.to_dict() for error in self.errors],
        }
