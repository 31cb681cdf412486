"""Doc-comment metadata extraction for class-based JavaScript sources."""

from docmeta.collect import CollectionResult, CollectorEvent, CollectorState, TreeCollector
from docmeta.extract import Annotation, CommentBlock, DeclarationScanner, FileMetadata

__version__ = "0.1.0"

__all__ = [
    "Annotation",
    "CollectionResult",
    "CollectorEvent",
    "CollectorState",
    "CommentBlock",
    "DeclarationScanner",
    "FileMetadata",
    "TreeCollector",
    "__version__",
]
