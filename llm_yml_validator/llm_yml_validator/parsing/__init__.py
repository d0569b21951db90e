"""Document loading for YAML and JSON input files."""

from .document_parser import DocumentParser, document_parser

__all__ = ["DocumentParser", "document_parser"]
