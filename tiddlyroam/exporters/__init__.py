"""Exporters turning document trees into wiki markup."""

from .assembler import DocumentAssembler
from .links import LinkRenderer
from .metadata import MetadataResolver
from .tiddly import TiddlyExporter
from .transcoder import ExportContext, NodeTranscoder

__all__ = [
    "DocumentAssembler",
    "LinkRenderer",
    "MetadataResolver",
    "TiddlyExporter",
    "ExportContext",
    "NodeTranscoder"
]
