"""
Tiddlyroam: exports outline notes to TiddlyWiki.

Converts parsed note trees into TiddlyWiki markup with frontmatter drawn
from the knowledge base's link graph and Git history.
"""

__version__ = "0.1.0"
__author__ = "Tiddlyroam Project"

# Import main components
from .config import ConfigManager
from .database import LinkGraphIndex, RoamDatabase
from .models import Node, NodeKind, Metadata, LinkGraphRecord
from .exporters import TiddlyExporter, NodeTranscoder, LinkRenderer, DocumentAssembler
from .versioning import VersionHistoryResolver, GitHistoryResolver

__all__ = [
    "ConfigManager",
    "LinkGraphIndex",
    "RoamDatabase",
    "Node",
    "NodeKind",
    "Metadata",
    "LinkGraphRecord",
    "TiddlyExporter",
    "NodeTranscoder",
    "LinkRenderer",
    "DocumentAssembler",
    "VersionHistoryResolver",
    "GitHistoryResolver"
]
