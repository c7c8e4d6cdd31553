"""Data models for Tiddlyroam."""

from .document import Node, NodeKind
from .metadata import Metadata, LinkGraphRecord

__all__ = [
    "Node",
    "NodeKind",
    "Metadata",
    "LinkGraphRecord"
]
