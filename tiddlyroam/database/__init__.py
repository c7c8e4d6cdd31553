"""Link graph access for backlinks and id links."""

from .graph import LinkGraphIndex, RoamDatabase

__all__ = ["LinkGraphIndex", "RoamDatabase"]
