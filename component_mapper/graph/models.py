#!/usr/bin/env python3
"""
Graph Model for Component Mapper

Node, link and graph containers produced by the row ingester and consumed by
the validator and the rendering layer.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

# Vocabularies are open: unknown values are tolerated and only flagged.
NODE_TYPES = ('service', 'interface', 'module', 'class', 'utility')
LINK_TYPES = ('dependency', 'implements', 'extends', 'uses')


@dataclass
class ComponentNode:
    """Represents a software unit in the component graph."""
    id: str
    name: str
    type: str
    description: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert node to dictionary format."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "description": self.description,
            "metadata": dict(self.metadata)
        }


@dataclass
class ComponentLink:
    """Represents a directed relationship between two nodes."""
    source: str
    target: str
    type: str
    label: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert link to dictionary format."""
        return {
            "source": self.source,
            "target": self.target,
            "type": self.type,
            "label": self.label,
            "metadata": dict(self.metadata)
        }


@dataclass
class GraphMetadata:
    """Descriptive information attached to a generated graph."""
    title: str = ""
    description: str = ""
    last_modified: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: str = "1.0.0"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "last_modified": self.last_modified.isoformat(),
            "version": self.version
        }


@dataclass
class ComponentGraph:
    """Complete component graph.

    ``nodes`` is keyed by node id; insertion order is kept so enumeration
    is deterministic. ``links`` keeps row encounter order and may contain
    duplicates and self loops.
    """
    nodes: Dict[str, ComponentNode] = field(default_factory=dict)
    links: List[ComponentLink] = field(default_factory=list)
    metadata: GraphMetadata = field(default_factory=GraphMetadata)

    def node_list(self) -> List[ComponentNode]:
        """Nodes in insertion order."""
        return list(self.nodes.values())

    def to_dict(self) -> Dict[str, Any]:
        """Convert graph to the JSON shape handed to the renderer."""
        return {
            "nodes": [node.to_dict() for node in self.nodes.values()],
            "links": [link.to_dict() for link in self.links],
            "metadata": self.metadata.to_dict()
        }


def get_field(item: Any, name: str) -> Any:
    """Read ``name`` from a mapping or an attribute-bearing object.

    Graphs may arrive as dataclasses or as decoded JSON; anything else
    reads as missing.
    """
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)
