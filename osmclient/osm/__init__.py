"""
OpenStreetMap API v0.6 access

Modular client with separate components for:
- Models: Flat elements (Node, Way, Relation) and complete entities
- Parser: Streaming OSM XML parsing
- Resolver: Complete way/relation graph building
- Transport: HTTP GET against the API
- Query: Bounds validation and changeset query strings
- Client: Main entry point
"""

from .models import (
    Bounds, Node, Way, Relation, Member,
    CompleteNode, CompleteWay, CompleteRelation, CompleteMember,
    OSMDocument, OSMChange,
)
from .parser import OSMXMLParser
from .resolver import CompleteEntityResolver
from .transport import HTTPTransport
from .query import ChangesetQuery, validate_bounds, format_bbox
from .client import OSMClient

__all__ = [
    "Bounds",
    "Node",
    "Way",
    "Relation",
    "Member",
    "CompleteNode",
    "CompleteWay",
    "CompleteRelation",
    "CompleteMember",
    "OSMDocument",
    "OSMChange",
    "OSMXMLParser",
    "CompleteEntityResolver",
    "HTTPTransport",
    "ChangesetQuery",
    "validate_bounds",
    "format_bbox",
    "OSMClient",
]
