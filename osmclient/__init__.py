"""
osmclient - OpenStreetMap API v0.6 client

Fetches nodes, ways, relations, changesets and map extracts, and resolves
complete ways and relations into linked object graphs.

Usage:
    from osmclient import OSMClient
    client = OSMClient()
    relation = client.get_complete_relation(62422)
"""

from .config import APIConfig, ClientConfig, get_config, validate_config, setup_logging
from .errors import OSMClientError, ValidationError, TransportError, ParseError, ResolutionError
from .models import Capabilities, Changeset, ChangesetComment
from .osm import (
    Bounds, Node, Way, Relation, Member,
    CompleteNode, CompleteWay, CompleteRelation, CompleteMember,
    OSMDocument, OSMChange, OSMClient,
)

__version__ = "0.1.0"

__all__ = [
    "APIConfig",
    "ClientConfig",
    "get_config",
    "validate_config",
    "setup_logging",
    "OSMClientError",
    "ValidationError",
    "TransportError",
    "ParseError",
    "ResolutionError",
    "Capabilities",
    "Changeset",
    "ChangesetComment",
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
    "OSMClient",
]
