"""
OSM API client

Public entry points composing the transport, parser and resolver:
GET request -> flat element stream -> (complete fetches only) resolver
"""

from datetime import datetime
from typing import Optional, Sequence, Type, TypeVar

from loguru import logger

from ..config import ClientConfig, check_base_url, get_config, validate_config
from ..errors import ResolutionError, ValidationError
from ..models import Capabilities, Changeset
from .models import (
    Bounds, CompleteRelation, CompleteWay, ElementType, Node, OSMChange, OSMDocument, Relation, Way
)
from .parser import OSMXMLParser
from .query import ChangesetQuery, format_bbox, validate_bounds
from .resolver import CompleteEntityResolver
from .transport import AuthHook, HTTPTransport

T = TypeVar("T")


class OSMClient:
    """
    Client for the OpenStreetMap API v0.6

    Each call is an independent request; the client only holds its
    configuration, so one instance can be shared between threads.

    Usage:
        client = OSMClient("https://master.apis.dev.openstreetmap.org/api/")
        way = client.get_complete_way(123)
        coords = way.get_coordinates()
    """

    def __init__(
        self,
        base_address: Optional[str] = None,
        auth: Optional[AuthHook] = None,
        transport=None,
        config: Optional[ClientConfig] = None
    ):
        self.config = config or get_config()
        validate_config(self.config)
        base = base_address or self.config.api.base_url
        base_url_error = check_base_url(base)
        if base_url_error:
            raise ValidationError(f"Invalid base address: {base_url_error}")
        self.base_address = base if base.endswith("/") else base + "/"
        self.auth = auth
        self.transport = transport or HTTPTransport(self.config)
        self.parser = OSMXMLParser()
        self.resolver = CompleteEntityResolver()

    def _get(self, path: str) -> bytes:
        return self.transport.send(self.base_address + path, self.auth)

    def get_versions(self) -> float:
        """Highest API version supported by the server"""
        versions = self.parser.parse_versions(self._get("versions"))
        return max(float(v) for v in versions)

    def get_capabilities(self) -> Capabilities:
        return self.parser.parse_capabilities(self._get("0.6/capabilities"))

    def get_map(self, bounds: Bounds) -> OSMDocument:
        """
        Download everything inside the bounding box

        Returned as a flat document, elements are not resolved.

        Raises:
            ValidationError: If the bounds are inverted or out of range
        """
        validate_bounds(bounds)
        bbox = format_bbox(bounds)
        return self.parser.parse_document(self._get(f"0.6/map?bbox={bbox}"))

    def get_node(self, node_id: int) -> Node:
        return self._get_element(Node, "node", node_id)

    def get_way(self, way_id: int) -> Way:
        return self._get_element(Way, "way", way_id)

    def get_relation(self, relation_id: int) -> Relation:
        return self._get_element(Relation, "relation", relation_id)

    def _get_element(self, cls: Type[T], type_: ElementType, id_: int) -> T:
        data = self._get(f"0.6/{type_}/{id_}")
        element = next((e for e in self.parser.iter_elements(data) if isinstance(e, cls)), None)
        if element is None:
            raise ResolutionError(f"Response for {type_} {id_} contains no {type_}")
        return element

    def get_complete_way(self, way_id: int) -> CompleteWay:
        """Way with its node objects"""
        return self._get_complete_element("way", way_id)

    def get_complete_relation(self, relation_id: int) -> CompleteRelation:
        """Relation with its member objects, member ways include their nodes"""
        return self._get_complete_element("relation", relation_id)

    def _get_complete_element(self, type_: ElementType, id_: int):
        data = self._get(f"0.6/{type_}/{id_}/full")
        return self.resolver.resolve(self.parser.iter_elements(data), type_, id_)

    def get_changeset(self, changeset_id: int, include_discussion: bool = False) -> Changeset:
        """
        Changeset Read
        GET /api/0.6/changeset/#id?include_discussion=true
        """
        path = f"0.6/changeset/{changeset_id}"
        if include_discussion:
            path += "?include_discussion=true"
        document = self.parser.parse_document(self._get(path))
        if not document.changesets:
            raise ResolutionError(f"Response for changeset {changeset_id} contains no changeset")
        return document.changesets[0]

    def get_changesets(
        self,
        bounds: Optional[Bounds] = None,
        user_id: Optional[int] = None,
        user_name: Optional[str] = None,
        min_closed_date: Optional[datetime] = None,
        max_opened_date: Optional[datetime] = None,
        open_only: bool = False,
        closed_only: bool = False,
        changeset_ids: Optional[Sequence[int]] = None
    ) -> OSMDocument:
        """
        Changeset Query
        GET /api/0.6/changesets

        Raises:
            ValidationError: For conflicting filters, before any request is sent
        """
        query = ChangesetQuery(
            bounds=bounds,
            user_id=user_id,
            user_name=user_name,
            min_closed_date=min_closed_date,
            max_opened_date=max_opened_date,
            open_only=open_only,
            closed_only=closed_only,
            changeset_ids=changeset_ids
        )
        query_string = query.to_query_string()
        path = "0.6/changesets"
        if query_string:
            path += "?" + query_string
        document = self.parser.parse_document(self._get(path))
        logger.info(f"Changeset query returned {len(document.changesets)} changesets")
        return document

    def get_changeset_download(self, changeset_id: int) -> OSMChange:
        """
        Changeset Download
        GET /api/0.6/changeset/#id/download
        """
        return self.parser.parse_osm_change(self._get(f"0.6/changeset/{changeset_id}/download"))
