"""
OSM XML parser

Turns OSM API v0.6 XML responses into flat element records.
Elements are streamed with lxml's iterparse, so a response is read once,
in document order, and parsed sub-trees are released as soon as the
record has been built.
"""

from datetime import datetime
from io import BytesIO
from typing import Dict, Any, Iterator, List, Optional, Tuple

import lxml.etree as ET
from loguru import logger
from pydantic import TypeAdapter

from ..errors import ParseError
from ..models import Capabilities, Changeset, ChangesetComment
from .models import (
    ELEMENT_TYPES, Bounds, Element, Member, Node, OSMChange, OSMDocument, Relation, Way
)

ROOT_TAGS = ("osm", "osmChange")
CHANGE_ACTIONS = ("create", "modify", "delete")

_datetime_adapter = TypeAdapter(datetime)


def _int(value: Optional[str]) -> Optional[int]:
    return int(value) if value is not None else None


def _float(value: Optional[str]) -> Optional[float]:
    return float(value) if value is not None else None


def _timestamp(value: Optional[str]) -> Optional[datetime]:
    return _datetime_adapter.validate_python(value) if value is not None else None


def _metadata(attrib: Dict[str, str]) -> Dict[str, Any]:
    """Common element attributes"""
    return {
        "version": _int(attrib.get("version")),
        "changeset": _int(attrib.get("changeset")),
        "user": attrib.get("user"),
        "uid": _int(attrib.get("uid")),
        "visible": attrib.get("visible", "true") == "true",
        "timestamp": _timestamp(attrib.get("timestamp")),
    }


class OSMXMLParser:
    """Parses OSM API XML responses"""

    @staticmethod
    def _iter_events(
        data: bytes,
        header: Optional[Dict[str, str]] = None
    ) -> Iterator[Tuple[Optional[str], Element]]:
        """
        Stream (action, element) pairs from an <osm> or <osmChange> document

        Action is the enclosing <create>/<modify>/<delete> block for
        osmChange documents and None otherwise. When header is given it
        receives the root tag name and attributes.
        """
        context = ET.iterparse(
            BytesIO(data),
            events=("start", "end"),
            resolve_entities=False,
            no_network=True,
        )
        root_tag = None
        action = None
        tags: Dict[str, str] = {}
        node_refs: List[int] = []
        members: List[Member] = []
        comments: List[ChangesetComment] = []
        comment_text = ""

        try:
            for event, elem in context:
                tag = elem.tag

                if event == "start":
                    if root_tag is None:
                        if tag not in ROOT_TAGS:
                            raise ParseError(f"Unexpected root element <{tag}>, expected <osm> or <osmChange>")
                        root_tag = tag
                        if header is not None:
                            header["root"] = tag
                            header.update(elem.attrib)
                    elif root_tag == "osmChange" and tag in CHANGE_ACTIONS:
                        action = tag
                    continue

                attrib = elem.attrib
                if tag == "tag":
                    tags[attrib["k"]] = attrib["v"]
                elif tag == "nd":
                    node_refs.append(int(attrib["ref"]))
                elif tag == "member":
                    member_type = attrib["type"]
                    if member_type not in ELEMENT_TYPES:
                        raise ParseError(f"Unknown member type {member_type!r}")
                    members.append(Member(
                        type=member_type,
                        ref=int(attrib["ref"]),
                        role=attrib.get("role", "")
                    ))
                elif tag == "text":
                    comment_text = elem.text or ""
                elif tag == "comment":
                    comments.append(ChangesetComment(**dict(attrib), text=comment_text))
                    comment_text = ""
                elif tag == "bounds":
                    yield action, Bounds(
                        min_lon=float(attrib["minlon"]),
                        min_lat=float(attrib["minlat"]),
                        max_lon=float(attrib["maxlon"]),
                        max_lat=float(attrib["maxlat"])
                    )
                elif tag in ("node", "way", "relation", "changeset"):
                    if tag == "node":
                        element = Node(
                            id=int(attrib["id"]),
                            lat=_float(attrib.get("lat")),
                            lon=_float(attrib.get("lon")),
                            tags=tags,
                            **_metadata(attrib)
                        )
                    elif tag == "way":
                        element = Way(id=int(attrib["id"]), nodes=node_refs, tags=tags, **_metadata(attrib))
                    elif tag == "relation":
                        element = Relation(id=int(attrib["id"]), members=members, tags=tags, **_metadata(attrib))
                    else:
                        element = Changeset.model_validate({**dict(attrib), "tags": tags, "discussion": comments})
                    tags, node_refs, members, comments = {}, [], [], []
                    elem.clear()
                    parent = elem.getparent()
                    while elem.getprevious() is not None:
                        del parent[0]
                    yield action, element
                elif tag in CHANGE_ACTIONS:
                    action = None
        except ET.XMLSyntaxError as e:
            raise ParseError(f"Malformed OSM XML: {e}") from e
        except KeyError as e:
            raise ParseError(f"Missing required attribute {e} in <{tag}>") from e
        except ValueError as e:
            raise ParseError(f"Invalid value in <{tag}>: {e}") from e

        if root_tag is None:
            raise ParseError("Empty OSM XML document")

    @staticmethod
    def iter_elements(data: bytes) -> Iterator[Element]:
        """
        Lazily parse flat elements (nodes, ways, relations, bounds, changesets)

        Args:
            data: Raw XML response body

        Returns:
            Single-pass iterator over the elements in document order

        Raises:
            ParseError: When the document is malformed, at the point of failure
        """
        for _, element in OSMXMLParser._iter_events(data):
            yield element

    @staticmethod
    def parse_document(data: bytes) -> OSMDocument:
        """Parse a whole <osm> document"""
        header: Dict[str, str] = {}
        document = OSMDocument()
        for _, element in OSMXMLParser._iter_events(data, header):
            if isinstance(element, Node):
                document.nodes.append(element)
            elif isinstance(element, Way):
                document.ways.append(element)
            elif isinstance(element, Relation):
                document.relations.append(element)
            elif isinstance(element, Changeset):
                document.changesets.append(element)
            elif isinstance(element, Bounds):
                document.bounds = element
        if header.get("root") != "osm":
            raise ParseError(f"Expected <osm> document, got <{header.get('root')}>")
        document.version = header.get("version")
        document.generator = header.get("generator")
        logger.debug(f"Parsed OSM document: {len(document.nodes)} nodes, {len(document.ways)} ways, "
                     f"{len(document.relations)} relations, {len(document.changesets)} changesets")
        return document

    @staticmethod
    def parse_osm_change(data: bytes) -> OSMChange:
        """Parse an <osmChange> document, grouping elements by action"""
        header: Dict[str, str] = {}
        change = OSMChange()
        for action, element in OSMXMLParser._iter_events(data, header):
            if action is None:
                raise ParseError(f"{type(element).__name__} outside of a create/modify/delete block")
            if not isinstance(element, (Node, Way, Relation)):
                raise ParseError(f"Unexpected {type(element).__name__} in <{action}> block")
            getattr(change, action).append(element)
        if header.get("root") != "osmChange":
            raise ParseError(f"Expected <osmChange> document, got <{header.get('root')}>")
        change.version = header.get("version")
        change.generator = header.get("generator")
        return change

    @staticmethod
    def _parse_root(data: bytes) -> ET._Element:
        parser = ET.XMLParser(resolve_entities=False, no_network=True)
        try:
            root = ET.fromstring(data, parser)
        except ET.XMLSyntaxError as e:
            raise ParseError(f"Malformed OSM XML: {e}") from e
        if root.tag != "osm":
            raise ParseError(f"Unexpected root element <{root.tag}>, expected <osm>")
        return root

    @staticmethod
    def parse_versions(data: bytes) -> List[str]:
        """
        Parse the list of API versions supported by the server

        Accepts both <version>0.6</version> entries and the
        <version minimum=".." maximum=".."/> form.
        """
        root = OSMXMLParser._parse_root(data)
        versions = []
        for version in root.iterfind("api/version"):
            if version.text and version.text.strip():
                versions.append(version.text.strip())
            else:
                versions.extend(v for v in (version.get("minimum"), version.get("maximum")) if v)
        if not versions:
            raise ParseError("No API version found in versions document")
        return versions

    @staticmethod
    def parse_capabilities(data: bytes) -> Capabilities:
        """Parse the capabilities document into limits and service status"""
        root = OSMXMLParser._parse_root(data)
        api = root.find("api")
        if api is None:
            raise ParseError("Capabilities document has no <api> element")

        def attr(path: str, name: str) -> Optional[str]:
            elem = api.find(path)
            return elem.get(name) if elem is not None else None

        try:
            return Capabilities(
                version_minimum=attr("version", "minimum"),
                version_maximum=attr("version", "maximum"),
                area_maximum=attr("area", "maximum"),
                note_area_maximum=attr("note_area", "maximum"),
                tracepoints_per_page=attr("tracepoints", "per_page"),
                waynodes_maximum=attr("waynodes", "maximum"),
                relationmembers_maximum=attr("relationmembers", "maximum"),
                changesets_maximum_elements=attr("changesets", "maximum_elements"),
                changesets_default_query_limit=attr("changesets", "default_query_limit"),
                changesets_maximum_query_limit=attr("changesets", "maximum_query_limit"),
                timeout_seconds=attr("timeout", "seconds"),
                status_database=attr("status", "database"),
                status_api=attr("status", "api"),
                status_gpx=attr("status", "gpx"),
                imagery_blacklist=[b.get("regex") for b in root.iterfind("policy/imagery/blacklist")],
            )
        except ValueError as e:
            raise ParseError(f"Invalid capabilities document: {e}") from e
