"""
OSM data models

Data classes for flat OSM elements as they appear in API responses, and for
complete ways and relations whose references point at the actual objects
"""

from datetime import datetime
from typing import List, Dict, Optional, Union, Literal
from dataclasses import dataclass, field

from ..models import Changeset

ElementType = Literal["node", "way", "relation"]

ELEMENT_TYPES = ("node", "way", "relation")


@dataclass
class Bounds:
    """Bounding box in decimal degrees"""
    min_lon: float
    min_lat: float
    max_lon: float
    max_lat: float


@dataclass
class Node:
    """Represents an OSM node (point)"""
    id: int
    lat: Optional[float]  # None for deleted nodes
    lon: Optional[float]
    tags: Dict[str, str] = field(default_factory=dict)
    version: Optional[int] = None
    changeset: Optional[int] = None
    user: Optional[str] = None
    uid: Optional[int] = None
    visible: bool = True
    timestamp: Optional[datetime] = None

    type: ElementType = field(default="node", init=False, repr=False)


@dataclass
class Way:
    """Represents an OSM way, referencing its nodes by id"""
    id: int
    nodes: List[int]
    tags: Dict[str, str] = field(default_factory=dict)
    version: Optional[int] = None
    changeset: Optional[int] = None
    user: Optional[str] = None
    uid: Optional[int] = None
    visible: bool = True
    timestamp: Optional[datetime] = None

    type: ElementType = field(default="way", init=False, repr=False)


@dataclass
class Member:
    """Relation member reference"""
    type: ElementType
    ref: int
    role: str = ""


@dataclass
class Relation:
    """Represents an OSM relation, referencing its members by type and id"""
    id: int
    members: List[Member]
    tags: Dict[str, str] = field(default_factory=dict)
    version: Optional[int] = None
    changeset: Optional[int] = None
    user: Optional[str] = None
    uid: Optional[int] = None
    visible: bool = True
    timestamp: Optional[datetime] = None

    type: ElementType = field(default="relation", init=False, repr=False)


# Nodes have no references, the parsed node is already complete
CompleteNode = Node


@dataclass(eq=False)
class CompleteWay:
    """Way holding its node objects in order, closed ways repeat the first node"""
    id: int
    nodes: List[Node] = field(default_factory=list)
    tags: Dict[str, str] = field(default_factory=dict)
    version: Optional[int] = None
    changeset: Optional[int] = None
    user: Optional[str] = None
    uid: Optional[int] = None
    visible: bool = True
    timestamp: Optional[datetime] = None

    type: ElementType = field(default="way", init=False, repr=False)

    def get_coordinates(self) -> List[List[float]]:
        """Get coordinates as [lon, lat] list"""
        return [[n.lon, n.lat] for n in self.nodes]

    def is_closed(self) -> bool:
        return len(self.nodes) > 1 and self.nodes[0] is self.nodes[-1]


@dataclass(eq=False)
class CompleteMember:
    """Relation member pointing at the resolved object"""
    role: str
    member: Union[Node, CompleteWay, "CompleteRelation"]

    @property
    def type(self) -> ElementType:
        return self.member.type

    def __repr__(self):
        return f"CompleteMember(role={self.role!r}, type={self.type!r}, id={self.member.id})"


@dataclass(eq=False)
class CompleteRelation:
    """
    Relation holding its member objects in order

    Members may be other relations, including this relation itself, so
    members are left out of the repr.
    """
    id: int
    members: List[CompleteMember] = field(default_factory=list, repr=False)
    tags: Dict[str, str] = field(default_factory=dict)
    version: Optional[int] = None
    changeset: Optional[int] = None
    user: Optional[str] = None
    uid: Optional[int] = None
    visible: bool = True
    timestamp: Optional[datetime] = None

    type: ElementType = field(default="relation", init=False, repr=False)

    def members_by_role(self, role: str) -> list:
        return [m.member for m in self.members if m.role == role]


Element = Union[Node, Way, Relation, Bounds, Changeset]
OSMElement = Union[Node, Way, Relation]


@dataclass
class OSMDocument:
    """Parsed <osm> document"""
    version: Optional[str] = None
    generator: Optional[str] = None
    bounds: Optional[Bounds] = None
    nodes: List[Node] = field(default_factory=list)
    ways: List[Way] = field(default_factory=list)
    relations: List[Relation] = field(default_factory=list)
    changesets: List[Changeset] = field(default_factory=list)

    def node(self, id_: int) -> Optional[Node]:
        return next((n for n in self.nodes if n.id == id_), None)

    def way(self, id_: int) -> Optional[Way]:
        return next((w for w in self.ways if w.id == id_), None)

    def relation(self, id_: int) -> Optional[Relation]:
        return next((r for r in self.relations if r.id == id_), None)


@dataclass
class OSMChange:
    """Parsed <osmChange> document, elements grouped by action"""
    version: Optional[str] = None
    generator: Optional[str] = None
    create: List[OSMElement] = field(default_factory=list)
    modify: List[OSMElement] = field(default_factory=list)
    delete: List[OSMElement] = field(default_factory=list)
