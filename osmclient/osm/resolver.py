"""
Complete entity resolver

Builds complete ways and relations out of the flat element stream returned
by the /full endpoints. The stream holds the requested entity together with
everything it references, in no particular order.

Resolution happens in a fixed order so every reference can be looked up
instead of recursed into:

1. bucket the flat stream into node, way and relation tables
2. nodes are terminal, the node table doubles as the dedup table
3. ways resolve their node ids against the node table
4. relations are allocated as empty shells first, then their members are
   filled in from the node, way and shell tables, so forward references,
   cycles and self references all land on the single shell per id
"""

from typing import Dict, Iterable, Union

from loguru import logger

from ..errors import ResolutionError
from .models import (
    CompleteMember, CompleteRelation, CompleteWay, Element, ElementType, Node, Relation, Way
)


class CompleteEntityResolver:
    """Resolves a flat element closure into a linked object graph"""

    def resolve(
        self,
        elements: Iterable[Element],
        type_: ElementType,
        id_: int
    ) -> Union[CompleteWay, CompleteRelation]:
        """
        Resolve the complete way or relation with the given id

        Args:
            elements: Flat elements of the closure, consumed once
            type_: "way" or "relation"
            id_: Id of the requested entity

        Returns:
            The requested entity with all references replaced by objects

        Raises:
            ResolutionError: If the entity or anything it references is
                missing from the closure
        """
        if type_ not in ("way", "relation"):
            raise ValueError(f"Only ways and relations can be resolved, got {type_!r}")

        nodes: Dict[int, Node] = {}
        flat_ways: Dict[int, Way] = {}
        flat_relations: Dict[int, Relation] = {}

        for element in elements:
            if isinstance(element, Node):
                nodes[element.id] = element
            elif isinstance(element, Way):
                flat_ways[element.id] = element
            elif isinstance(element, Relation):
                flat_relations[element.id] = element

        logger.debug(f"Resolving {type_} {id_} from {len(nodes)} nodes, "
                     f"{len(flat_ways)} ways, {len(flat_relations)} relations")

        ways = {way_id: self._build_way(way, nodes) for way_id, way in flat_ways.items()}
        relations = self._build_relations(flat_relations, nodes, ways)

        root = (ways if type_ == "way" else relations).get(id_)
        if root is None:
            raise ResolutionError(f"{type_.capitalize()} {id_} not found in response")

        logger.info(f"Resolved complete {type_} {id_}")
        return root

    def resolve_way(self, elements: Iterable[Element], id_: int) -> CompleteWay:
        return self.resolve(elements, "way", id_)

    def resolve_relation(self, elements: Iterable[Element], id_: int) -> CompleteRelation:
        return self.resolve(elements, "relation", id_)

    @staticmethod
    def _build_way(way: Way, nodes: Dict[int, Node]) -> CompleteWay:
        resolved = []
        for node_id in way.nodes:
            node = nodes.get(node_id)
            if node is None:
                logger.error(f"Way {way.id} references node {node_id} which is missing from the response")
                raise ResolutionError(f"Way {way.id} references missing node {node_id}")
            resolved.append(node)

        return CompleteWay(
            id=way.id,
            nodes=resolved,
            tags=way.tags,
            version=way.version,
            changeset=way.changeset,
            user=way.user,
            uid=way.uid,
            visible=way.visible,
            timestamp=way.timestamp
        )

    @staticmethod
    def _build_relations(
        flat_relations: Dict[int, Relation],
        nodes: Dict[int, Node],
        ways: Dict[int, CompleteWay]
    ) -> Dict[int, CompleteRelation]:
        shells = {
            relation_id: CompleteRelation(
                id=relation.id,
                tags=relation.tags,
                version=relation.version,
                changeset=relation.changeset,
                user=relation.user,
                uid=relation.uid,
                visible=relation.visible,
                timestamp=relation.timestamp
            )
            for relation_id, relation in flat_relations.items()
        }

        tables = {"node": nodes, "way": ways, "relation": shells}
        for relation_id, relation in flat_relations.items():
            members = shells[relation_id].members
            for member in relation.members:
                target = tables.get(member.type, {}).get(member.ref)
                if target is None:
                    logger.error(f"Relation {relation_id} references {member.type} {member.ref} "
                                 f"which is missing from the response")
                    raise ResolutionError(
                        f"Relation {relation_id} references missing {member.type} {member.ref}"
                    )
                members.append(CompleteMember(role=member.role, member=target))

        return shells
