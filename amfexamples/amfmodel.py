""" AmfModel class for reading a compacted or expanded AMF JSON-LD document """

import logging
from typing import Any, Dict, List, Optional

from amfexamples import vocabulary as ns

logger = logging.getLogger(__name__)

JsonNode = Dict[str, Any]


def local_name(key: str) -> str:
    """Strips the namespace or prefix from an IRI or a compacted key."""
    if '#' in key:
        return key[key.rfind('#') + 1:]
    if ':' in key:
        return key[key.find(':') + 1:]
    return key


def build_node_table(amf: Any) -> Dict[str, JsonNode]:
    """Builds a flat dictionary of every node in the document that carries data besides its '@id'."""
    node_table: Dict[str, JsonNode] = {}
    stack = [amf]
    while stack:
        current = stack.pop()
        if isinstance(current, dict):
            node_id = current.get('@id')
            if isinstance(node_id, str) and len(current) > 1 and node_id not in node_table:
                node_table[node_id] = current
            for key, value in current.items():
                if key != '@context' and isinstance(value, (dict, list)):
                    stack.append(value)
        elif isinstance(current, list):
            stack.extend(reversed(current))
    return node_table


class AmfModel:
    """
    Accessor over an AMF graph document.

    Keys are looked up in compacted form when the document carries an
    ``@context`` and in expanded (full IRI) form otherwise, so the same
    accessor serves both serializations.
    """

    def __init__(self, amf: Any = None):
        if isinstance(amf, list):
            amf = amf[0] if amf else None
        self.amf = amf
        self.context: Dict[str, Any] = {}
        if isinstance(amf, dict) and isinstance(amf.get('@context'), dict):
            self.context = amf['@context']
        self.node_table = build_node_table(amf) if amf else {}

    def amf_key(self, iri: str) -> str:
        """Maps a vocabulary IRI to the key used by the document."""
        if not iri or not self.context:
            return iri
        hash_index = iri.find('#')
        namespace = iri[:hash_index + 1]
        for prefix, value in self.context.items():
            if value == namespace:
                return f"{prefix}:{iri[hash_index + 1:]}"
        return iri

    def _key_in(self, node: JsonNode, iri: str) -> Optional[str]:
        key = self.amf_key(iri)
        if key in node:
            return key
        if iri in node:
            return iri
        return None

    def ensure_array(self, value: Any) -> Optional[List[Any]]:
        """Wraps a single graph edge into a list. Returns None for an absent edge."""
        if value is None:
            return None
        if isinstance(value, list):
            return value
        return [value]

    def has_type(self, node: Any, iri: str) -> bool:
        """Checks whether the node's '@type' contains the class."""
        if isinstance(node, list):
            node = node[0] if node else None
        if not isinstance(node, dict):
            return False
        types = self.ensure_array(node.get('@type')) or []
        return iri in types or self.amf_key(iri) in types

    def has_property(self, node: Any, iri: str) -> bool:
        """Checks whether the node has the property."""
        return isinstance(node, dict) and self._key_in(node, iri) is not None

    def get_edge(self, node: Any, iri: str) -> Any:
        """Returns the raw value of a property as stored in the node."""
        if not isinstance(node, dict):
            return None
        key = self._key_in(node, iri)
        if key is None:
            return None
        return node[key]

    def get_first(self, node: Any, iri: str) -> Any:
        """Returns the first node of a possibly array-wrapped edge."""
        edge = self.get_edge(node, iri)
        if isinstance(edge, list):
            return edge[0] if edge else None
        return edge

    def get_value(self, node: Any, iri: str) -> Any:
        """Extracts a scalar value of a property ('@value' of a literal node or the literal itself)."""
        data = self.get_first(node, iri)
        if data is None or isinstance(data, (str, int, float, bool)):
            return data
        if isinstance(data, dict):
            return data.get('@value')
        return None

    def find_node(self, node_id: str) -> Optional[JsonNode]:
        """Returns the node with the given '@id' from the document."""
        return self.node_table.get(node_id)

    def _link_target_id(self, node: JsonNode) -> Optional[str]:
        target = self.get_first(node, ns.LINK_TARGET)
        if isinstance(target, dict):
            return target.get('@id')
        if isinstance(target, str):
            return target
        return None

    def resolve(self, node: Any) -> Any:
        """
        Dereferences a node.

        A node that is only an '@id' pointer is replaced by the node of the same
        id and a linked shape ('doc:link-target') by a copy of its target. Chains
        are followed until a node with data is reached. The walk stops at the first
        id seen twice, so cyclic links terminate. Resolving a resolved node
        returns it unchanged.
        """
        if isinstance(node, list):
            node = node[0] if node else None
        if not isinstance(node, dict):
            return node
        visited = set()
        while True:
            if len(node) == 1 and '@id' in node:
                target_id = node['@id']
            else:
                target_id = self._link_target_id(node)
            if not target_id:
                return node
            if target_id in visited:
                logger.warning("Cyclic link detected while resolving %s", target_id)
                return node
            visited.add(target_id)
            target = self.find_node(target_id)
            if target is None:
                if self._link_target_id(node):
                    logger.warning("Link target %s not found in the document", target_id)
                return node
            if target is node:
                return node
            label = self.get_edge(node, ns.LINK_LABEL)
            resolved = dict(target)
            if label is not None:
                resolved[self.amf_key(ns.LINK_LABEL)] = label
            node = resolved
