""" JsonExampleBuilder class for building JSON examples from AMF shapes and structured values """

import json
import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple
from urllib.parse import unquote

from amfexamples import vocabulary as ns
from amfexamples.amfmodel import AmfModel
from amfexamples.coercion import type_to_value, zero_value
from amfexamples.models import GenerationOptions
from amfexamples.shapes import ShapeKind, classify, datatype_id, list_examples, scalar_source_value

logger = logging.getLogger(__name__)

# Marks a value that could not be produced. None is a valid JSON value (null).
NO_VALUE = object()


def to_json_text(value: Any) -> str:
    """Serializes a value the way examples are rendered: two space indent, unescaped unicode."""
    return json.dumps(value, indent=2, ensure_ascii=False)


def data_entries(model: AmfModel, structure: Dict[str, Any]) -> Iterator[Tuple[str, Any]]:
    """Yields the (name, node) pairs of the data properties of a structured value object."""
    prefix = model.amf_key(ns.DATA)
    for key, value in structure.items():
        if not key.startswith(prefix):
            continue
        name = key[len(prefix):]
        if name.startswith(':'):
            name = name[1:]
        if isinstance(value, list):
            value = value[0] if value else None
        yield unquote(name), value


def typed_value(model: AmfModel, structure: Any) -> Any:
    """Reads the value of a 'data:Scalar' node, cast to its declared datatype."""
    literal = model.get_first(structure, ns.DATA_VALUE)
    if literal is None:
        return None
    value = literal.get('@value') if isinstance(literal, dict) else literal
    if value is None or value == '':
        return value
    dt = literal.get('@type') if isinstance(literal, dict) else None
    if not dt:
        dt = datatype_id(model, structure)
    if not dt:
        return value
    if isinstance(dt, list):
        dt = dt[0]
    return type_to_value(value, dt)


class JsonExampleBuilder:
    """ Builds JSON example values from AMF type properties and example structures """

    def __init__(self, model: AmfModel):
        self.model = model

    def json_from_structure(self, structure: Any) -> Any:
        """
        Creates the JSON value of an example's structured value.

        Returns None when the structure is not a data scalar, object or array.
        """
        value = self._from_structure(structure)
        return None if value is NO_VALUE else value

    def _from_structure(self, structure: Any) -> Any:
        model = self.model
        if isinstance(structure, list):
            structure = structure[0] if structure else None
        if not isinstance(structure, dict):
            return NO_VALUE
        if model.has_type(structure, ns.DATA_SCALAR):
            return typed_value(model, structure)
        if model.has_type(structure, ns.DATA_OBJECT):
            obj: Dict[str, Any] = {}
            for name, node in data_entries(model, structure):
                value = self._from_structure(node)
                if value is not NO_VALUE:
                    obj[name] = value
            return obj
        if model.has_type(structure, ns.DATA_ARRAY):
            items: List[Any] = []
            members = model.ensure_array(model.get_edge(structure, ns.MEMBER))
            if members is None:
                members = [node for _, node in data_entries(model, structure)]
            for member in members:
                value = self._from_structure(member)
                if value is not NO_VALUE:
                    items.append(value)
            return items
        return NO_VALUE

    def example_from_properties(self, properties: List[Any], options: GenerationOptions) -> Dict[str, Any]:
        """Generates a JSON object from a type's property shapes, in declaration order."""
        model = self.model
        result: Dict[str, Any] = {}
        for property_shape in properties:
            property_shape = model.resolve(property_shape)
            name = model.get_value(property_shape, ns.SHACL_NAME)
            if not name:
                continue
            range_shape = model.resolve(model.get_first(property_shape, ns.RANGE))
            if not range_shape:
                continue
            examples = list_examples(model, range_shape)
            if examples:
                # examples of the range win over type based generation
                for example in examples:
                    structure = model.get_first(model.resolve(example), ns.STRUCTURED_VALUE)
                    if structure is None:
                        result[name] = ''
                        continue
                    value = self._from_structure(structure)
                    if value is not NO_VALUE:
                        result[name] = value
            else:
                value = self.property_value(range_shape, options)
                result[name] = '' if value is NO_VALUE else value
        return result

    def property_value(self, range_shape: Any, options: GenerationOptions, type_name: Optional[str] = None) -> Any:
        """Computes a JSON value from a property range. Returns NO_VALUE when nothing can be generated."""
        kind = classify(self.model, range_shape)
        if kind == ShapeKind.SCALAR:
            return self.scalar_value(range_shape)
        if kind == ShapeKind.UNION:
            return self.union_value(range_shape, options, type_name)
        if kind == ShapeKind.OBJECT:
            return self.object_value(range_shape, options)
        if kind == ShapeKind.ARRAY:
            return self.array_value(range_shape, options)
        if kind == ShapeKind.NIL:
            return None
        return NO_VALUE

    def scalar_value(self, range_shape: Any) -> Any:
        """
        Value of a scalar shape from its default value or example.

        When neither exists the zero value of the datatype is used so the
        example stays a valid payload, even though the API declares no default.
        """
        value = scalar_source_value(self.model, range_shape)
        dt = datatype_id(self.model, range_shape)
        if value is None or value == '':
            return zero_value(dt)
        if not dt:
            return value
        return type_to_value(value, dt)

    def _enter(self, shape: Any, options: GenerationOptions) -> Optional[GenerationOptions]:
        shape_id = shape.get('@id') if isinstance(shape, dict) else None
        if shape_id and shape_id in options.visited:
            logger.warning("Cyclic reference to shape %s, skipping", shape_id)
            return None
        return options.visit(shape_id)

    def union_value(self, range_shape: Any, options: GenerationOptions, type_name: Optional[str] = None) -> Any:
        """
        Value of a union: the first object member (or the member named type_name).
        Falls back to the first scalar member.
        """
        model = self.model
        members = model.ensure_array(model.get_edge(range_shape, ns.ANY_OF))
        if not members:
            return NO_VALUE
        inner = self._enter(range_shape, options)
        if inner is None:
            return NO_VALUE
        resolved = [model.resolve(m) for m in members]
        for member in resolved:
            if type_name and model.get_value(member, ns.SHACL_NAME) != type_name:
                continue
            if classify(model, member) == ShapeKind.OBJECT:
                properties = model.ensure_array(model.get_edge(member, ns.PROPERTY))
                if properties:
                    return self.example_from_properties(properties, inner)
        for member in resolved:
            if type_name and model.get_value(member, ns.SHACL_NAME) != type_name:
                continue
            if classify(model, member) == ShapeKind.SCALAR:
                return self.scalar_value(member)
        return NO_VALUE

    def object_value(self, range_shape: Any, options: GenerationOptions) -> Any:
        properties = self.model.ensure_array(self.model.get_edge(range_shape, ns.PROPERTY))
        if not properties:
            return NO_VALUE
        inner = self._enter(range_shape, options)
        if inner is None:
            return NO_VALUE
        return self.example_from_properties(properties, inner)

    def array_value(self, range_shape: Any, options: GenerationOptions) -> Any:
        model = self.model
        items = model.ensure_array(model.get_edge(range_shape, ns.ITEMS))
        if not items:
            return NO_VALUE
        inner = self._enter(range_shape, options)
        if inner is None:
            return NO_VALUE
        result: List[Any] = []
        for item in items:
            value = self.property_value(model.resolve(item), inner)
            if value is not NO_VALUE:
                result.append(value)
        return result
