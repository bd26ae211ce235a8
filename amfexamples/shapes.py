""" Classification of AMF shape nodes """

from enum import Enum
from typing import Any, Dict, List, Optional

from amfexamples import vocabulary as ns
from amfexamples.amfmodel import AmfModel, local_name


class ShapeKind(Enum):
    """The kind of a shape node, in the order the example selector tests them."""
    ARRAY = 'array'
    EXAMPLE = 'example'
    UNION = 'union'
    NIL = 'nil'
    SCALAR = 'scalar'
    OBJECT = 'object'
    ANY = 'any'


_KIND_TYPES = [
    (ShapeKind.ARRAY, ns.ARRAY_SHAPE),
    (ShapeKind.EXAMPLE, ns.EXAMPLE),
    (ShapeKind.UNION, ns.UNION_SHAPE),
    (ShapeKind.NIL, ns.NIL_SHAPE),
    (ShapeKind.SCALAR, ns.SCALAR_SHAPE),
    (ShapeKind.OBJECT, ns.NODE_SHAPE),
]


def classify(model: AmfModel, shape: Any) -> ShapeKind:
    """Returns the kind of the shape. Shapes of no known class are ShapeKind.ANY."""
    for kind, type_iri in _KIND_TYPES:
        if model.has_type(shape, type_iri):
            return kind
    return ShapeKind.ANY


def datatype_id(model: AmfModel, shape: Any) -> Optional[str]:
    """Reads the 'shacl:datatype' identifier of a shape."""
    datatype = model.get_first(shape, ns.DATATYPE)
    if isinstance(datatype, dict):
        return datatype.get('@id')
    return datatype


def read_data_type(model: AmfModel, shape: Any) -> Optional[str]:
    """Datatype name of a shape as written in the vocabulary, e.g. 'string' or 'dateTime'."""
    dt = datatype_id(model, shape)
    if not dt:
        return None
    return local_name(dt)


def list_examples(model: AmfModel, node: Any) -> List[Dict[str, Any]]:
    """
    Lists the example nodes of a shape.

    Named examples wrappers ('doc:NamedExamples') are replaced by the examples
    they contain. Returns an empty list when the shape has no examples.
    """
    result: List[Dict[str, Any]] = []
    for example in model.ensure_array(model.get_edge(node, ns.EXAMPLES)) or []:
        if isinstance(example, list):
            example = example[0] if example else None
        if not isinstance(example, dict):
            continue
        if model.has_type(example, ns.NAMED_EXAMPLES):
            inner = model.ensure_array(model.get_edge(example, ns.EXAMPLES)) or []
            result.extend(e for e in inner if isinstance(e, dict))
        else:
            result.append(example)
    return result


def example_raw_value(model: AmfModel, shape: Any) -> Any:
    """Raw value of the first example of a shape."""
    examples = list_examples(model, shape)
    if not examples:
        return None
    return model.get_value(model.resolve(examples[0]), ns.RAW)


def scalar_source_value(model: AmfModel, shape: Any) -> Any:
    """Literal a scalar example is built from: the default value or the raw value of the first example."""
    default = model.get_first(shape, ns.DEFAULT_VALUE)
    if default is not None:
        return model.get_value(default, ns.DATA_VALUE)
    if model.has_property(shape, ns.EXAMPLES):
        return example_raw_value(model, shape)
    return None
