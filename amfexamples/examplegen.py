"""
Generates examples from an AMF model.

The result of ``generate_payloads_examples()``, ``generate_payload_examples()``
and ``compute_examples()`` is a list of ``ExampleModel`` view models:

- **has_raw** - the ``raw`` attribute has a value
- **has_title** - the ``title`` attribute has a value
- **has_union** - the ``values`` attribute has a value
- **value** - example to render
- **title** - example name, only when ``has_title`` is set
- **raw** - raw value of the example (YAML, or a JSON schema). Only set when the
  raw value is available and is not usable as JSON/XML for the requested media type.
- **values** - one model per union member, only when ``has_union`` is set.

Examples defined in the API are used first. When there are none an example
is generated from the type (scalar, object, union or array) unless the
``no_auto`` option is set.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

from amfexamples import vocabulary as ns
from amfexamples.amfmodel import AmfModel
from amfexamples.jsonexample import JsonExampleBuilder, to_json_text, typed_value
from amfexamples.models import ExampleModel, GenerationOptions, as_options
from amfexamples.shapes import ShapeKind, classify, list_examples
from amfexamples.xmlexample import XmlExampleBuilder
from amfexamples.xmltree import format_xml

logger = logging.getLogger(__name__)

Options = GenerationOptions | Dict[str, Any] | None


def is_json_media(media: Optional[str]) -> bool:
    return bool(media) and 'json' in media


def is_xml_media(media: Optional[str]) -> bool:
    return bool(media) and not is_json_media(media) and 'xml' in media


def is_json_document(raw: str) -> bool:
    """Checks whether a raw example parses as a JSON object or array (not a bare string, number or boolean)."""
    try:
        parsed = json.loads(str(raw))
    except (ValueError, RecursionError):
        logger.debug("Raw example is not usable JSON, using the structured value")
        return False
    if isinstance(parsed, (str, int, float, bool)):
        logger.debug("Raw example is a JSON scalar, using the structured value")
        return False
    return True


def wrap_json_array(example: ExampleModel) -> None:
    """Puts an array item example into array brackets unless it already is an array."""
    if example.has_union:
        return
    value = example.value
    if isinstance(value, str) and not example.is_scalar:
        if value.startswith('['):
            return
        example.value = '[' + (value or '""') + ']'
    else:
        example.value = '[' + json.dumps(value, ensure_ascii=False) + ']'
    example.is_scalar = False


class ApiExampleGenerator:
    """ Generates examples of AMF shapes for JSON and XML media types """

    def __init__(self, amf: Any = None):
        self.model = amf if isinstance(amf, AmfModel) else AmfModel(amf)
        self.json_builder = JsonExampleBuilder(self.model)
        self.xml_builder = XmlExampleBuilder(self.model)

    def list_media(self, payloads: Any) -> Optional[List[str]]:
        """
        Lists the media types of payloads.

        ``payloads`` is a list of AMF Payload shapes or a single Payload shape.
        Returns None when the input holds no payload.
        """
        model = self.model
        if not payloads:
            return None
        if not isinstance(payloads, list):
            payload = model.resolve(payloads)
            if not model.has_type(payload, ns.PAYLOAD):
                return None
            return [model.get_value(payload, ns.MEDIA_TYPE)]
        result = []
        for payload in payloads:
            payload = model.resolve(payload)
            if not model.has_type(payload, ns.PAYLOAD):
                continue
            result.append(model.get_value(payload, ns.MEDIA_TYPE))
        return result or None

    def generate_payloads_examples(self, payloads: Any, media: Optional[str], options: Options = None) -> Optional[List[ExampleModel]]:
        """
        Generates examples for the payload of the given media type.

        When no payload declares the media type and there is only one payload,
        the examples of that payload are rendered for the media type.
        """
        options = as_options(options)
        if not payloads or (not media and not options.raw_only):
            return None
        if not isinstance(payloads, list):
            payloads = [payloads]
        resolved = [self.model.resolve(p) for p in payloads]
        for payload in resolved:
            payload_media = self.model.get_value(payload, ns.MEDIA_TYPE)
            if media and payload_media != media:
                continue
            return self.generate_payload_examples(payload, media, options)
        if len(resolved) == 1:
            return self.generate_payload_examples(resolved[0], media, options)
        return None

    def generate_payload_examples(self, payload: Any, media: Optional[str], options: Options = None) -> Optional[List[ExampleModel]]:
        """Generates examples for a single AMF Payload shape. Examples are filtered by the payload's '@id'."""
        model = self.model
        options = as_options(options)
        payload = model.resolve(payload)
        if not model.has_type(payload, ns.PAYLOAD):
            return None
        schema = model.resolve(model.get_first(payload, ns.SCHEMA))
        if not schema:
            return None
        options = options.derive(type_id=payload.get('@id'))
        return self.compute_examples(schema, media, options)

    def compute_examples(self, shape: Any, media: Optional[str], options: Options = None) -> Optional[List[ExampleModel]]:
        """
        Computes examples of an AMF shape.

        Examples defined in the API come first, then a JSON schema attached to the
        shape. Otherwise, unless ``raw_only`` is set, arrays, example shapes and
        unions are processed and, unless ``no_auto`` is set, an example is generated
        from the scalar datatype or the object properties.
        """
        model = self.model
        options = as_options(options)
        if not shape or (not media and not options.raw_only):
            return None
        shape = model.resolve(shape)
        if not isinstance(shape, dict):
            return None
        shape_id = shape.get('@id')
        if shape_id and shape_id in options.visited:
            logger.warning("Cyclic reference to shape %s, skipping", shape_id)
            return None
        if not options.type_name:
            type_name = model.get_value(shape, ns.SHACL_NAME)
            if type_name and not str(type_name).startswith(ns.INLINE_TYPE_PREFIX):
                options = options.derive(type_name=type_name)

        examples = list_examples(model, shape)
        if examples:
            result = self.compute_from_examples(examples, media, options)
            if result:
                return result

        json_schema = self.read_json_schema(shape)
        if json_schema:
            return self.example_from_json_schema(shape, json_schema, options)

        if options.raw_only:
            return None

        kind = classify(model, shape)
        if kind == ShapeKind.ARRAY:
            result = self.compute_array_examples(shape, media, options)
            if result:
                return result
        if kind == ShapeKind.EXAMPLE:
            value = self.generate_from_example(shape, media, options)
            if value:
                return [value]
        if kind == ShapeKind.UNION:
            return self.compute_union_examples(shape, media, options)

        if options.no_auto:
            return None

        if kind == ShapeKind.SCALAR:
            return [ExampleModel(value=self.json_builder.scalar_value(shape), is_scalar=True)]

        properties = model.ensure_array(model.get_edge(shape, ns.PROPERTY))
        if properties:
            value = self.example_from_properties(properties, media, options.type_name, options.parent_name,
                                                 options.visit(shape_id))
            if value:
                return [value]
        return None

    def read_json_schema(self, shape: Any) -> Optional[str]:
        """Reads the raw JSON schema stored in the shape's source maps."""
        model = self.model
        source_map = model.get_first(shape, ns.SOURCES)
        if not source_map:
            return None
        tracked = model.get_first(source_map, ns.PARSED_JSON_SCHEMA)
        if not tracked:
            return None
        return model.get_value(tracked, ns.SOURCE_MAP_VALUE)

    def compute_from_examples(self, examples: List[Any], media: Optional[str], options: GenerationOptions) -> Optional[List[ExampleModel]]:
        """Generates a view model for each example that applies to the type in ``options.type_id``."""
        examples = self.list_type_examples(examples, options.type_id)
        if not examples:
            return None
        result = []
        for example in examples:
            value = self.generate_from_example(self.model.resolve(example), media, options)
            if value:
                result.append(value)
        return result

    def list_type_examples(self, examples: List[Any], type_id: Optional[str]) -> Optional[List[Any]]:
        """
        Filters examples with their source maps.

        An example that tracks the elements it was defined for is used only when
        the type id (or its 'amf://id' prefixed form) is one of them.
        """
        if not type_id:
            return examples
        model = self.model
        long_id = type_id if 'amf' in type_id else ns.AMF_ID_PREFIX + type_id
        result = []
        for example in examples:
            example = model.resolve(example)
            source_map = model.get_first(example, ns.SOURCES)
            if not source_map:
                result.append(example)
                continue
            tracked = model.get_first(source_map, ns.TRACKED_ELEMENT)
            if not tracked:
                result.append(example)
                continue
            value = model.get_value(tracked, ns.SOURCE_MAP_VALUE)
            if not value:
                continue
            ids = [i.strip() for i in str(value).split(',')]
            if long_id in ids or type_id in ids:
                result.append(example)
            else:
                logger.debug("Example %s does not apply to %s", example.get('@id'), type_id)
        return result or None

    def generate_from_example(self, example: Any, media: Optional[str], options: Options = None) -> Optional[ExampleModel]:
        """Generates a view model from an AMF Example node."""
        model = self.model
        options = as_options(options)
        raw = model.get_value(example, ns.RAW) or model.get_value(example, ns.SHACL_RAW)
        title = model.get_value(example, ns.CORE_NAME)
        if title and str(title).startswith(ns.GENERATED_EXAMPLE_PREFIX):
            title = None
        result = ExampleModel(has_title=bool(title), title=title or None)
        if options.raw_only:
            if not raw:
                return None
            result.value = raw
            return result
        is_json = is_json_media(media)
        is_xml = is_xml_media(media)
        if raw:
            if is_json and is_json_document(raw):
                result.value = raw
                return result
            if is_xml and str(raw).strip().startswith('<'):
                result.value = raw
                return result
            result.has_raw = True
            result.raw = raw
        structure = model.get_first(example, ns.STRUCTURED_VALUE)
        if not structure:
            result.value = raw or ''
            return result
        if model.has_type(structure, ns.DATA_SCALAR):
            value = typed_value(model, structure)
            if value is None and model.get_first(structure, ns.DATA_VALUE) is None:
                value = ''
            result.value = value
            result.is_scalar = True
            return result
        if is_json:
            data = self.json_builder.json_from_structure(structure)
            if data is None:
                return None
            result.value = to_json_text(data)
            return result
        if is_xml:
            result.value = self.xml_builder.xml_from_structure(structure, options.type_name)
            return result
        result.value = raw or ''
        return result

    def compute_array_examples(self, shape: Any, media: Optional[str], options: GenerationOptions) -> Optional[List[ExampleModel]]:
        """
        Computes examples of the first array item type that has one.
        For JSON the result is put into array brackets.
        """
        model = self.model
        items = model.ensure_array(model.get_edge(shape, ns.ITEMS))
        if not items:
            return None
        item_options = options.derive(parent_name=options.type_name, type_name=None).visit(shape.get('@id'))
        for item in items:
            result = self.compute_examples(item, media, item_options)
            if result:
                if is_json_media(media):
                    self.process_json_array_examples(result)
                return result
        return None

    def process_json_array_examples(self, examples: List[ExampleModel]) -> None:
        """Adds array brackets to array item examples, including each member of a union."""
        for example in examples:
            if example.has_union:
                for member in example.values:
                    wrap_json_array(member)
            else:
                wrap_json_array(example)

    def compute_union_examples(self, shape: Any, media: Optional[str], options: GenerationOptions) -> Optional[List[ExampleModel]]:
        """
        Computes one example per union member. Members are titled with their
        name or 'Union #<position>'.
        """
        model = self.model
        members = model.ensure_array(model.get_edge(shape, ns.ANY_OF))
        if not members:
            return None
        member_options = options.visit(shape.get('@id'))
        result = ExampleModel(has_union=True)
        for index, member in enumerate(members):
            member = model.resolve(member)
            data = self.compute_examples(member, media, member_options)
            if not data:
                continue
            example = data[0]
            example.has_title = True
            example.title = model.get_value(member, ns.SHACL_NAME) or f'Union #{index + 1}'
            result.values.append(example)
        return [result] if result.values else None

    def example_from_json_schema(self, shape: Any, json_schema: str, options: GenerationOptions) -> List[ExampleModel]:
        """Creates the example of a type defined with a JSON schema. The schema is kept as raw value."""
        model = self.model
        properties = model.ensure_array(model.get_edge(shape, ns.PROPERTY))
        example = None
        if properties:
            type_name = model.get_value(shape, ns.SHACL_NAME) or ns.UNKNOWN_TYPE
            example = self.example_from_properties(properties, 'application/json', type_name, None,
                                                   options.visit(shape.get('@id')))
        if example:
            example.has_raw = True
            example.raw = json_schema
        else:
            example = ExampleModel(value=json_schema)
        return [example]

    def example_from_properties(self, properties: List[Any], media: Optional[str], type_name: Optional[str],
                                parent_name: Optional[str], options: GenerationOptions) -> Optional[ExampleModel]:
        """Creates an example from type properties for JSON or XML media types."""
        type_name = type_name or ns.UNKNOWN_TYPE
        value = None
        if is_json_media(media):
            value = to_json_text(self.json_builder.example_from_properties(properties, options))
        elif is_xml_media(media):
            value = self.xml_builder.xml_from_properties(properties, type_name, parent_name, options)
        if not value:
            return None
        return ExampleModel(value=value)

    def format_xml(self, xml: str) -> str:
        return format_xml(xml)


def _load_amf(amf_file_path: str) -> Any:
    with open(amf_file_path, 'r', encoding='utf-8') as amf_file:
        return json.load(amf_file)


def _write_json(output_file_path: str, data: Any) -> None:
    output_dir = os.path.dirname(output_file_path)
    if output_dir and not os.path.exists(output_dir):
        os.makedirs(output_dir)
    with open(output_file_path, 'w', encoding='utf-8') as output_file:
        json.dump(data, output_file, indent=2, ensure_ascii=False)


def generate_examples_file(amf_file_path: str, output_file_path: str, shape_id: str, media: str,
                           raw_only: bool = False, no_auto: bool = False, type_name: Optional[str] = None) -> None:
    """
    Generates the examples of a shape or payload in an AMF JSON-LD file.

    Args:
        amf_file_path: Path of the AMF model
        output_file_path: Output path for the list of example view models (JSON)
        shape_id: '@id' of the shape or Payload node
        media: Media type of the examples
        raw_only: Only list examples defined in the API
        no_auto: Do not generate examples from types
        type_name: Name of the XML root element
    """
    if not shape_id:
        raise ValueError("A shape id is required")
    generator = ApiExampleGenerator(_load_amf(amf_file_path))
    node = generator.model.find_node(shape_id)
    if node is None:
        raise ValueError(f"No node with id {shape_id} found in {amf_file_path}")
    options = GenerationOptions(raw_only=raw_only, no_auto=no_auto, type_name=type_name or None)
    if generator.model.has_type(node, ns.PAYLOAD):
        examples = generator.generate_payload_examples(node, media, options)
    else:
        examples = generator.compute_examples(node, media, options)
    _write_json(output_file_path, [example.to_dict() for example in examples or []])


def list_media_file(amf_file_path: str, output_file_path: str, payload_ids: List[str]) -> None:
    """
    Lists the media types of payloads in an AMF JSON-LD file.

    Args:
        amf_file_path: Path of the AMF model
        output_file_path: Output path for the list of media types (JSON)
        payload_ids: '@id's of the Payload nodes
    """
    if not payload_ids:
        raise ValueError("At least one payload id is required")
    if isinstance(payload_ids, str):
        payload_ids = [payload_ids]
    generator = ApiExampleGenerator(_load_amf(amf_file_path))
    payloads = []
    for payload_id in payload_ids:
        node = generator.model.find_node(payload_id)
        if node is None:
            raise ValueError(f"No node with id {payload_id} found in {amf_file_path}")
        payloads.append(node)
    _write_json(output_file_path, generator.list_media(payloads) or [])
