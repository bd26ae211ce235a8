""" XmlExampleBuilder class for building XML examples from AMF shapes and structured values """

import logging
from typing import Any, List, Optional
from xml.etree.ElementTree import Element

from amfexamples import vocabulary as ns
from amfexamples.amfmodel import AmfModel
from amfexamples.jsonexample import data_entries, typed_value
from amfexamples.models import GenerationOptions
from amfexamples.shapes import ShapeKind, classify, example_raw_value, list_examples, read_data_type
from amfexamples.xmltree import XmlDocument, sanitize_name

logger = logging.getLogger(__name__)


def singular_name(name: str) -> str:
    """Element name of a collection member derived from the collection's element name."""
    if name.endswith('es'):
        return name[:-2]
    if name.endswith('s'):
        return name[:-1]
    return name


def xml_text(value: Any) -> str:
    """Text of a native value as written in XML."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def is_true(value: Any) -> bool:
    return value is True or value == 'true'


class XmlExampleBuilder:
    """ Builds XML examples from AMF type properties and example structures """

    def __init__(self, model: AmfModel):
        self.model = model

    # ------------------------------------------------------------ STRUCTURED VALUES

    def xml_from_structure(self, structure: Any, type_name: Optional[str] = None) -> str:
        """Renders an example's structured value as a formatted XML document rooted at type_name."""
        root_name = sanitize_name(type_name) or ns.UNKNOWN_TYPE
        doc = XmlDocument(root_name)
        if isinstance(structure, list):
            structure = structure[0] if structure else None
        if isinstance(structure, dict):
            for name, node in data_entries(self.model, structure):
                self.process_data_property(doc, doc.root, node, name)
        return doc.to_pretty_xml()

    def process_data_property(self, doc: XmlDocument, node: Element, data: Any, name: Optional[str]) -> None:
        """Appends the element for one data node (scalar, object or array) of a structured value."""
        if not data or not name:
            return
        name = sanitize_name(name)
        if not name:
            return
        model = self.model
        element = doc.create_element(name)
        if model.has_type(data, ns.DATA_SCALAR):
            value = typed_value(model, data)
            if value is not None:
                doc.append_text(element, xml_text(value))
        elif model.has_type(data, ns.DATA_ARRAY):
            self.process_data_array(doc, element, data, name)
        elif model.has_type(data, ns.DATA_OBJECT):
            self.process_data_object(doc, element, data)
        elif isinstance(data, dict) and data.get('@value'):
            # a bare literal becomes text of the current node
            doc.append_text(node, xml_text(data['@value']))
            return
        doc.append_child(node, element)

    def process_data_array(self, doc: XmlDocument, node: Element, data: Any, name: str) -> None:
        child_name = singular_name(name)
        for item in self.model.ensure_array(self.model.get_edge(data, ns.MEMBER)) or []:
            if isinstance(item, list):
                item = item[0] if item else None
            self.process_data_property(doc, node, item, child_name)

    def process_data_object(self, doc: XmlDocument, node: Element, data: Any) -> None:
        for name, item in data_entries(self.model, data):
            self.process_data_property(doc, node, item, name)

    # ------------------------------------------------------------ TYPE PROPERTIES

    def xml_from_properties(self, properties: List[Any], type_name: Optional[str], parent_name: Optional[str],
                            options: GenerationOptions) -> str:
        """
        Generates an XML example from a type's properties.

        The root element is named after the type. When parent_name is given (the
        type is an array item) the root is named after the parent and the type
        element is nested in it.
        """
        type_name = sanitize_name(type_name) or ns.UNKNOWN_TYPE
        parent_name = sanitize_name(parent_name)
        doc = XmlDocument(parent_name or type_name)
        main = doc.root
        if parent_name:
            main = doc.add_element(main, type_name)
        for property_shape in properties:
            self.process_property(doc, main, property_shape, options)
        return doc.to_pretty_xml()

    def _enter(self, shape: Any, options: GenerationOptions) -> Optional[GenerationOptions]:
        shape_id = shape.get('@id') if isinstance(shape, dict) else None
        if shape_id and shape_id in options.visited:
            logger.warning("Cyclic reference to shape %s, skipping", shape_id)
            return None
        return options.visit(shape_id)

    def process_property(self, doc: XmlDocument, node: Element, property_shape: Any, options: GenerationOptions) -> None:
        """Renders one property shape into the node as an element or an attribute."""
        model = self.model
        property_shape = model.resolve(property_shape)
        if not property_shape:
            return
        if classify(model, property_shape) == ShapeKind.OBJECT:
            inner = self._enter(property_shape, options)
            if inner is None:
                return
            for item in model.ensure_array(model.get_edge(property_shape, ns.PROPERTY)) or []:
                self.process_property(doc, node, item, inner)
            return
        range_shape = model.resolve(model.get_first(property_shape, ns.RANGE))
        if not range_shape:
            return
        serialization = model.get_first(range_shape, ns.XML_SERIALIZATION)
        examples = list_examples(model, range_shape)
        if examples:
            name = model.get_value(serialization, ns.XML_NAME) or model.get_value(range_shape, ns.SHACL_NAME)
            if self.xml_from_example(doc, node, examples[0], name):
                return
        kind = classify(model, range_shape)
        if kind == ShapeKind.UNION:
            members = model.ensure_array(model.get_edge(range_shape, ns.ANY_OF))
            if not members:
                return
            member = model.resolve(members[0])
            if classify(model, member) == ShapeKind.SCALAR:
                self.process_union_scalar_property(doc, node, property_shape, member)
            else:
                inner = self._enter(range_shape, options)
                if inner is not None:
                    self.process_property(doc, node, member, inner)
            return
        is_wrapped = False
        if serialization:
            if is_true(model.get_value(serialization, ns.XML_ATTRIBUTE)):
                self.append_attribute(doc, node, range_shape, serialization)
                return
            is_wrapped = is_true(model.get_value(serialization, ns.XML_WRAPPED))
        if kind == ShapeKind.OBJECT:
            self.append_elements(doc, node, range_shape, options)
            return
        if kind == ShapeKind.ARRAY:
            self.append_array(doc, node, range_shape, is_wrapped, options)
            return
        self.append_element(doc, node, range_shape)

    def xml_from_example(self, doc: XmlDocument, node: Element, example: Any, name: Optional[str]) -> bool:
        """
        Appends the structured value of a range's example instead of a generated value.
        Returns False when the example has no structured value.
        """
        structure = self.model.get_first(self.model.resolve(example), ns.STRUCTURED_VALUE)
        if structure is None:
            return False
        self.process_data_property(doc, node, structure, name)
        return True

    def append_attribute(self, doc: XmlDocument, node: Element, range_shape: Any, serialization: Any) -> None:
        """Sets an attribute for a property serialized as XML attribute. Its value is the datatype name."""
        model = self.model
        name = model.get_value(serialization, ns.XML_NAME) or model.get_value(range_shape, ns.SHACL_NAME)
        if not name:
            return
        name = sanitize_name(str(name).replace('?', ''))
        if not name:
            return
        doc.set_attribute(node, name, read_data_type(model, range_shape) or '')

    def scalar_text(self, shape: Any) -> str:
        """
        Text of an element generated for a scalar: the default value, the first
        example's raw value or a single space so the element is not rendered empty.
        """
        value = self.model.get_value(shape, ns.DEFAULT_VALUE_STR)
        if not value:
            value = example_raw_value(self.model, shape)
        if not value:
            value = ' '
        return xml_text(value)

    def append_element(self, doc: XmlDocument, node: Element, range_shape: Any) -> Optional[Element]:
        """Appends an element named after the range with its scalar text."""
        name = sanitize_name(self.model.get_value(range_shape, ns.SHACL_NAME))
        if not name:
            return None
        element = doc.add_element(node, name)
        doc.append_text(element, self.scalar_text(range_shape))
        return element

    def append_elements(self, doc: XmlDocument, node: Element, range_shape: Any, options: GenerationOptions) -> None:
        """Appends an element for an object range and renders its properties into it."""
        element = self.append_element(doc, node, range_shape)
        if element is None:
            return
        inner = self._enter(range_shape, options)
        if inner is None:
            return
        for item in self.model.ensure_array(self.model.get_edge(range_shape, ns.PROPERTY)) or []:
            self.process_property(doc, element, item, inner)

    def append_array(self, doc: XmlDocument, node: Element, range_shape: Any, is_wrapped: bool,
                     options: GenerationOptions) -> None:
        """
        Appends the elements of an array range.

        A wrapped array gets one element named after the range with one child per
        item type. Otherwise the item elements are named after the range and
        appended to the node as siblings.
        """
        model = self.model
        inner = self._enter(range_shape, options)
        if inner is None:
            return
        range_name = sanitize_name(model.get_value(range_shape, ns.SHACL_NAME))
        parent = node
        if is_wrapped:
            if not range_name:
                return
            parent = doc.add_element(node, range_name)
        for item in model.ensure_array(model.get_edge(range_shape, ns.ITEMS)) or []:
            item = model.resolve(item)
            name = range_name
            if is_wrapped:
                name = sanitize_name(model.get_value(item, ns.SHACL_NAME)) or range_name
            if not name:
                continue
            self.append_item(doc, parent, item, name, inner)

    def append_item(self, doc: XmlDocument, node: Element, item: Any, name: str, options: GenerationOptions) -> None:
        model = self.model
        element = doc.add_element(node, name)
        if classify(model, item) == ShapeKind.OBJECT:
            inner = self._enter(item, options)
            if inner is None:
                return
            for property_shape in model.ensure_array(model.get_edge(item, ns.PROPERTY)) or []:
                self.process_property(doc, element, property_shape, inner)
            return
        doc.append_text(element, self.scalar_text(item))

    def process_union_scalar_property(self, doc: XmlDocument, node: Element, property_shape: Any, member: Any) -> None:
        """Appends a placeholder element for a union property whose first member is a scalar."""
        name = sanitize_name(self.model.get_value(property_shape, ns.SHACL_NAME)) or 'unknown'
        element = doc.add_element(node, name)
        doc.append_text(element, read_data_type(self.model, member) or '')
