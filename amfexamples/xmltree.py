""" Minimal XML document builder and the pretty printer used for XML examples """

import re
from typing import Optional
from xml.etree.ElementTree import Element, SubElement, tostring

from amfexamples.vocabulary import XML_DECLARATION


class XmlDocument:
    """
    XML document under construction.

    Wraps ElementTree so the example builders only create elements, text and
    attributes and serialize the result.
    """

    def __init__(self, root_name: str):
        self.root = Element(root_name)

    def create_element(self, name: str) -> Element:
        """Creates an element that is not attached to the document yet."""
        return Element(name)

    def append_child(self, parent: Element, child: Element) -> Element:
        parent.append(child)
        return child

    def add_element(self, parent: Element, name: str) -> Element:
        """Creates an element and appends it to the parent."""
        return SubElement(parent, name)

    def append_text(self, node: Element, text: str) -> None:
        """Appends a text node after the current last child of the node."""
        if len(node):
            last = node[-1]
            last.tail = (last.tail or '') + text
        else:
            node.text = (node.text or '') + text

    def set_attribute(self, node: Element, name: str, value: str) -> None:
        node.set(name, value)

    def serialize(self) -> str:
        return tostring(self.root, encoding='unicode')

    def to_pretty_xml(self) -> str:
        """Serializes the document with the XML declaration and formats it."""
        return format_xml(XML_DECLARATION + self.serialize())


_TAG_BREAK = re.compile(r'(>)\s*(<)(/*)')
_TRAILING_SPACE = re.compile(r' *(.*) +\n')
_TAG_CONTENT = re.compile(r'(<.+>)(.+\n)')
_XML_DECL_LINE = re.compile(r'\s*<\?xml')
_SINGLE_LINE = re.compile(r'<.+/>')
_CLOSING_LINE = re.compile(r'</.+>')
_OPENING_LINE = re.compile(r'<[^!].*>')

# indent change keyed by (previous line type, current line type)
_TRANSITIONS = {
    ('single', 'single'): 0,
    ('single', 'closing'): -2,
    ('single', 'opening'): 0,
    ('single', 'other'): 0,
    ('closing', 'single'): 0,
    ('closing', 'closing'): -2,
    ('closing', 'opening'): 0,
    ('closing', 'other'): 0,
    ('opening', 'single'): 2,
    ('opening', 'closing'): 0,
    ('opening', 'opening'): 2,
    ('opening', 'other'): 2,
    ('other', 'single'): 0,
    ('other', 'closing'): -2,
    ('other', 'opening'): 0,
    ('other', 'other'): 0,
}


def _line_type(line: str) -> str:
    if _SINGLE_LINE.search(line):
        return 'single'
    if _CLOSING_LINE.search(line):
        return 'closing'
    if _OPENING_LINE.search(line):
        return 'opening'
    return 'other'


def format_xml(xml: str) -> str:
    """
    Pretty prints an XML string.

    Every tag goes on its own line and is indented by the transition between the
    type of the previous line and the current one (self-closing, closing, opening
    or other). An opening tag directly followed by its closing tag is kept on one
    line.
    """
    xml = _TAG_BREAK.sub(r'\1\n\2\3', xml)
    xml = _TRAILING_SPACE.sub(r'\1\n', xml)
    xml = _TAG_CONTENT.sub(r'\1\n\2', xml)
    formatted = ''
    indent = 0
    last_type = 'other'
    for line in xml.split('\n'):
        if _XML_DECL_LINE.search(line):
            formatted += line + '\n'
            continue
        line_type = _line_type(line)
        transition = (last_type, line_type)
        last_type = line_type
        indent += _TRANSITIONS[transition]
        if transition == ('opening', 'closing'):
            formatted = formatted[:-1] + line + '\n'
        else:
            formatted += ' ' * indent + line + '\n'
    return formatted


def sanitize_name(name: Optional[str]) -> str:
    """Removes every character that is not allowed in generated element and attribute names."""
    if not name:
        return ''
    return re.sub(r'[^a-zA-Z0-9_-]', '', str(name))
