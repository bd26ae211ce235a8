import os
import sys
import unittest

import xmlunittest

current_script_path = os.path.abspath(__file__)
project_root = os.path.dirname(os.path.dirname(current_script_path))
sys.path.append(project_root)
sys.path.append(os.path.dirname(current_script_path))

from amfexamples.amfmodel import AmfModel
from amfexamples.models import GenerationOptions
from amfexamples.xmlexample import XmlExampleBuilder, singular_name
from amfexamples.xmltree import XmlDocument, format_xml, sanitize_name
from amf_fixtures import (array_shape, data_array, data_object, data_scalar, document, example, examples, literal,
                          node_shape, prop, scalar, union_shape, xml_serialization)

DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


class TestXmlTree(unittest.TestCase):

    def test_format_collapses_empty_elements(self):
        self.assertEqual(format_xml('<a><b></b></a>'), '<a>\n  <b></b>\n</a>\n')

    def test_format_self_closing(self):
        self.assertEqual(format_xml('<a><b/></a>'), '<a>\n  <b/>\n</a>\n')

    def test_format_nested_text(self):
        actual = format_xml('<a><b><c>1</c></b><d>2</d></a>')
        self.assertEqual(actual, '<a>\n  <b>\n    <c>1</c>\n  </b>\n  <d>2</d>\n</a>\n')

    def test_format_keeps_declaration(self):
        actual = format_xml('<?xml version="1.0" encoding="UTF-8"?><a>x</a>')
        self.assertEqual(actual, DECLARATION + '<a>x</a>\n')

    def test_sanitize_name(self):
        self.assertEqual(sanitize_name('user-name?'), 'user-name')
        self.assertEqual(sanitize_name('user name!'), 'username')
        self.assertEqual(sanitize_name('a_b-1'), 'a_b-1')
        self.assertEqual(sanitize_name(None), '')

    def test_document(self):
        doc = XmlDocument('root')
        child = doc.add_element(doc.root, 'child')
        doc.set_attribute(child, 'id', '1')
        doc.append_text(child, 'text')
        doc.append_text(doc.root, 'tail')
        self.assertEqual(doc.serialize(), '<root><child id="1">text</child>tail</root>')

    def test_singular_name(self):
        self.assertEqual(singular_name('addresses'), 'address')
        self.assertEqual(singular_name('books'), 'book')
        self.assertEqual(singular_name('data'), 'data')


class TestXmlExampleBuilder(xmlunittest.XmlTestCase):

    def builder(self, *declares):
        return XmlExampleBuilder(AmfModel(document(*declares)))

    def test_properties_to_elements(self):
        user = node_shape(
            '#/User', 'User',
            prop('#/User/name', 'name', scalar('#/User/name/s', 'name')),
            prop('#/User/age', 'age', scalar('#/User/age/s', 'age', 'integer')),
        )
        actual = self.builder(user).xml_from_properties(user['shacl:property'], 'User', None, GenerationOptions())
        self.assertEqual(actual, DECLARATION + '<User>\n  <name></name>\n  <age></age>\n</User>\n')
        root = self.assertXmlDocument(actual.encode('utf-8'))
        self.assertXpathsExist(root, ['/User/name', '/User/age'])

    def test_attribute_and_default(self):
        item = node_shape(
            '#/Item', 'Item',
            prop('#/Item/id', 'id', scalar('#/Item/id/s', 'id', 'string',
                                           **xml_serialization('#/Item/id/s/xml', 'item-id?', attribute=True))),
            prop('#/Item/label', 'label', scalar('#/Item/label/s', 'label', 'string',
                                                 **{"shacl:defaultValueStr": literal("Widget")})),
        )
        actual = self.builder(item).xml_from_properties(item['shacl:property'], 'Item', None, GenerationOptions())
        self.assertEqual(actual, DECLARATION + '<Item item-id="string">\n  <label>Widget</label>\n</Item>\n')
        self.assertNotIn('?', actual.split('\n', 1)[1])

    def test_element_name_is_sanitized(self):
        item = node_shape('#/Item', 'Item', prop('#/Item/n', 'user name?', scalar('#/Item/n/s', 'user name?')))
        actual = self.builder(item).xml_from_properties(item['shacl:property'], 'Item', None, GenerationOptions())
        root = self.assertXmlDocument(actual.encode('utf-8'))
        self.assertXpathsExist(root, ['/Item/username'])

    def test_example_text(self):
        title = scalar('#/t', 'title', **examples(example('#/t/e', raw='Dune')))
        book = node_shape('#/Book', 'Book', prop('#/Book/title', 'title', title))
        actual = self.builder(book).xml_from_properties(book['shacl:property'], 'Book', None, GenerationOptions())
        root = self.assertXmlDocument(actual.encode('utf-8'))
        self.assertXpathValues(root, '/Book/title/text()', ['Dune'])

    def test_wrapped_array(self):
        book = scalar('#/book', 'book', **{"shacl:defaultValueStr": literal("Dune")})
        books = array_shape('#/books', 'books', book, **xml_serialization('#/books/xml', wrapped=True))
        library = node_shape('#/Library', 'Library', prop('#/Library/books', 'books', books))
        actual = self.builder(library).xml_from_properties(library['shacl:property'], 'Library', None,
                                                           GenerationOptions())
        self.assertEqual(actual, DECLARATION + '<Library>\n  <books>\n    <book>Dune</book>\n  </books>\n</Library>\n')

    def test_unwrapped_array(self):
        book = scalar('#/book', 'book', **{"shacl:defaultValueStr": literal("Dune")})
        books = array_shape('#/books', 'books', book)
        library = node_shape('#/Library', 'Library', prop('#/Library/books', 'books', books))
        actual = self.builder(library).xml_from_properties(library['shacl:property'], 'Library', None,
                                                           GenerationOptions())
        root = self.assertXmlDocument(actual.encode('utf-8'))
        self.assertXpathValues(root, '/Library/books/text()', ['Dune'])
        self.assertXpathsOnlyOne(root, ['/Library/books'])

    def test_array_of_objects(self):
        author = node_shape('#/Author', 'author', prop('#/Author/name', 'name', scalar('#/Author/name/s', 'name')))
        authors = array_shape('#/authors', 'authors', author, **xml_serialization('#/authors/xml', wrapped=True))
        book = node_shape('#/Book', 'Book', prop('#/Book/authors', 'authors', authors))
        actual = self.builder(book).xml_from_properties(book['shacl:property'], 'Book', None, GenerationOptions())
        root = self.assertXmlDocument(actual.encode('utf-8'))
        self.assertXpathsExist(root, ['/Book/authors/author/name'])

    def test_nested_object(self):
        street = scalar('#/street', 'street')
        address = node_shape('#/Address', 'address', prop('#/Address/street', 'street', street))
        user = node_shape('#/User', 'User', prop('#/User/address', 'address', address))
        actual = self.builder(user).xml_from_properties(user['shacl:property'], 'User', None, GenerationOptions())
        root = self.assertXmlDocument(actual.encode('utf-8'))
        self.assertXpathsExist(root, ['/User/address/street'])

    def test_union_with_scalar_member(self):
        code = union_shape('#/code', 'Code', scalar('#/code/int', None, 'integer'), scalar('#/code/str', None))
        status = node_shape('#/Status', 'Status', prop('#/Status/code', 'code', code))
        actual = self.builder(status).xml_from_properties(status['shacl:property'], 'Status', None,
                                                          GenerationOptions())
        root = self.assertXmlDocument(actual.encode('utf-8'))
        self.assertXpathValues(root, '/Status/code/text()', ['integer'])

    def test_parent_name_wraps_type(self):
        user = node_shape('#/User', 'User', prop('#/User/name', 'name', scalar('#/User/name/s', 'name')))
        actual = self.builder(user).xml_from_properties(user['shacl:property'], 'User', 'Users',
                                                        GenerationOptions())
        root = self.assertXmlDocument(actual.encode('utf-8'))
        self.assertXpathsExist(root, ['/Users/User/name'])

    def test_range_example_structure(self):
        isbn = scalar('#/isbn', 'isbn', **examples(
            example('#/isbn/e', structure=data_scalar('#/isbn/e/s', '978-0441013593'))))
        book = node_shape('#/Book', 'Book', prop('#/Book/isbn', 'isbn', isbn))
        actual = self.builder(book).xml_from_properties(book['shacl:property'], 'Book', None, GenerationOptions())
        root = self.assertXmlDocument(actual.encode('utf-8'))
        self.assertXpathValues(root, '/Book/isbn/text()', ['978-0441013593'])

    def test_xml_from_structure(self):
        structure = data_object(
            '#/o',
            name=data_scalar('#/o/name', 'Ada'),
            active=data_scalar('#/o/active', 'true', 'boolean'),
            addresses=data_array('#/o/addresses', data_object('#/o/addresses/0',
                                                              street=data_scalar('#/o/addresses/0/s', 'Main'))),
        )
        actual = self.builder().xml_from_structure(structure, 'Person')
        root = self.assertXmlDocument(actual.encode('utf-8'))
        self.assertXpathValues(root, '/Person/name/text()', ['Ada'])
        self.assertXpathValues(root, '/Person/active/text()', ['true'])
        self.assertXpathValues(root, '/Person/addresses/address/street/text()', ['Main'])

    def test_xml_from_structure_default_root(self):
        actual = self.builder().xml_from_structure(data_object('#/o', a=data_scalar('#/o/a', '1', 'integer')))
        self.assertEqual(actual, DECLARATION + '<unknown-type>\n  <a>1</a>\n</unknown-type>\n')


if __name__ == '__main__':
    unittest.main()
