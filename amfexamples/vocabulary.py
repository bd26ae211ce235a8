"""AMF vocabulary IRIs used by the example generator.

The names follow the AMF namespaces as they appear in an expanded JSON-LD
document. Compacted documents map these IRIs to prefixed keys through their
``@context`` (see ``AmfModel.amf_key``).
"""

# Namespaces
AML_VOCABULARIES = 'http://a.ml/vocabularies/'
DOCUMENT = AML_VOCABULARIES + 'document#'
CORE = AML_VOCABULARIES + 'core#'
API_CONTRACT = AML_VOCABULARIES + 'apiContract#'
SHAPES = AML_VOCABULARIES + 'shapes#'
DATA = AML_VOCABULARIES + 'data#'
DOC_SOURCE_MAPS = AML_VOCABULARIES + 'document-source-maps#'
SHACL = 'http://www.w3.org/ns/shacl#'
XML_SCHEMA = 'http://www.w3.org/2001/XMLSchema#'
RDF_SCHEMA = 'http://www.w3.org/2000/01/rdf-schema#'

# Classes
PAYLOAD = API_CONTRACT + 'Payload'
EXAMPLE = API_CONTRACT + 'Example'
NAMED_EXAMPLES = DOCUMENT + 'NamedExamples'
SCALAR_SHAPE = SHAPES + 'ScalarShape'
ARRAY_SHAPE = SHAPES + 'ArrayShape'
UNION_SHAPE = SHAPES + 'UnionShape'
NIL_SHAPE = SHAPES + 'NilShape'
NODE_SHAPE = SHACL + 'NodeShape'
DATA_SCALAR = DATA + 'Scalar'
DATA_OBJECT = DATA + 'Object'
DATA_ARRAY = DATA + 'Array'

# Properties
MEDIA_TYPE = CORE + 'mediaType'
CORE_NAME = CORE + 'name'
SCHEMA = SHAPES + 'schema'
EXAMPLES = API_CONTRACT + 'examples'
ITEMS = SHAPES + 'items'
ANY_OF = SHAPES + 'anyOf'
RANGE = SHAPES + 'range'
XML_SERIALIZATION = SHAPES + 'xmlSerialization'
XML_NAME = SHAPES + 'xmlName'
XML_ATTRIBUTE = SHAPES + 'xmlAttribute'
XML_WRAPPED = SHAPES + 'xmlWrapped'
RAW = DOCUMENT + 'raw'
STRUCTURED_VALUE = DOCUMENT + 'structuredValue'
LINK_TARGET = DOCUMENT + 'link-target'
LINK_LABEL = DOCUMENT + 'link-label'
DECLARES = DOCUMENT + 'declares'
REFERENCES = DOCUMENT + 'references'
DATA_VALUE = DATA + 'value'
SHACL_NAME = SHACL + 'name'
SHACL_RAW = SHACL + 'raw'
PROPERTY = SHACL + 'property'
DATATYPE = SHACL + 'datatype'
DEFAULT_VALUE = SHACL + 'defaultValue'
DEFAULT_VALUE_STR = SHACL + 'defaultValueStr'
MEMBER = RDF_SCHEMA + 'member'
SOURCES = DOC_SOURCE_MAPS + 'sources'
PARSED_JSON_SCHEMA = DOC_SOURCE_MAPS + 'parsed-json-schema'
TRACKED_ELEMENT = DOC_SOURCE_MAPS + 'tracked-element'
SOURCE_MAP_VALUE = DOC_SOURCE_MAPS + 'value'

# Generator constants
UNKNOWN_TYPE = 'unknown-type'
INLINE_TYPE_PREFIX = 'amf_inline_type'
GENERATED_EXAMPLE_PREFIX = 'example_'
AMF_ID_PREFIX = 'amf://id'
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
