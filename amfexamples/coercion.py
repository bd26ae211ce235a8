"""
Coercion of AMF literal values to native Python values.

Datatypes are identified by an XSD or AMF shapes IRI (``http://www.w3.org/2001/XMLSchema#integer``),
a compacted key (``xsd:integer``) or a bare name (``integer``).
"""

import math
import re
from typing import Any, Optional

NUMERIC_TYPES = {'number', 'integer', 'long', 'float', 'double'}
BOOLEAN_TYPES = {'boolean'}
NIL_TYPES = {'nil', 'null'}
DECIMAL_LITERAL = re.compile(r'[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?')


def datatype_name(datatype_id: Optional[str]) -> str:
    """Returns the lower-cased local name of a datatype identifier."""
    if not datatype_id:
        return ''
    name = datatype_id
    if '#' in name:
        name = name[name.rfind('#') + 1:]
    elif ':' in name:
        name = name[name.rfind(':') + 1:]
    return name.lower()


def parse_number(value: Any) -> int | float:
    """Parses a numeric literal. Anything that is not a finite number yields 0."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else 0
    text = str(value).strip()
    match = DECIMAL_LITERAL.fullmatch(text)
    if not match:
        return 0
    if not match.group(2) and '.' not in text:
        return int(text)
    number = float(text)
    return number if math.isfinite(number) else 0


def type_to_value(value: Any, datatype_id: Optional[str]) -> Any:
    """Casts a literal to the native value of the given datatype."""
    name = datatype_name(datatype_id)
    if name in BOOLEAN_TYPES:
        if value is None:
            return None
        if isinstance(value, bool):
            return value
        return value == 'true'
    if name in NIL_TYPES:
        return None
    if name in NUMERIC_TYPES:
        if value is None or value == '':
            return 0
        return parse_number(value)
    if value is None:
        return ''
    return value


def zero_value(datatype_id: Optional[str]) -> Any:
    """Value used for a scalar when neither a default nor an example is available."""
    name = datatype_name(datatype_id)
    if name in NUMERIC_TYPES:
        return 0
    if name in BOOLEAN_TYPES:
        return False
    if name in NIL_TYPES:
        return None
    return ''
