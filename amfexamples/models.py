""" Options and result models of the example generator """

from dataclasses import dataclass, field, replace
from typing import Any, Dict, FrozenSet, List, Optional


@dataclass(frozen=True)
class GenerationOptions:
    """
    Options threaded through example generation.

    Instances are immutable. A nested call that needs different naming context
    derives its own copy with ``derive`` and the caller's options stay as they were.
    """
    raw_only: bool = False  # only literal author examples, never synthesize
    no_auto: bool = False  # no synthesis from properties when no example exists
    type_name: Optional[str] = None  # XML root element name
    parent_name: Optional[str] = None  # XML wrapper element name for array items
    type_id: Optional[str] = None  # '@id' of the consuming payload
    visited: FrozenSet[str] = frozenset()  # '@id's of shapes being synthesized

    def derive(self, **changes: Any) -> 'GenerationOptions':
        return replace(self, **changes)

    def visit(self, shape_id: Optional[str]) -> 'GenerationOptions':
        if not shape_id:
            return self
        return replace(self, visited=self.visited | {shape_id})

    @classmethod
    def from_dict(cls, options: Optional[Dict[str, Any]]) -> 'GenerationOptions':
        """Creates options from a dict with either camelCase or snake_case keys."""
        if not options:
            return cls()
        aliases = {
            'rawOnly': 'raw_only',
            'noAuto': 'no_auto',
            'typeName': 'type_name',
            'parentName': 'parent_name',
            'typeId': 'type_id',
        }
        values = {}
        for key, value in options.items():
            name = aliases.get(key, key)
            if name in cls.__dataclass_fields__:
                values[name] = value
        if 'visited' in values:
            values['visited'] = frozenset(values['visited'])
        return cls(**values)


def as_options(options: 'GenerationOptions | Dict[str, Any] | None') -> GenerationOptions:
    if isinstance(options, GenerationOptions):
        return options
    return GenerationOptions.from_dict(options)


@dataclass
class ExampleModel:
    """
    View model of a generated example.

    ``value`` is JSON or XML text, or a native scalar when ``is_scalar`` is set.
    A union result has ``has_union`` set and carries one model per union member
    in ``values`` instead of a value.
    """
    has_raw: bool = False
    has_title: bool = False
    has_union: bool = False
    value: Any = None
    title: Optional[str] = None
    raw: Optional[str] = None
    values: List['ExampleModel'] = field(default_factory=list)
    is_scalar: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Renders the camelCase view model."""
        result: Dict[str, Any] = {
            'hasRaw': self.has_raw,
            'hasTitle': self.has_title,
            'hasUnion': self.has_union,
        }
        if self.has_title:
            result['title'] = self.title
        if self.has_union:
            result['values'] = [v.to_dict() for v in self.values]
            return result
        result['value'] = self.value
        if self.has_raw:
            result['raw'] = self.raw
        result['isScalar'] = self.is_scalar
        return result
