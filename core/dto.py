"""
Data Transfer Objects (DTOs).
Immutable value objects passed between the rule builder and the enricher.
"""
from dataclasses import dataclass, field
from typing import Any, Optional

WILDCARD_MARKER = '.*.'
FOREIGN_KEY_SUFFIX = '_id'


@dataclass(frozen=True)
class NestedPattern:
    """Split view of an ``<container>.*.<field>`` path"""
    container_key: str
    item_field: str


@dataclass(frozen=True)
class MappingRule:
    """
    One validated field mapping.

    ``entity_type`` is the registry tag the rule was resolved to and
    ``lookup`` the EntityLookup behind it.
    """
    foreign_key: str
    entity_type: str
    label_attribute: str = 'label'
    new_key: str = ''
    lookup: Any = field(default=None, compare=False, repr=False)

    @property
    def is_nested(self) -> bool:
        return is_nested_pattern(self.foreign_key)

    @property
    def nested_pattern(self) -> Optional[NestedPattern]:
        return split_nested_pattern(self.foreign_key)

    def __post_init__(self):
        if not self.new_key:
            object.__setattr__(self, 'new_key', guess_new_key(self.foreign_key))


def is_nested_pattern(path: str) -> bool:
    return WILDCARD_MARKER in path


def split_nested_pattern(path: str) -> Optional[NestedPattern]:
    """
    Split on the first wildcard only; ``a.*.b.*.c`` gives ('a', 'b.*.c').
    """
    if not is_nested_pattern(path):
        return None
    container_key, item_field = path.split(WILDCARD_MARKER, 1)
    return NestedPattern(container_key=container_key, item_field=item_field)


def guess_new_key(path: str) -> str:
    """
    Derive the label key from a foreign-key path.

    customer_id         -> customer
    items.*.material_id -> material
    """
    key = path
    pattern = split_nested_pattern(path)
    if pattern:
        key = pattern.item_field

    if key.endswith(FOREIGN_KEY_SUFFIX):
        return key[:-len(FOREIGN_KEY_SUFFIX)]
    return key
