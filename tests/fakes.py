"""
In-memory entity lookups for tests that do not need the database.
"""

from audit.registry import EntityLookup, EntityRegistry


class Record:
    """Plain entity with arbitrary attributes"""

    def __init__(self, pk, **attributes):
        self.pk = pk
        self.__dict__.update(attributes)

    def __str__(self):
        return f"Record #{self.pk}"


class DictLookup(EntityLookup):
    """Entities keyed by id; ids in ``deleted`` are tombstoned"""

    def __init__(self, entities=None, deleted=()):
        self.entities = dict(entities or {})
        self.deleted = set(deleted)
        self.calls = []

    def find(self, identifier, include_deleted=True):
        self.calls.append(identifier)
        if identifier in self.deleted and not include_deleted:
            return None
        return self.entities.get(identifier)


class ExplodingLookup(EntityLookup):
    """Lookup whose backend is down"""

    def find(self, identifier, include_deleted=True):
        raise ConnectionError("entity store unavailable")


def make_registry(**lookups):
    registry = EntityRegistry()
    for tag, lookup in lookups.items():
        registry.register(tag, lookup)
    return registry


# Importable lookup instance, referenced by dotted path in mappings
PLANETS = DictLookup({1: Record(1, name='Mercury'), 3: Record(3, name='Earth')})
