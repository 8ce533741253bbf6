"""
Entity Registry

Maps entity type tags to lookups. The enricher only ever talks to an
EntityLookup, so entities that do not live in the Django ORM can be plugged
in by registering a custom lookup under a tag.
"""

import inspect
import logging

from django.apps import apps
from django.db import models
from django.utils.module_loading import import_string

from audit.labels import default_label_chain
from core.exceptions import InvalidEntityTypeError
from core.repositories import BaseRepository

logger = logging.getLogger(__name__)


class EntityLookup:
    """
    Lookup capability for one entity type.

    Subclasses implement find(); label() defaults to the provider chain.
    """

    def find(self, identifier, include_deleted=True):
        """Return the entity for identifier, or None"""
        raise NotImplementedError

    def label(self, entity, attribute):
        """Human-readable label for an entity"""
        return default_label_chain.resolve(entity, attribute)


class ModelEntityLookup(EntityLookup):
    """EntityLookup backed by a Django model"""

    def __init__(self, model):
        self.model = model
        self.repository = BaseRepository(model)

    def find(self, identifier, include_deleted=True):
        return self.repository.get_by_id(identifier, include_deleted=include_deleted)

    def __repr__(self):
        return f"<ModelEntityLookup {self.model._meta.label}>"


def is_model_class(value):
    return inspect.isclass(value) and issubclass(value, models.Model) and not value._meta.abstract


class EntityRegistry:
    """
    Registry of entity types usable in field mappings.

    Tags are free-form strings; Django models are keyed by their
    ``app_label.ModelName`` label.
    """

    def __init__(self):
        self._lookups = {}

    @staticmethod
    def tag_for(entity_type):
        if inspect.isclass(entity_type) and issubclass(entity_type, models.Model):
            return entity_type._meta.label
        return entity_type

    def register(self, entity_type, lookup=None):
        """
        Register an entity type.

        Args:
            entity_type: tag string or Django model class
            lookup: EntityLookup instance (defaults to ModelEntityLookup for models)
        """
        if lookup is None:
            if not is_model_class(entity_type):
                raise TypeError(f"A lookup is required to register non-model entity type {entity_type!r}")
            lookup = ModelEntityLookup(entity_type)

        if not isinstance(lookup, EntityLookup):
            raise TypeError(f"{lookup!r} is not an EntityLookup")

        tag = self.tag_for(entity_type)
        self._lookups[tag] = lookup
        logger.debug(f"Registered entity type {tag}")
        return lookup

    def unregister(self, entity_type):
        self._lookups.pop(self.tag_for(entity_type), None)

    def is_registered(self, entity_type):
        try:
            return self.tag_for(entity_type) in self._lookups
        except TypeError:
            # unhashable
            return False

    def clear(self):
        self._lookups.clear()

    def resolve(self, entity_type, field):
        """
        Resolve an entity type reference from a field mapping.

        Returns:
            (tag, EntityLookup)

        Raises:
            InvalidEntityTypeError: for the mapping at ``field``
        """
        if self.is_registered(entity_type):
            tag = self.tag_for(entity_type)
            return tag, self._lookups[tag]

        if inspect.isclass(entity_type):
            if is_model_class(entity_type):
                return entity_type._meta.label, self.register(entity_type)
            raise InvalidEntityTypeError.not_an_entity(entity_type.__qualname__, field)

        if not isinstance(entity_type, str):
            raise InvalidEntityTypeError.not_a_type_reference(field, entity_type)

        target = self._load(entity_type, field)
        if is_model_class(target):
            if not self.is_registered(target):
                self.register(target)
            # The string itself becomes an alias for the model's lookup
            lookup = self._lookups[target._meta.label]
            self._lookups[entity_type] = lookup
            return target._meta.label, lookup
        if isinstance(target, EntityLookup):
            self.register(entity_type, target)
            return entity_type, target

        raise InvalidEntityTypeError.not_an_entity(entity_type, field)

    @staticmethod
    def _load(name, field):
        """Load 'app_label.ModelName' from the app registry, else a dotted import path"""
        if not name:
            raise InvalidEntityTypeError.not_found(name, field)

        if name.count('.') == 1:
            try:
                return apps.get_model(name)
            except LookupError:
                pass

        try:
            return import_string(name)
        except (ImportError, ValueError, TypeError):
            # relative or empty module segments, e.g. ".Contact" or ".."
            raise InvalidEntityTypeError.not_found(name, field)


# Default registry, populated by AuditConfig.ready()
registry = EntityRegistry()
