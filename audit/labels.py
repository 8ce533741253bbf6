"""
Label Providers

Turn a resolved entity into a human-readable label. Providers are tried in a
fixed order and the first one that answers wins:

    1. MethodLabelProvider         entity.<attribute>()
    2. AccessorLabelProvider       entity.get_<attribute>() / get_<attribute>_display()
    3. StoredAttributeLabelProvider  model field or computed property <attribute>
    4. StringLabelProvider         str(entity)
"""

import functools
import inspect
import logging
from typing import Any, Optional

from django.utils.functional import cached_property

logger = logging.getLogger(__name__)


def to_label(value: Any) -> str:
    if value is None:
        return ''
    return str(value)


def bound_method(entity, name):
    """The bound method ``name`` of entity, without evaluating properties"""
    member = inspect.getattr_static(type(entity), name, None)
    # Django adds get_FOO_display() as a partialmethod
    if inspect.isfunction(member) or isinstance(member, (staticmethod, classmethod, functools.partialmethod)):
        return getattr(entity, name)
    return None


class LabelProvider:
    """Returns a label for (entity, attribute), or None to defer to the next provider"""

    def provide(self, entity, attribute: str) -> Optional[str]:
        raise NotImplementedError


class MethodLabelProvider(LabelProvider):
    """Zero-argument instance method named exactly like the attribute"""

    def provide(self, entity, attribute):
        method = bound_method(entity, attribute)
        if method is not None:
            return to_label(method())
        return None


class AccessorLabelProvider(LabelProvider):
    """Getter-style accessor derived from the attribute name"""

    def accessor_names(self, attribute):
        return [f'get_{attribute}', f'get_{attribute}_display']

    def provide(self, entity, attribute):
        for name in self.accessor_names(attribute):
            method = bound_method(entity, name)
            if method is not None:
                return to_label(method())
        return None


class StoredAttributeLabelProvider(LabelProvider):
    """
    Stored model field, or a computed attribute (property) on the class.
    Read failures fall through to the next provider.
    """

    def has_attribute(self, entity, attribute):
        meta = getattr(entity, '_meta', None)
        if meta is not None:
            for field in meta.concrete_fields:
                if attribute in (field.name, field.attname):
                    return True

        class_member = inspect.getattr_static(type(entity), attribute, None)
        if isinstance(class_member, (property, cached_property, functools.cached_property)):
            return True

        instance_dict = getattr(entity, '__dict__', {})
        return attribute in instance_dict and not attribute.startswith('_')

    def provide(self, entity, attribute):
        try:
            if self.has_attribute(entity, attribute):
                return to_label(getattr(entity, attribute))
        except Exception as e:
            logger.debug(f"Could not read {attribute!r} from {type(entity).__name__}: {e}")
        return None


class StringLabelProvider(LabelProvider):
    """Fallback: the entity's string representation"""

    def provide(self, entity, attribute):
        return str(entity)


class LabelProviderChain:
    """Ordered set of providers; first non-None answer wins, None when none answers"""

    def __init__(self, providers):
        self.providers = list(providers)

    def resolve(self, entity, attribute: str) -> Optional[str]:
        for provider in self.providers:
            label = provider.provide(entity, attribute)
            if label is not None:
                return label
        return None


default_label_chain = LabelProviderChain([
    MethodLabelProvider(),
    AccessorLabelProvider(),
    StoredAttributeLabelProvider(),
    StringLabelProvider(),
])


class LabelResolver:
    """
    Resolves raw foreign-key values to labels for one enrichment call.

    Never raises: lookup and extraction failures resolve to None. The
    memo only lives as long as the resolver.
    """

    def __init__(self, include_deleted=True, use_cache=True, fail_silently=True):
        self.include_deleted = include_deleted
        self.use_cache = use_cache
        self.fail_silently = fail_silently
        self._cache = {}

    def resolve(self, value, rule) -> Optional[str]:
        if value is None or value == '':
            return None

        cache_key = self._cache_key(value, rule)
        if cache_key is not None and cache_key in self._cache:
            return self._cache[cache_key]

        label = self._lookup(value, rule)

        if cache_key is not None:
            self._cache[cache_key] = label
        return label

    def _cache_key(self, value, rule):
        if not self.use_cache:
            return None
        key = (rule.entity_type, rule.label_attribute, type(value).__name__, value)
        try:
            hash(key)
        except TypeError:
            return None
        return key

    def _lookup(self, value, rule):
        try:
            entity = rule.lookup.find(value, include_deleted=self.include_deleted)
            if entity is None:
                return None
            return rule.lookup.label(entity, rule.label_attribute)
        except Exception as e:
            self._report_failure(value, rule, e)
            return None

    def _report_failure(self, value, rule, error):
        message = f"Could not resolve {rule.foreign_key}={value!r} against {rule.entity_type}: {error}"
        if self.fail_silently:
            logger.debug(message)
        else:
            logger.error(message, exc_info=error)
