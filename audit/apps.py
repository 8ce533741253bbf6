"""
Audit app configuration
"""

import logging

from django.apps import AppConfig
from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)


class AuditConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'audit'
    verbose_name = 'Audit Logging'

    def ready(self):
        """Register the entity types declared in AUDIT_ENRICHER['ENTITY_TYPES']"""
        from audit.conf import get_entity_types
        from audit.registry import registry
        from core.exceptions import InvalidEntityTypeError

        for tag, target in get_entity_types().items():
            try:
                _, lookup = registry.resolve(target, f"ENTITY_TYPES[{tag!r}]")
            except InvalidEntityTypeError as e:
                raise ImproperlyConfigured(f"AUDIT_ENRICHER: {e.message}") from e
            registry.register(tag, lookup)
            logger.debug(f"Entity type {tag!r} registered for audit enrichment")
