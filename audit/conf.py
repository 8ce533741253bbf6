"""
Enrichment configuration profiles.

Profiles are read from the AUDIT_ENRICHER Django setting:

    AUDIT_ENRICHER = {
        'MAPPINGS': {
            'default': {
                'customer_id': {'entity_type': 'crm.Customer', 'label_attribute': 'name'},
            },
            'orders': {
                'items.*.product_id': {'entity_type': 'catalog.Product', 'new_key': 'product_name'},
            },
        },
        'SETTINGS': {
            'default_label_attribute': 'label',
            'include_soft_deleted': True,
            'fail_silently': True,
            'cache_resolved_models': True,
        },
        'ENTITY_TYPES': {
            'customer': 'crm.Customer',
        },
    }
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from django.conf import settings

DEFAULT_PROFILE = 'default'

DEFAULT_SETTINGS = {
    'default_label_attribute': 'label',
    'include_soft_deleted': True,
    'fail_silently': True,
    'cache_resolved_models': True,
}


def get_enricher_settings() -> Dict[str, Any]:
    return getattr(settings, 'AUDIT_ENRICHER', None) or {}


def get_global_settings() -> Dict[str, Any]:
    configured = get_enricher_settings().get('SETTINGS') or {}
    return {**DEFAULT_SETTINGS, **configured}


@dataclass(frozen=True)
class EnrichmentProfile:
    """A named set of field mappings plus the switches that govern resolution"""
    name: str = DEFAULT_PROFILE
    mappings: Dict[str, Any] = field(default_factory=dict)
    default_label_attribute: str = 'label'
    include_soft_deleted: bool = True
    fail_silently: bool = True
    cache_resolved_models: bool = True

    @property
    def is_empty(self):
        return not self.mappings


def load_profile(name: str = DEFAULT_PROFILE) -> EnrichmentProfile:
    """
    Build a profile from settings. Unknown names, and profiles that are not
    a mapping, come back with no mappings.
    """
    mappings = (get_enricher_settings().get('MAPPINGS') or {}).get(name)
    if not isinstance(mappings, dict):
        mappings = {}

    options = get_global_settings()
    default_label_attribute = options['default_label_attribute']
    if not isinstance(default_label_attribute, str) or not default_label_attribute:
        default_label_attribute = DEFAULT_SETTINGS['default_label_attribute']

    return EnrichmentProfile(
        name=name,
        mappings=dict(mappings),
        default_label_attribute=default_label_attribute,
        include_soft_deleted=bool(options['include_soft_deleted']),
        fail_silently=bool(options['fail_silently']),
        cache_resolved_models=bool(options['cache_resolved_models']),
    )


def get_profile_names():
    return list((get_enricher_settings().get('MAPPINGS') or {}).keys())


def get_entity_types() -> Dict[str, str]:
    return dict(get_enricher_settings().get('ENTITY_TYPES') or {})
