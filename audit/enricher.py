"""
Audit Log Enricher

Replaces opaque foreign-key ids inside an audit log entry's ``old`` and
``attributes`` snapshots with human-readable labels.

Example:
    enricher.enrich_activity(log, {
        'contact_id': {
            'entity_type': 'crm.Contact',
            'label_attribute': 'name',
            'new_key': 'customer',
        },
        'items.*.material_id': {
            'entity_type': 'stock.Material',
        },
    })

    # log.properties['attributes'] == {'contact_id': 1, 'customer': 'Acme', ...}
"""

import copy
from typing import Any, Dict, Optional

from audit.conf import DEFAULT_PROFILE, EnrichmentProfile, load_profile
from audit.labels import LabelResolver
from audit.registry import registry as default_registry
from audit.rules import RuleBuilder
from core.dto import MappingRule
from core.services import BaseService

OLD = 'old'
ATTRIBUTES = 'attributes'


# ============================================================================
# PROPERTY TREES
# ============================================================================

def read_tree(properties, key) -> Dict[str, Any]:
    """Working copy of one snapshot; anything that is not a mapping reads as empty"""
    tree = properties.get(key) if isinstance(properties, dict) else None
    if not isinstance(tree, dict):
        return {}
    return copy.deepcopy(tree)


def combine_trees(old, attributes) -> Dict[str, Any]:
    """Combined properties structure; empty snapshots are left out entirely"""
    combined = {}
    if old:
        combined[OLD] = old
    if attributes:
        combined[ATTRIBUTES] = attributes
    return combined


def enrich_simple(tree, rule: MappingRule, resolver: LabelResolver):
    """Top-level ``foreign_key`` -> ``new_key``"""
    value = tree.get(rule.foreign_key)
    if value is None:
        return

    label = resolver.resolve(value, rule)
    if label is not None:
        tree[rule.new_key] = label


def enrich_nested(tree, rule: MappingRule, resolver: LabelResolver):
    """``container.*.field``: label every item of the container that carries the field"""
    pattern = rule.nested_pattern
    items = tree.get(pattern.container_key)
    if not isinstance(items, (list, tuple)):
        return

    for item in items:
        if not isinstance(item, dict) or pattern.item_field not in item:
            continue

        label = resolver.resolve(item[pattern.item_field], rule)
        if label is not None:
            item[rule.new_key] = label


def apply_rule(tree, rule: MappingRule, resolver: LabelResolver):
    if rule.is_nested:
        enrich_nested(tree, rule, resolver)
    else:
        enrich_simple(tree, rule, resolver)


# ============================================================================
# ENRICHER SERVICE
# ============================================================================

class ActivityLogEnricher(BaseService):
    """
    Enrichment entry point.

    Mapping validation happens before any snapshot is touched: a bad entity
    type aborts the call and leaves the entry as it was. Lookup problems
    never abort; the affected field simply gets no label.
    """

    def __init__(self, registry=None):
        super().__init__()
        self.registry = registry if registry is not None else default_registry

    def enrich_activity(self, entry, field_mappings, profile: Optional[EnrichmentProfile] = None):
        """
        Enrich an audit log entry in memory. The entry is not saved.

        Args:
            entry: object with a ``properties`` attribute (AuditLog)
            field_mappings: foreign-key path -> {entity_type, label_attribute?, new_key?}
            profile: switches for resolution (defaults when omitted)

        Returns:
            The same entry, with ``properties`` reassigned

        Raises:
            InvalidEntityTypeError: when a mapping names an unusable entity type
        """
        entry.properties = self.enrich_properties(getattr(entry, 'properties', None), field_mappings, profile)
        return entry

    def enrich_activity_with_config(self, entry, profile=DEFAULT_PROFILE):
        """
        Enrich using a configured profile (name or EnrichmentProfile).
        An unknown or empty profile leaves the entry untouched.
        """
        if not isinstance(profile, EnrichmentProfile):
            profile = load_profile(profile)

        if profile.is_empty:
            self.log_debug("Skipping enrichment, profile has no mappings", profile=profile.name)
            return entry

        return self.enrich_activity(entry, profile.mappings, profile)

    def enrich_properties(self, properties, field_mappings, profile: Optional[EnrichmentProfile] = None) -> Dict[str, Any]:
        """
        Enrich a raw properties structure and return the new structure.
        ``properties`` itself is never modified.
        """
        profile = profile or EnrichmentProfile()
        rules = RuleBuilder(self.registry, profile.default_label_attribute).build(field_mappings)

        old = read_tree(properties, OLD)
        attributes = read_tree(properties, ATTRIBUTES)

        resolver = LabelResolver(
            include_deleted=profile.include_soft_deleted,
            use_cache=profile.cache_resolved_models,
            fail_silently=profile.fail_silently,
        )

        for rule in rules:
            apply_rule(old, rule, resolver)
            apply_rule(attributes, rule, resolver)

        self.log_debug("Enriched audit properties", rules=len(rules), profile=profile.name)
        return combine_trees(old, attributes)


enricher = ActivityLogEnricher()


def get_enricher() -> ActivityLogEnricher:
    """Shared enricher bound to the default entity registry"""
    return enricher
