"""
Mapping rule construction.

Raw declarations look like:

    {
        'contact_id': {'entity_type': 'crm.Contact', 'label_attribute': 'name', 'new_key': 'customer'},
        'items.*.material_id': {'entity_type': 'stock.Material'},
    }
"""

import logging
from typing import List

from core.dto import MappingRule
from core.validators import MappingDeclarationValidator

logger = logging.getLogger(__name__)


class RuleBuilder:
    """Validates raw field mappings and turns them into MappingRule objects"""

    def __init__(self, registry, default_label_attribute: str = 'label'):
        self.registry = registry
        self.default_label_attribute = default_label_attribute

    def build(self, field_mappings) -> List[MappingRule]:
        """
        Build one rule per declaration, in declaration order.

        Raises:
            InvalidEntityTypeError: on the first declaration with a bad entity type
        """
        return [self.build_rule(foreign_key, config) for foreign_key, config in (field_mappings or {}).items()]

    def build_rule(self, foreign_key: str, config) -> MappingRule:
        entity_type, lookup = MappingDeclarationValidator.validate_entity_type(config, foreign_key, self.registry)

        rule = MappingRule(
            foreign_key=foreign_key,
            entity_type=entity_type,
            label_attribute=MappingDeclarationValidator.clean_label_attribute(config, self.default_label_attribute),
            new_key=MappingDeclarationValidator.clean_new_key(config),
            lookup=lookup,
        )
        logger.debug(f"Built mapping rule {foreign_key} -> {rule.new_key} ({entity_type}.{rule.label_attribute})")
        return rule
