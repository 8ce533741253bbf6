"""
Validation utilities and validators.
Centralized validation of field mapping declarations.
"""
from typing import Any, Tuple

from core.exceptions import InvalidEntityTypeError


class MappingDeclarationValidator:
    """Validates a single field mapping declaration"""

    ENTITY_TYPE_KEY = 'entity_type'

    @staticmethod
    def validate_entity_type(config: Any, foreign_key: str, registry) -> Tuple[str, Any]:
        """
        Validate the entity type of a declaration and resolve it.

        Returns:
            (registry tag, EntityLookup)

        Raises:
            InvalidEntityTypeError: missing, malformed, unknown or non-entity type
        """
        if not isinstance(config, dict) or config.get(MappingDeclarationValidator.ENTITY_TYPE_KEY) is None:
            raise InvalidEntityTypeError.missing(foreign_key)

        return registry.resolve(config[MappingDeclarationValidator.ENTITY_TYPE_KEY], foreign_key)

    @staticmethod
    def clean_label_attribute(config: dict, default: str = 'label') -> str:
        """Label attribute, falling back to the default when absent or not a string"""
        value = config.get('label_attribute')
        if isinstance(value, str) and value:
            return value
        return default

    @staticmethod
    def clean_new_key(config: dict) -> str:
        """Explicit new key, or '' to have it derived from the path"""
        value = config.get('new_key')
        if isinstance(value, str) and value:
            return value
        return ''
