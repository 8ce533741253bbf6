"""
Custom exceptions for the application.
Configuration problems are raised; runtime lookup problems never are.
"""


class BaseApplicationException(Exception):
    """Base exception for all application-specific exceptions"""
    default_message = "An application error occurred"

    def __init__(self, message=None, code=None, details=None):
        self.message = message or self.default_message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(BaseApplicationException):
    """Raised when validation fails"""
    default_message = "Validation failed"


class InvalidEntityTypeError(ValidationError):
    """
    Raised when a field mapping references an entity type that cannot be
    used for lookups. The offending foreign-key path is always part of the
    message and of ``details['field']``.
    """
    default_message = "Invalid entity type"

    def __init__(self, message=None, field=None, entity_type=None):
        self.field = field
        self.entity_type = entity_type
        super().__init__(
            message=message,
            code="INVALID_ENTITY_TYPE",
            details={'field': field, 'entity_type': entity_type}
        )

    @classmethod
    def missing(cls, field):
        return cls(f"Missing 'entity_type' key for field mapping: {field}", field=field)

    @classmethod
    def not_a_type_reference(cls, field, entity_type=None):
        return cls(
            f"Entity type must be a string or model class for field: {field}",
            field=field,
            entity_type=repr(entity_type)
        )

    @classmethod
    def not_found(cls, name, field):
        return cls(f"Entity type '{name}' does not exist for field: {field}", field=field, entity_type=name)

    @classmethod
    def not_an_entity(cls, name, field):
        return cls(
            f"Entity type '{name}' must be a Django model or a registered entity lookup for field: {field}",
            field=field,
            entity_type=name
        )
