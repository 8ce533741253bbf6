"""
Repository pattern implementation.
Abstracts data access for the entities referenced by audit log foreign keys.
"""
from typing import Generic, TypeVar, Optional
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import QuerySet, Model
import logging

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=Model)


class BaseRepository(Generic[T]):
    """
    Base repository providing read access by primary key.
    Soft-deleted (tombstoned) rows are visible unless asked otherwise.
    """

    def __init__(self, model: type[T]):
        self.model = model

    def get_queryset(self, include_deleted: bool = True) -> QuerySet[T]:
        """
        Base queryset. The base manager never applies the default manager's
        filtering, so tombstoned rows stay reachable through it.
        """
        if include_deleted:
            return self.model._base_manager.all()
        return self.model._default_manager.all()

    def get_by_id(self, id, include_deleted: bool = True, **filters) -> Optional[T]:
        """Get a single instance by primary key"""
        try:
            return self.get_queryset(include_deleted).filter(pk=id, **filters).first()
        except (ValueError, TypeError, DjangoValidationError) as e:
            # Identifier not coercible to the primary key type
            logger.warning(f"Invalid {self.model.__name__} id {id!r}: {str(e)}")
            return None

