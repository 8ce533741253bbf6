"""
Base service classes.
Services contain business logic and orchestrate between repositories.
"""
import logging

logger = logging.getLogger(__name__)


class BaseService:
    """
    Base service class providing common functionality.
    Services should contain business logic and use repositories for data access.
    """

    def __init__(self):
        self.logger = logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")

    def log_debug(self, message: str, **context):
        """Log debug message with context"""
        self.logger.debug(f"{message} | Context: {context}")

