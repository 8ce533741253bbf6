"""
Audit Log Model

IMMUTABLE: Audit logs cannot be edited or deleted after creation.
Changed fields are kept in ``properties`` as two snapshots:

    {'old': {...}, 'attributes': {...}}

Enrichment works on these snapshots in memory and never writes them back.
"""

from django.db import models
from django.conf import settings
from django.core.exceptions import PermissionDenied


# ============================================================================
# CUSTOM MANAGER AND QUERYSET
# ============================================================================

class AuditLogQuerySet(models.QuerySet):
    """Custom queryset for audit logs with filtering helpers"""

    def for_user(self, user):
        """Filter logs for a specific user"""
        return self.filter(user=user)

    def for_resource(self, resource_type, resource_id):
        """Filter logs for a specific resource"""
        return self.filter(resource_type=resource_type, resource_id=str(resource_id))

    def for_action(self, action):
        """Filter logs for a specific action"""
        return self.filter(action=action)

    def recent(self, limit=100):
        """Get recent logs"""
        return self.order_by('-timestamp', '-id')[:limit]


class AuditLogManager(models.Manager.from_queryset(AuditLogQuerySet)):
    """Custom manager for audit logs"""


# ============================================================================
# AUDIT LOG MODEL
# ============================================================================

class AuditLog(models.Model):
    """
    Immutable audit log for tracking changes to application records.
    """

    # Action types
    ACTION_CREATE = 'CREATE'
    ACTION_UPDATE = 'UPDATE'
    ACTION_DELETE = 'DELETE'
    ACTION_RESTORE = 'RESTORE'

    ACTION_CHOICES = [
        (ACTION_CREATE, 'Create'),
        (ACTION_UPDATE, 'Update'),
        (ACTION_DELETE, 'Delete'),
        (ACTION_RESTORE, 'Restore'),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='audit_logs',
        help_text="User who performed the action"
    )

    action = models.CharField(
        max_length=20,
        choices=ACTION_CHOICES,
        db_index=True,
        help_text="Type of action performed"
    )

    resource_type = models.CharField(
        max_length=100,
        db_index=True,
        help_text="Type of resource affected (app_label.ModelName)"
    )

    resource_id = models.CharField(
        max_length=64,
        db_index=True,
        null=True,
        blank=True,
        help_text="ID of the resource affected"
    )

    description = models.TextField(
        blank=True,
        default='',
        help_text="Human-readable description of the action"
    )

    properties = models.JSONField(
        default=dict,
        blank=True,
        help_text="Changed fields: {'old': {...}, 'attributes': {...}}"
    )

    # Request metadata
    ip_address = models.GenericIPAddressField(
        null=True,
        blank=True,
        help_text="IP address of the user"
    )

    user_agent = models.TextField(
        null=True,
        blank=True,
        help_text="User agent string from request"
    )

    metadata = models.JSONField(
        default=dict,
        blank=True,
        help_text="Additional context data"
    )

    timestamp = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text="When the action occurred"
    )

    objects = AuditLogManager()

    class Meta:
        verbose_name = "Audit Log"
        verbose_name_plural = "Audit Logs"
        ordering = ['-timestamp', '-id']
        indexes = [
            models.Index(fields=['user', '-timestamp'], name='audit_user_ts_idx'),
            models.Index(fields=['resource_type', 'resource_id'], name='audit_resource_idx'),
            models.Index(fields=['action', '-timestamp'], name='audit_action_ts_idx'),
        ]

    def __str__(self):
        username = self.user.get_username() if self.user else 'System'
        return f"{username} - {self.action} - {self.resource_type} #{self.resource_id} - {self.timestamp}"

    def save(self, *args, **kwargs):
        """
        Override save to enforce immutability.
        Only allow creation, not updates.
        """
        if self.pk is not None:
            raise PermissionDenied(
                "Audit logs are immutable and cannot be modified after creation."
            )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise PermissionDenied(
            "Audit logs are immutable and cannot be deleted."
        )

    def _snapshot(self, key):
        properties = self.properties if isinstance(self.properties, dict) else {}
        value = properties.get(key)
        return value if isinstance(value, dict) else {}

    @property
    def old_values(self):
        return self._snapshot('old')

    @property
    def new_values(self):
        return self._snapshot('attributes')

    @property
    def user_display(self):
        """Get user display name"""
        if self.user:
            return self.user.get_full_name() or self.user.get_username()
        return "System"

    @property
    def action_display(self):
        """Get human-readable action"""
        return dict(self.ACTION_CHOICES).get(self.action, self.action)
