"""
Audit Log Admin - READ ONLY

Audit logs are immutable and cannot be edited or deleted via admin.
Properties are shown both as stored and enriched with the default profile.
"""

import json
import logging

from django.contrib import admin
from django.utils.html import format_html

from audit.enricher import get_enricher
from audit.models import AuditLog
from core.exceptions import InvalidEntityTypeError

logger = logging.getLogger(__name__)


def pretty_json(data):
    return format_html('<pre>{}</pre>', json.dumps(data, indent=2, sort_keys=True, default=str))


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    """
    Read-only admin for audit logs.

    Features:
    - View logs only (no edit/delete)
    - Filter by action, resource type, date
    - Search by description
    - Display stored and enriched properties as JSON
    """

    list_display = [
        'id',
        'timestamp',
        'user',
        'action',
        'resource_type',
        'resource_id',
        'description_short',
    ]

    list_filter = [
        'action',
        'resource_type',
        'timestamp',
    ]

    search_fields = [
        'description',
        'resource_id',
        'ip_address'
    ]

    readonly_fields = [
        'user',
        'action',
        'resource_type',
        'resource_id',
        'description',
        'ip_address',
        'user_agent',
        'properties_display',
        'enriched_properties_display',
        'metadata_display',
        'timestamp'
    ]

    fieldsets = (
        ('Action Details', {
            'fields': ('action', 'resource_type', 'resource_id', 'description')
        }),
        ('Changes', {
            'fields': ('enriched_properties_display', 'properties_display')
        }),
        ('User Information', {
            'fields': ('user', 'ip_address', 'user_agent')
        }),
        ('Additional Context', {
            'fields': ('metadata_display', 'timestamp'),
            'classes': ('collapse',)
        }),
    )

    date_hierarchy = 'timestamp'

    ordering = ['-timestamp']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def get_actions(self, request):
        """Disable bulk actions"""
        actions = super().get_actions(request)
        actions.pop('delete_selected', None)
        return actions

    @admin.display(description='Description')
    def description_short(self, obj):
        max_length = 80
        if len(obj.description) > max_length:
            return f"{obj.description[:max_length]}..."
        return obj.description

    @admin.display(description='Stored properties')
    def properties_display(self, obj):
        return pretty_json(obj.properties or {})

    @admin.display(description='Properties')
    def enriched_properties_display(self, obj):
        """Properties with the default profile applied"""
        try:
            enriched = get_enricher().enrich_activity_with_config(AuditLog(properties=obj.properties))
        except InvalidEntityTypeError as e:
            logger.error(f"Audit enrichment misconfigured: {e.message}")
            return e.message
        return pretty_json(enriched.properties or {})

    @admin.display(description='Metadata')
    def metadata_display(self, obj):
        if obj.metadata:
            return pretty_json(obj.metadata)
        return "No metadata"
