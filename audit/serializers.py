"""
Audit Log Serializers
"""

from rest_framework import serializers

from audit.enricher import get_enricher
from audit.models import AuditLog


class AuditLogSerializer(serializers.ModelSerializer):
    """
    Serializer for AuditLog model.

    ``properties`` is enriched with the profile passed in the serializer
    context (``profile``); ``raw_properties`` is what is stored.
    Read-only: Audit logs cannot be created/updated via API.
    """

    user_display = serializers.CharField(read_only=True)
    action_display = serializers.CharField(read_only=True)
    user_username = serializers.CharField(source='user.username', read_only=True, allow_null=True)

    properties = serializers.SerializerMethodField()
    raw_properties = serializers.JSONField(source='properties', read_only=True)

    class Meta:
        model = AuditLog
        fields = [
            'id',
            'user',
            'user_username',
            'user_display',
            'action',
            'action_display',
            'resource_type',
            'resource_id',
            'description',
            'properties',
            'raw_properties',
            'ip_address',
            'user_agent',
            'metadata',
            'timestamp'
        ]
        read_only_fields = fields

    def get_properties(self, obj):
        profile = self.context.get('profile')
        if profile is None or profile.is_empty:
            return obj.properties or {}

        enricher = self.context.get('enricher') or get_enricher()
        return enricher.enrich_properties(obj.properties, profile.mappings, profile)


class AuditLogSummarySerializer(serializers.ModelSerializer):
    """
    Lightweight serializer for audit log summaries.
    """

    user_display = serializers.CharField(read_only=True)

    class Meta:
        model = AuditLog
        fields = [
            'id',
            'user_display',
            'action',
            'resource_type',
            'resource_id',
            'description',
            'timestamp'
        ]
        read_only_fields = fields
