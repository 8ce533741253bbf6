"""
Audit Log API Views

Read-only access to audit logs with foreign keys resolved to labels.
The enrichment profile is chosen with the ``profile`` query parameter.
"""

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import viewsets, status
from rest_framework.exceptions import ParseError
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from audit.conf import DEFAULT_PROFILE, load_profile
from audit.models import AuditLog
from audit.serializers import AuditLogSerializer, AuditLogSummarySerializer
from core.exceptions import InvalidEntityTypeError

logger = logging.getLogger(__name__)


class AuditLogViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Read-only ViewSet for audit logs.

    Features:
    - List all logs, enriched with the requested profile
    - Filter by action, resource_type, resource_id, user
    - Search by description
    - Get audit trail for specific resource
    """

    serializer_class = AuditLogSerializer
    permission_classes = [IsAuthenticated]
    search_fields = ['description']
    ordering_fields = ['timestamp', 'action']
    ordering = ['-timestamp']

    filter_params = ['action', 'resource_type', 'resource_id', 'user']

    def get_queryset(self):
        queryset = AuditLog.objects.select_related('user')

        filters = {
            param: self.request.query_params[param]
            for param in self.filter_params
            if self.request.query_params.get(param)
        }
        try:
            return queryset.filter(**filters)
        except (ValueError, DjangoValidationError) as e:
            # e.g. ?user=abc against an integer primary key
            raise ParseError(f"Invalid filter value: {e}")

    def get_profile(self):
        return load_profile(self.request.query_params.get('profile') or DEFAULT_PROFILE)

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context['profile'] = self.get_profile()
        return context

    def handle_exception(self, exc):
        """Broken mapping configuration is a server-side error; say which field"""
        if isinstance(exc, InvalidEntityTypeError):
            logger.error(f"Audit enrichment misconfigured: {exc.message}")
            return Response(
                {'detail': exc.message, 'code': exc.code, 'field': exc.field},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
        return super().handle_exception(exc)

    @action(detail=False, methods=['get'])
    def resource_trail(self, request):
        """
        Get audit trail for a specific resource.

        Query params:
        - resource_type: Type of resource (app_label.ModelName)
        - resource_id: ID of the resource
        - profile: Enrichment profile (optional)

        Example: GET /api/audit/logs/resource_trail/?resource_type=crm.Order&resource_id=12
        """
        resource_type = request.query_params.get('resource_type')
        resource_id = request.query_params.get('resource_id')

        if not resource_type or not resource_id:
            return Response(
                {'detail': 'Both resource_type and resource_id are required'},
                status=status.HTTP_400_BAD_REQUEST
            )

        queryset = self.get_queryset()
        serializer = self.get_serializer(queryset, many=True)

        return Response({
            'resource_type': resource_type,
            'resource_id': resource_id,
            'profile': self.get_profile().name,
            'audit_trail': serializer.data,
            'count': queryset.count()
        })

    @action(detail=False, methods=['get'])
    def recent(self, request):
        """
        Get recent audit logs (last 50), without properties.

        Example: GET /api/audit/logs/recent/
        """
        queryset = self.get_queryset()[:50]
        serializer = AuditLogSummarySerializer(queryset, many=True)

        return Response({
            'recent_logs': serializer.data,
            'count': len(serializer.data)
        })
