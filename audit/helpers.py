"""
Audit Logging Helper Functions

Provides a centralized way to record changes and to read them back with
foreign keys resolved to labels.
"""

import json
import logging

from django.core.serializers.json import DjangoJSONEncoder

from audit.enricher import get_enricher
from audit.models import AuditLog

logger = logging.getLogger(__name__)


def log_action(user, action, resource_type, resource_id, description='', old=None, attributes=None,
               request=None, metadata=None):
    """
    Log an action to the audit log.

    Args:
        user: User who performed the action (None for system actions)
        action: Action type (CREATE, UPDATE, DELETE, RESTORE)
        resource_type: Type of resource, usually ``app_label.ModelName``
        resource_id: ID of the resource
        description: Human-readable description
        old: Snapshot of changed fields before the action (optional)
        attributes: Snapshot of changed fields after the action (optional)
        request: Django request object (optional)
        metadata: Additional context data (optional)

    Returns:
        AuditLog instance, or None if it could not be written

    Example:
        log_action(
            user=request.user,
            action=AuditLog.ACTION_UPDATE,
            resource_type='crm.Order',
            resource_id=order.id,
            old={'customer_id': 1},
            attributes={'customer_id': 2},
            request=request
        )
    """
    try:
        ip_address = None
        user_agent = None

        if request:
            ip_address = get_client_ip(request)
            user_agent = request.META.get('HTTP_USER_AGENT', '')[:500]

        properties = {}
        if old:
            properties['old'] = to_json_safe(old)
        if attributes:
            properties['attributes'] = to_json_safe(attributes)

        audit_log = AuditLog.objects.create(
            user=user if user is not None and getattr(user, 'is_authenticated', False) else None,
            action=action,
            resource_type=resource_type,
            resource_id=str(resource_id) if resource_id is not None else None,
            description=description,
            properties=properties,
            ip_address=ip_address,
            user_agent=user_agent,
            metadata=to_json_safe(metadata or {})
        )

        logger.info(f"Audit: {audit_log.user_display} - {action} - {resource_type} #{resource_id}")

        return audit_log

    except Exception as e:
        # Don't fail the main operation if audit logging fails
        logger.error(f"Failed to create audit log: {e}", exc_info=True)
        return None


def get_client_ip(request):
    """
    Extract client IP address from request.
    Handles proxies and load balancers.
    """
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')

    if x_forwarded_for:
        return x_forwarded_for.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR')


def to_json_safe(data):
    """Round-trip through DjangoJSONEncoder so dates, decimals and UUIDs are storable"""
    return json.loads(json.dumps(data, cls=DjangoJSONEncoder))


def model_snapshot(instance, fields=None):
    """
    Concrete field values of a model instance, keyed by attname
    (so foreign keys appear as ``customer_id``).
    """
    snapshot = {}
    for field in instance._meta.concrete_fields:
        if fields is not None and field.name not in fields and field.attname not in fields:
            continue
        snapshot[field.attname] = field.value_from_object(instance)
    return to_json_safe(snapshot)


def diff_snapshots(old, new):
    """
    Keep only the keys whose values differ.

    Returns:
        (old changes, new changes)
    """
    old = old or {}
    new = new or {}
    changed = [key for key in set(old) | set(new) if old.get(key) != new.get(key)]
    return (
        {key: old[key] for key in changed if key in old},
        {key: new[key] for key in changed if key in new},
    )


def log_model_change(user, instance, action, old_snapshot=None, request=None, description=None):
    """
    Log a change to a model instance.

    For updates pass the snapshot taken before the change; only changed
    fields end up in the log. Creates record the full new snapshot,
    deletes the full old one.
    """
    resource_type = instance._meta.label

    if action == AuditLog.ACTION_CREATE:
        old, attributes = {}, model_snapshot(instance)
    elif action == AuditLog.ACTION_DELETE:
        old, attributes = old_snapshot or model_snapshot(instance), {}
    else:
        old, attributes = diff_snapshots(old_snapshot, model_snapshot(instance))

    return log_action(
        user=user,
        action=action,
        resource_type=resource_type,
        resource_id=instance.pk,
        description=description or f"{dict(AuditLog.ACTION_CHOICES).get(action, action)} {resource_type} #{instance.pk}",
        old=old,
        attributes=attributes,
        request=request
    )


def get_resource_audit_trail(resource_type, resource_id, limit=50):
    """
    Get complete audit trail for a specific resource.

    Args:
        resource_type: Type of resource (``app_label.ModelName``)
        resource_id: ID of the resource
        limit: Maximum number of logs to return

    Returns:
        QuerySet of AuditLog entries
    """
    return AuditLog.objects.for_resource(resource_type, resource_id).recent(limit)


def get_user_activity(user, limit=100):
    """Get recent activity for a specific user"""
    return AuditLog.objects.for_user(user).recent(limit)


def enrich_logs(logs, profile='default', enricher=None):
    """
    Enrich a batch of audit logs in memory with a configured profile.

    Returns:
        list of AuditLog with ``properties`` replaced by the enriched structure
    """
    enricher = enricher or get_enricher()
    return [enricher.enrich_activity_with_config(log, profile) for log in logs]
