"""
Management command to print audit logs with foreign keys resolved to labels.
Nothing is written back; audit logs stay immutable.
"""
import json

from django.core.management.base import BaseCommand, CommandError

from audit.conf import DEFAULT_PROFILE, get_profile_names, load_profile
from audit.enricher import get_enricher
from audit.models import AuditLog
from core.exceptions import InvalidEntityTypeError


class Command(BaseCommand):
    help = 'Print enriched properties of audit logs using a configured profile'

    def add_arguments(self, parser):
        parser.add_argument(
            '--profile',
            default=DEFAULT_PROFILE,
            help=f'Enrichment profile from AUDIT_ENRICHER["MAPPINGS"] (default: {DEFAULT_PROFILE})'
        )
        parser.add_argument(
            '--ids',
            nargs='+',
            type=int,
            help='Audit log ids to enrich (default: most recent logs)'
        )
        parser.add_argument(
            '--limit',
            type=int,
            default=20,
            help='Number of recent logs when --ids is not given (default: 20)'
        )

    def handle(self, *args, **options):
        profile = load_profile(options['profile'])

        if profile.is_empty:
            self.stderr.write(self.style.WARNING(
                f"Profile '{profile.name}' has no mappings "
                f"(configured: {', '.join(get_profile_names()) or 'none'}); properties are printed as stored"
            ))

        if options['ids']:
            logs = AuditLog.objects.filter(id__in=options['ids']).order_by('-timestamp', '-id')
        else:
            logs = AuditLog.objects.recent(options['limit'])

        enricher = get_enricher()
        results = []
        for log in logs:
            try:
                enricher.enrich_activity_with_config(log, profile)
            except InvalidEntityTypeError as e:
                raise CommandError(e.message) from e

            results.append({
                'id': log.id,
                'action': log.action,
                'resource_type': log.resource_type,
                'resource_id': log.resource_id,
                'timestamp': log.timestamp.isoformat() if log.timestamp else None,
                'properties': log.properties,
            })

        self.stdout.write(json.dumps(results, indent=2, default=str))
        self.stderr.write(self.style.SUCCESS(f'✓ {len(results)} audit log(s) enriched with profile {profile.name}'))
