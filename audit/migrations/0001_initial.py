from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='AuditLog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('action', models.CharField(choices=[('CREATE', 'Create'), ('UPDATE', 'Update'), ('DELETE', 'Delete'), ('RESTORE', 'Restore')], db_index=True, help_text='Type of action performed', max_length=20)),
                ('resource_type', models.CharField(db_index=True, help_text='Type of resource affected (app_label.ModelName)', max_length=100)),
                ('resource_id', models.CharField(blank=True, db_index=True, help_text='ID of the resource affected', max_length=64, null=True)),
                ('description', models.TextField(blank=True, default='', help_text='Human-readable description of the action')),
                ('properties', models.JSONField(blank=True, default=dict, help_text="Changed fields: {'old': {...}, 'attributes': {...}}")),
                ('ip_address', models.GenericIPAddressField(blank=True, help_text='IP address of the user', null=True)),
                ('user_agent', models.TextField(blank=True, help_text='User agent string from request', null=True)),
                ('metadata', models.JSONField(blank=True, default=dict, help_text='Additional context data')),
                ('timestamp', models.DateTimeField(auto_now_add=True, db_index=True, help_text='When the action occurred')),
                ('user', models.ForeignKey(blank=True, help_text='User who performed the action', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='audit_logs', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Audit Log',
                'verbose_name_plural': 'Audit Logs',
                'ordering': ['-timestamp', '-id'],
                'indexes': [
                    models.Index(fields=['user', '-timestamp'], name='audit_user_ts_idx'),
                    models.Index(fields=['resource_type', 'resource_id'], name='audit_resource_idx'),
                    models.Index(fields=['action', '-timestamp'], name='audit_action_ts_idx'),
                ],
            },
        ),
    ]
