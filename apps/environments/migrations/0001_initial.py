# Generated manually for the environments app

import uuid
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('accounts', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Environment',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='environments', to='accounts.company')),
            ],
            options={
                'db_table': 'environments',
                'ordering': ['created_at'],
                'indexes': [
                    models.Index(fields=['company', 'created_at'], name='env_company_created_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Membership',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('points', models.PositiveIntegerField(default=0)),
                ('joined_at', models.DateTimeField(auto_now_add=True)),
                ('client', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='memberships', to='accounts.client')),
                ('environment', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='memberships', to='environments.environment')),
            ],
            options={
                'db_table': 'memberships',
                'ordering': ['joined_at'],
                'indexes': [
                    models.Index(fields=['environment', 'points'], name='membership_env_points_idx'),
                    models.Index(fields=['client', 'joined_at'], name='membership_client_joined_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('client', 'environment'), name='unique_membership_per_environment'),
                ],
            },
        ),
    ]
