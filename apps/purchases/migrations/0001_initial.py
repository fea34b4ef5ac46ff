# Generated manually for the purchases app

import uuid
from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('accounts', '0001_initial'),
        ('environments', '0001_initial'),
        ('catalog', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Purchase',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('product_name', models.CharField(max_length=200)),
                ('price', models.DecimalField(decimal_places=2, editable=False, max_digits=10, validators=[MinValueValidator(Decimal('0.01'))])),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('client', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='purchases', to='accounts.client')),
                ('company', models.ForeignKey(editable=False, on_delete=django.db.models.deletion.PROTECT, related_name='purchases', to='accounts.company')),
                ('environment', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='purchases', to='environments.environment')),
                ('product', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='purchases', to='catalog.product')),
            ],
            options={
                'db_table': 'purchases',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['environment', 'client'], name='purchase_env_client_idx'),
                    models.Index(fields=['environment', 'product'], name='purchase_env_product_idx'),
                    models.Index(fields=['company', 'created_at'], name='purchase_company_created_idx'),
                    models.Index(fields=['client', 'created_at'], name='purchase_client_created_idx'),
                ],
            },
        ),
    ]
