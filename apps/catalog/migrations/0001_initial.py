# Generated manually for the catalog app

import uuid
from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('environments', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(db_index=True, max_length=200)),
                ('price', models.DecimalField(decimal_places=2, max_digits=10, validators=[MinValueValidator(Decimal('0.01'))])),
                ('barcode', models.CharField(max_length=64)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('environment', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='products', to='environments.environment')),
            ],
            options={
                'db_table': 'products',
                'ordering': ['name'],
                'indexes': [
                    models.Index(fields=['barcode'], name='product_barcode_idx'),
                    models.Index(fields=['environment', 'name'], name='product_env_name_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('environment', 'barcode'), name='unique_barcode_per_environment'),
                    models.CheckConstraint(check=models.Q(price__gt=0), name='product_price_positive'),
                ],
            },
        ),
    ]
