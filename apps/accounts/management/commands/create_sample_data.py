"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data

This creates:
- 1 superuser (admin)
- 1 company (Corner Market) with 2 environments
- Products in each environment, one barcode shared by both
- 3 clients (alice, bob, charlie) with memberships
- Purchases recorded through the purchase service, so points accrue
"""

from django.core.management.base import BaseCommand
from django.db import transaction
from decimal import Decimal

from apps.accounts.models import User, UserRole
from apps.accounts.services import register_user
from apps.catalog.models import Product
from apps.environments.models import Environment, Membership
from apps.purchases.models import Purchase
from apps.purchases.services import PurchaseRecorder


SAMPLE_EMAILS = [
    'market@example.com',
    'alice@example.com',
    'bob@example.com',
    'charlie@example.com',
]


class Command(BaseCommand):
    help = 'Create sample data for testing the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing sample data before creating it again',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        if User.objects.filter(email__in=SAMPLE_EMAILS).exists():
            self.stdout.write(self.style.WARNING(
                'Sample data already exists. Use --clear to recreate it.'
            ))
            return

        self.stdout.write('Creating sample data...')

        users = self.create_users()
        environments = self.create_environments(users['market'])
        products = self.create_products(environments)
        self.create_memberships(users, environments)
        self.create_purchases(users, environments, products)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin@example.com / admin123 (superuser)')
        self.stdout.write('  market@example.com / password123 (company)')
        self.stdout.write('  alice@example.com / password123 (client)')
        self.stdout.write('  bob@example.com / password123 (client)')
        self.stdout.write('  charlie@example.com / password123 (client)')

    def clear_data(self):
        """Remove the sample principals and everything hanging off them."""
        # Bulk deletes skip Purchase.delete(), which refuses single-row deletes
        Purchase.objects.filter(company__user__email__in=SAMPLE_EMAILS).delete()
        Environment.objects.filter(company__user__email__in=SAMPLE_EMAILS).delete()
        User.objects.filter(email__in=SAMPLE_EMAILS).delete()

    def create_users(self):
        """Create test users."""
        self.stdout.write('  Creating users...')

        admin, _ = User.objects.get_or_create(
            email='admin@example.com',
            defaults={
                'display_name': 'Admin User',
                'is_staff': True,
                'is_superuser': True,
            }
        )
        admin.set_password('admin123')
        admin.save()

        market = register_user(
            email='market@example.com',
            password='password123',
            role=UserRole.COMPANY,
            display_name='Market Owner',
            company_name='Corner Market',
        )

        clients = {
            key: register_user(email=f'{key}@example.com', password='password123', display_name=name)
            for key, name in (
                ('alice', 'Alice Shopper'),
                ('bob', 'Bob Buyer'),
                ('charlie', 'Charlie Customer'),
            )
        }

        return {'admin': admin, 'market': market, **clients}

    def create_environments(self, market):
        self.stdout.write('  Creating environments...')

        company = market.company_profile
        return {
            'downtown': Environment.objects.create(name='Downtown Store', company=company),
            'station': Environment.objects.create(name='Station Kiosk', company=company),
        }

    def create_products(self, environments):
        """Create products. The espresso barcode exists in both environments."""
        self.stdout.write('  Creating products...')

        catalog = {
            'downtown': [
                ('espresso', 'Espresso', Decimal('2.20'), '4006381333931'),
                ('croissant', 'Croissant', Decimal('1.80'), '2000000000015'),
                ('orange_juice', 'Orange Juice', Decimal('3.10'), '2000000000022'),
            ],
            'station': [
                ('station_espresso', 'Espresso To Go', Decimal('2.50'), '4006381333931'),
                ('sandwich', 'Sandwich', Decimal('4.90'), '2000000000039'),
            ],
        }

        products = {}
        for env_key, items in catalog.items():
            for key, name, price, barcode in items:
                products[key] = Product.objects.create(
                    environment=environments[env_key],
                    name=name,
                    price=price,
                    barcode=barcode,
                )
        return products

    def create_memberships(self, users, environments):
        self.stdout.write('  Creating memberships...')

        memberships = [
            ('alice', 'downtown'),
            ('alice', 'station'),
            ('bob', 'downtown'),
            ('charlie', 'station'),
        ]
        for user_key, env_key in memberships:
            Membership.objects.create(
                client=users[user_key].client_profile,
                environment=environments[env_key],
            )

    def create_purchases(self, users, environments, products):
        self.stdout.write('  Creating purchases...')

        purchases = [
            ('alice', 'downtown', 'espresso'),
            ('alice', 'downtown', 'croissant'),
            ('alice', 'station', 'sandwich'),
            ('bob', 'downtown', 'espresso'),
            ('bob', 'downtown', 'espresso'),
            ('bob', 'downtown', 'orange_juice'),
            ('charlie', 'station', 'station_espresso'),
        ]
        for user_key, env_key, product_key in purchases:
            PurchaseRecorder.record_purchase(
                client_id=users[user_key].client_profile.id,
                environment_id=environments[env_key].id,
                product_id=products[product_key].id,
            )
