# ==========================================
# apps/environments/models.py
# ==========================================

from django.db import models
import uuid


class Environment(models.Model):
    """Tenant space owned by a company. Scopes products and memberships."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    company = models.ForeignKey('accounts.Company', on_delete=models.CASCADE, related_name='environments')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'environments'
        indexes = [
            models.Index(fields=['company', 'created_at'], name='env_company_created_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return self.name

    def has_member(self, client):
        return self.memberships.filter(client=client).exists()

    def is_owned_by(self, company):
        return company is not None and self.company_id == company.id


class Membership(models.Model):
    """Client membership in an environment with the points accrued there."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    client = models.ForeignKey('accounts.Client', on_delete=models.CASCADE, related_name='memberships')
    environment = models.ForeignKey(Environment, on_delete=models.CASCADE, related_name='memberships')
    points = models.PositiveIntegerField(default=0)
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'memberships'
        constraints = [
            models.UniqueConstraint(
                fields=['client', 'environment'],
                name='unique_membership_per_environment',
            ),
        ]
        indexes = [
            models.Index(fields=['environment', 'points'], name='membership_env_points_idx'),
            models.Index(fields=['client', 'joined_at'], name='membership_client_joined_idx'),
        ]
        ordering = ['joined_at']

    def __str__(self):
        return f"{self.client.get_display_name()} in {self.environment.name} ({self.points} pts)"
