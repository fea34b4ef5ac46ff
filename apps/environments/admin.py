# ==========================================
# apps/environments/admin.py
# ==========================================

from django.contrib import admin
from .models import Environment, Membership


class MembershipInline(admin.TabularInline):
    """Inline admin for memberships within an environment."""
    model = Membership
    extra = 0
    fields = ['client', 'points', 'joined_at']
    readonly_fields = ['joined_at']
    raw_id_fields = ['client']


@admin.register(Environment)
class EnvironmentAdmin(admin.ModelAdmin):
    list_display = ['name', 'company', 'member_count', 'created_at']
    list_filter = ['created_at']
    search_fields = ['name', 'company__name']
    raw_id_fields = ['company']
    inlines = [MembershipInline]

    def member_count(self, obj):
        return obj.memberships.count()
    member_count.short_description = 'Members'


@admin.register(Membership)
class MembershipAdmin(admin.ModelAdmin):
    list_display = ['client', 'environment', 'points', 'joined_at']
    list_filter = ['environment']
    search_fields = ['client__user__email', 'environment__name']
    raw_id_fields = ['client', 'environment']
    readonly_fields = ['joined_at']
