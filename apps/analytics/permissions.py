"""
Custom permission classes for analytics app.

Permission Classes:
    CanViewEnvironmentStatistics - Owner company or member client of the
        environment in the URL

Usage:
    from apps.analytics.permissions import CanViewEnvironmentStatistics

    @api_view(['GET'])
    @permission_classes([IsAuthenticated, CanViewEnvironmentStatistics])
    def environment_ranking(request, environment_id):
        # Permission already verified
        ...
"""

from rest_framework.permissions import BasePermission

from apps.environments.services import (
    EnvironmentAccessDeniedError,
    get_visible_environment,
)


class CanViewEnvironmentStatistics(BasePermission):
    """
    Permission check for environment-scoped statistics.

    Access is allowed if the requesting user is the company owning the
    environment or a client who is a member of it.

    Access is denied (403) for everybody else. A missing environment is
    reported as 404 by the service lookup.
    """

    message = 'You must own or be a member of this environment to view its statistics.'

    def has_permission(self, request, view):
        environment_id = view.kwargs.get('environment_id')
        if environment_id is None:
            return True

        try:
            get_visible_environment(environment_id=environment_id, user=request.user)
        except EnvironmentAccessDeniedError:
            return False
        return True
