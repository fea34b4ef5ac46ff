from rest_framework import permissions


class IsClient(permissions.BasePermission):
    """
    Permission: User must have a client record.
    """

    message = 'Only clients can perform this action.'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request.user.is_client)


class IsCompany(permissions.BasePermission):
    """
    Permission: User must have a company record.
    """

    message = 'Only companies can perform this action.'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request.user.is_company)
