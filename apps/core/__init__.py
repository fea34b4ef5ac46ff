"""
Core App - shared error taxonomy and HTTP error mapping.

Every service layer in the project raises subclasses of
``apps.core.exceptions.ServiceError``; the DRF exception handler in
``apps.core.handlers`` turns them into ``{"error", "kind"}`` responses.
"""
