"""
Errors raised by the journal core and mapped to HTTP responses by the routes.
"""


class RemoteStoreError(Exception):
    """
    Raised when a remote document store call fails or misses its deadline.
    """


class DeleteFailed(Exception):
    """
    Raised when a remote journal cannot be deleted. Never degraded to a local delete.
    """


class ValidationFailed(ValueError):
    """
    Raised when a journal form is missing its title or content.
    """


class NotAuthenticated(Exception):
    """
    Raised on write actions attempted without a signed-in user.
    """


class NotAuthorized(Exception):
    """
    Raised when the viewer does not own the journal they try to change.
    """


class JournalNotFound(Exception):
    """
    Raised on actions that involve journals which are not present in any tier.
    """
