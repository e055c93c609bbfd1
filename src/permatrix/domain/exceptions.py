"""Domain exceptions."""


class PermatrixError(Exception):
    """Base exception for permatrix."""

    pass


class NotFound(PermatrixError):
    """Requested resource was not found."""

    pass


class TransportFailure(PermatrixError):
    """Admin API could not be reached or answered with an error."""

    pass


class MalformedResponse(TransportFailure):
    """Admin API answered with a body that does not match its documented shape."""

    pass


class ScopeViolation(PermatrixError):
    """Cascade target does not hold the role being cascaded."""

    pass


class ValidationError(PermatrixError):
    """Validation failed for input data."""

    pass
