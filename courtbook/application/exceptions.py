class ResourceNotFoundError(LookupError):
    """Raised by a resource catalog when the resource id is unknown."""
    pass


class BookingNotFoundError(LookupError):
    """Raised by a booking store when updating a booking it does not hold."""
    pass


class BookingConflictError(RuntimeError):
    """Raised by a booking store when an insert would overlap a blocking booking or blocked slot."""
    pass
