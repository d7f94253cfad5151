"""
Exceptions raised by the validator, the store and application startup.
"""


class PressureTrackerError(Exception):
    """Base class for all application errors."""


class ValidationError(PressureTrackerError):
    """Client-supplied data violates a domain constraint."""

    def __init__(self, errors):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__('; '.join(self.errors))


class EmptyUpdateError(ValidationError):
    """A partial update carried no updatable fields."""

    def __init__(self):
        super().__init__('No fields to update')


class NotFoundError(PressureTrackerError):
    """No record matches the requested id."""

    def __init__(self, resource_id=None):
        self.resource_id = resource_id
        super().__init__(f'Measurement {resource_id} not found')


class StoreError(PressureTrackerError):
    """The underlying persistence layer failed."""


class StartupError(PressureTrackerError):
    """Configuration, schema or connectivity check failed at startup."""
