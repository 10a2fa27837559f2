"""Contract-violation errors raised by the derivation engine."""


class DerivationError(ValueError):
    """Base class for invalid input handed to the derivation engine."""


class InvalidSelectionError(DerivationError):
    """A view selection value is outside its enumerated domain."""


class InvalidTaskRecordError(DerivationError):
    """A task record is missing a required field or holds an invalid value."""
