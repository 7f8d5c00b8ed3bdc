class IntegrityError(Exception):
    """Base exception for fingerprinting and verification."""


class FingerprintComputationError(IntegrityError):
    """Raised when a payload holds a value outside the JSON data model.

    A well-typed CanonicalModel never triggers this; seeing it means a caller
    smuggled a foreign object into the payload.
    """
