"""Engine exceptions."""


class InvalidInputError(ValueError):
    """A caller violated an engine precondition.

    Raised only for programmer errors (unsorted records, malformed
    schedule weeks); insufficient data never raises.
    """
