"""Exception hierarchy for failures that are raised rather than returned."""


class DomainError(Exception):
    """A business rule was violated.

    ``code`` is the stable identifier clients match on. Subclasses may pin it
    with a class attribute; otherwise it is the class name.
    """

    code: str | None = None
    default_message: str = "A business rule was violated."

    def __init__(self, message: str | None = None, *, code: str | None = None):
        self.message = message or self.default_message
        self.code = code or type(self).code or type(self).__name__
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class PreconditionError(Exception):
    """A caller broke a contract, such as passing None where a value is required.

    These are programming errors. They are never turned into validation
    envelopes and surface as HTTP 500.
    """
