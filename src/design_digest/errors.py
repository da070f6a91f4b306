"""Error taxonomy for the digest pipelines.

Only ``AuthorizationError`` escapes a pipeline; everything else moves the
pipeline on to its next tier.
"""


class DigestError(Exception):
    """Base class for all pipeline errors."""


class ExtractionError(DigestError):
    """No JSON-shaped region could be recovered from model output."""


class SchemaError(DigestError):
    """Parsed JSON does not have the Article shape."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = problems
        super().__init__("; ".join(problems) or "invalid article payload")


class RetrievalError(DigestError):
    """The content service failed for a reason other than credentials."""


class AuthorizationError(DigestError):
    """Credential missing, invalid or rejected. Caller must re-authenticate."""
