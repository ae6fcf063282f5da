"""
Exceptions raised by the Observer engine.

Absence of a pattern is never an error: extraction, detection and
orchestration report it as None or a silence reason. Exceptions are
reserved for structurally invalid input rejected at the boundary.
"""


class ObserverError(Exception):
    """Base class for Observer errors."""

    pass


class ArtifactContractError(ObserverError):
    """Raised when a raw artifact payload does not satisfy its contract."""

    def __init__(self, message: str, errors: list[dict] | None = None):
        super().__init__(message)
        self.errors = errors or []
