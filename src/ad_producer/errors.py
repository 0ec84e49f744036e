"""Exception hierarchy for the production pipeline."""


class AdProducerError(Exception):
    """Base class for all ad producer errors."""


class InvalidBriefError(AdProducerError, ValueError):
    """Raised when a brief cannot be produced (missing name, bad duration)."""


class ScriptingError(AdProducerError):
    """Raised when the scripting capability reports a failed analysis.

    Analysis failure is fatal: the production is marked failed.
    """


class ProviderError(AdProducerError):
    """Raised by a generation capability when the backend rejects a request."""

    def __init__(self, message: str, provider: str | None = None) -> None:
        super().__init__(message)
        self.provider = provider


class EvaluationUnavailableError(AdProducerError):
    """Raised when the evaluation capability cannot score a batch."""


class PhaseTransitionError(AdProducerError):
    """Raised when a phase update would break progress or status invariants."""


class ProductionCancelledError(AdProducerError):
    """Raised when a production run is cancelled."""

    def __init__(self, production_id: str) -> None:
        super().__init__(f"Production {production_id} was cancelled")
        self.production_id = production_id
