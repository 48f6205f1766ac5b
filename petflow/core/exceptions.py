"""Domain errors raised by the service layer.

Routes never build HTTP errors for these themselves; the handlers registered
in ``petflow.main`` map each class to its status code.
"""


class PetFlowError(Exception):
    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(PetFlowError):
    """Bad or missing input. The message is returned to the caller verbatim."""

    status_code = 400


class NotFoundError(PetFlowError):
    status_code = 404


class InvalidStateError(PetFlowError):
    """The requested transition is not allowed from the current state."""

    status_code = 409


class RemoteServiceError(PetFlowError):
    """The AI backend is unreachable, rate limited or answered with an error."""

    status_code = 502

    def __init__(self, detail: str, upstream_status: int | None = None):
        super().__init__(detail)
        self.upstream_status = upstream_status

    @property
    def retryable(self) -> bool:
        # Transport failures carry no upstream status and are worth retrying.
        return self.upstream_status is None or self.upstream_status == 429 or self.upstream_status >= 500


class RemoteJobFailedError(RemoteServiceError):
    """An assistant run ended as failed, cancelled or expired."""


class RemoteTimeoutError(RemoteServiceError):
    """An assistant run did not finish within the polling budget."""

    status_code = 504
