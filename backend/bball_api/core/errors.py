class ApiError(Exception):
    """Base error carrying the HTTP status the API should answer with."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


# missing/invalid caller parameter, never retried
class ValidationError(ApiError):
    status_code = 400


class UpstreamError(ApiError):
    """Non-2xx, unreachable or malformed response from the EuroLeague API."""

    status_code = 502

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        status: int | None = None,
        path: str | None = None,
    ):
        super().__init__(message, status_code)
        self.status = status
        self.path = path


# missing secondary store credential, sync only
class ConfigurationError(ApiError):
    status_code = 500


class PartialBatchError(ApiError):
    """A single upsert batch or boxscore fetch failed.

    Raised and caught inside the sync pipeline; the message is recorded in
    the stage's error list and the run continues.
    """
