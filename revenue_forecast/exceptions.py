"""
Custom exception hierarchy for the forecasting engine.

Exception Hierarchy:
    ForecastError (base)
    ├── ArtifactError               - Problem with an artifact file
    │   ├── ArtifactLoadError       - File unreadable or not valid JSON/CSV
    │   └── ArtifactFormatError     - Content has the wrong structure
    └── ForecastComputationError    - A blend step produced an unusable number

    ValidationError                 - Input record validation failed
"""


class ForecastError(Exception):
    """Base exception for all forecasting errors."""

    def __init__(self, message: str, details: str = None):
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ArtifactError(ForecastError):
    """
    An artifact file exists but could not be used.

    A missing artifact is not an error; only files that are present and
    broken raise this.
    """

    def __init__(self, message: str, details: str = None, path: str = None):
        super().__init__(message, details)
        self.path = path


class ArtifactLoadError(ArtifactError):
    """Artifact could not be read or parsed (I/O, JSON or CSV syntax)."""
    pass


class ArtifactFormatError(ArtifactError):
    """
    Artifact parsed but has unexpected structure.

    E.g. the forecast table has no `ds`/`yhat` columns or the seasonal
    indices are not a month -> number mapping.
    """

    def __init__(self, message: str, details: str = None, path: str = None, expected: str = None):
        super().__init__(message, details, path)
        self.expected = expected


class ForecastComputationError(ForecastError):
    """
    A blending step produced a non-finite or otherwise unusable value.
    """

    def __init__(self, message: str, details: str = None, horizon: int = None):
        super().__init__(message, details)
        self.horizon = horizon


class ValidationError(Exception):
    """
    Input validation failed.

    Used for validating historical points and artifact rows before use.
    """

    def __init__(self, field: str, message: str, value: any = None):
        self.field = field
        self.message = message
        self.value = value
        super().__init__(f"{field}: {message}")

    def __str__(self) -> str:
        if self.value is not None:
            return f"{self.field}: {self.message} (got: {self.value!r})"
        return f"{self.field}: {self.message}"
