"""
Estimator error taxonomy.

Every failure raised by the core derives from EstimatorError so the API layer
can turn it into a uniform ``{"success": false, "message": ...}`` body.
"""


class EstimatorError(Exception):
    """Base class for estimator failures."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(EstimatorError):
    """Raised when a required input is missing or malformed."""

    status_code = 400


class ConfigurationError(EstimatorError):
    """Raised when a required secret is not configured."""

    status_code = 500


class GeocodeFailure(EstimatorError):
    """Raised when the geocoding provider returns no usable result."""

    status_code = 502

    def __init__(self, query: str, reason: str):
        self.query = query
        self.reason = reason
        super().__init__(f"Failed to geocode city '{query}': {reason}")


class DatasetError(EstimatorError):
    """Raised when the city dataset is missing or cannot be parsed."""

    status_code = 500

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"City dataset at {path} could not be loaded: {reason}")
