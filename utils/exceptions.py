"""
Typed failures raised by the rate engine.

Input errors (InvalidPincode, InvalidDimensions) are caller mistakes and are
never retried. NoRatesAvailable is a business outcome: the route resolved but no
courier is provisioned for it. ConfigurationError means the rate card reference
data is broken and must be fixed by an admin.
"""

import http


class RateCalculationError(Exception):
    """Base class for every rate engine failure"""

    code = "RATE_CALCULATION_ERROR"
    status_code = http.HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str, field: str = None, details: dict = None):
        self.message = message
        self.field = field
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload = {"code": self.code, "message": self.message}
        if self.field:
            payload["field"] = self.field
        if self.details:
            payload["details"] = self.details
        return payload


class InvalidPincode(RateCalculationError):
    code = "INVALID_PINCODE"
    status_code = http.HTTPStatus.BAD_REQUEST


class InvalidDimensions(RateCalculationError):
    code = "INVALID_DIMENSIONS"
    status_code = http.HTTPStatus.BAD_REQUEST


class NoRatesAvailable(RateCalculationError):
    code = "NO_RATES_AVAILABLE"
    status_code = http.HTTPStatus.NOT_FOUND


class ConfigurationError(RateCalculationError):
    code = "CONFIGURATION_ERROR"
    status_code = http.HTTPStatus.INTERNAL_SERVER_ERROR
