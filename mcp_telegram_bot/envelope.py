"""Decoding of the ``{ok, result, description, error_code, parameters}`` envelope."""
from typing import Any, Mapping

from .errors import ApiError, AuthError, GenericApiError, ProtocolError, RateLimited

AUTH_ERROR_CODES = frozenset({401, 403})
RATE_LIMIT_ERROR_CODE = 429


def classify_failure(payload: Mapping[str, Any]) -> ApiError:
    """Build the ApiError matching a failed envelope."""
    description = payload.get("description") or "Unknown error occurred"
    error_code = payload.get("error_code")
    if not isinstance(error_code, int) or isinstance(error_code, bool):
        error_code = None
    parameters = payload.get("parameters")
    if not isinstance(parameters, Mapping):
        parameters = None

    if error_code == RATE_LIMIT_ERROR_CODE:
        return RateLimited(description, error_code, parameters)
    if error_code in AUTH_ERROR_CODES:
        return AuthError(description, error_code, parameters)
    return GenericApiError(description, error_code, parameters)


def decode_envelope(payload: Any) -> Any:
    """Return the ``result`` of a successful envelope or raise the classified error."""
    if not isinstance(payload, Mapping):
        raise ProtocolError(f"unexpected response body of type {type(payload).__name__}")

    ok = payload.get("ok")
    if not isinstance(ok, bool):
        raise ProtocolError("response envelope has no boolean 'ok' field")
    if not ok:
        raise classify_failure(payload)
    if "result" not in payload:
        raise ProtocolError("malformed success envelope: 'result' is missing")
    return payload["result"]
