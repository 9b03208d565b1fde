"""Error kinds surfaced by initData verification.

Core helpers raise a VerificationError subclass; the verifier turns it into a
rejected VerificationResult carrying the matching ErrorKind string.
"""

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_JSON = "INVALID_JSON"
    INIT_DATA_REQUIRED = "INIT_DATA_REQUIRED"
    MALFORMED_PAYLOAD = "MALFORMED_PAYLOAD"
    HASH_MISSING = "HASH_MISSING"
    DATA_EXPIRED = "DATA_EXPIRED"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"
    SERVER_CONFIG_ERROR = "SERVER_CONFIG_ERROR"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


# HTTP status for each kind when reported over the API
HTTP_STATUS = {
    ErrorKind.INVALID_JSON: 400,
    ErrorKind.INIT_DATA_REQUIRED: 400,
    ErrorKind.MALFORMED_PAYLOAD: 400,
    ErrorKind.HASH_MISSING: 400,
    ErrorKind.DATA_EXPIRED: 401,
    ErrorKind.INVALID_SIGNATURE: 401,
    ErrorKind.SERVER_CONFIG_ERROR: 500,
    ErrorKind.INTERNAL_SERVER_ERROR: 500,
}


class VerificationError(Exception):
    """Base class for every rejection raised while verifying initData."""

    kind = ErrorKind.INTERNAL_SERVER_ERROR


class InitDataRequired(VerificationError):
    kind = ErrorKind.INIT_DATA_REQUIRED


class MalformedPayload(VerificationError):
    kind = ErrorKind.MALFORMED_PAYLOAD


class HashMissing(VerificationError):
    kind = ErrorKind.HASH_MISSING


class InvalidSignature(VerificationError):
    kind = ErrorKind.INVALID_SIGNATURE


class DataExpired(VerificationError):
    kind = ErrorKind.DATA_EXPIRED


class ServerConfigError(VerificationError):
    """The shared secret is missing. Never a client-input failure."""

    kind = ErrorKind.SERVER_CONFIG_ERROR
