from enum import Enum


class FailureKind(str, Enum):
    """Category of a failed check, one per diagnostic message family."""
    UNSUPPORTED_RUNTIME = "unsupported_runtime"
    MISSING_ENV_VAR = "missing_env_var"
    INVALID_ENV_VAR = "invalid_env_var"
    CONNECTION_FAILED = "connection_failed"
    EXTENSION_MISSING = "extension_missing"
    OPERATION_FAILED = "operation_failed"


class DatabaseOutcome(str, Enum):
    """How the database phase of a run ended."""
    SUCCESS = "success"
    CONNECTIVITY_FAILURE = "connectivity_failure"
    EXTENSION_MISSING = "extension_missing"
    OPERATION_FAILURE = "operation_failure"
