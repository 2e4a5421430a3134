"""Operation status enumeration.

Status codes for operation results, used to classify outcomes of backend
calls for appropriate error handling and retries.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Operation completed successfully
        TRANSIENT_ERROR: Retryable error (connection refused, timeout)
        PERMANENT_ERROR: Non-retryable error (protocol or command error)
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
