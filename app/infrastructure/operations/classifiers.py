"""Error classifiers for backend client exceptions.

Converts redis-py exceptions into standardized OperationResult objects so
callers branch on status and error code instead of exception types.

Usage:
    from infrastructure.operations.classifiers import classify_redis_error

    try:
        client.set(key, value, nx=True, ex=ttl)
    except RedisError as exc:
        return classify_redis_error(exc)
"""

from redis.exceptions import ConnectionError, RedisError, TimeoutError

from infrastructure.operations.result import OperationResult

TIMEOUT = "TIMEOUT"
CONNECTION_ERROR = "CONNECTION_ERROR"
REDIS_ERROR = "REDIS_ERROR"


def classify_redis_error(exc: Exception) -> OperationResult:
    """Classify redis-py errors into OperationResult.

    Mapping:
    - TimeoutError: TRANSIENT_ERROR with error_code TIMEOUT
    - ConnectionError: TRANSIENT_ERROR with error_code CONNECTION_ERROR
    - Other RedisError: PERMANENT_ERROR with error_code REDIS_ERROR
    - Anything else: PERMANENT_ERROR with error_code REDIS_ERROR

    redis-py's TimeoutError is not a ConnectionError subclass, but it is
    checked first regardless so a timeout is never reported as a refusal.

    Args:
        exc: Exception raised by the redis client

    Returns:
        OperationResult with appropriate status, message and error_code
    """
    if isinstance(exc, TimeoutError):
        return OperationResult.transient_error(
            f"Redis call timed out: {str(exc)}",
            error_code=TIMEOUT,
        )

    if isinstance(exc, ConnectionError):
        return OperationResult.transient_error(
            f"Redis connection error: {str(exc)}",
            error_code=CONNECTION_ERROR,
        )

    if isinstance(exc, RedisError):
        return OperationResult.permanent_error(
            f"Redis error: {str(exc)}",
            error_code=REDIS_ERROR,
        )

    return OperationResult.permanent_error(
        f"Unexpected error: {type(exc).__name__}: {str(exc)}",
        error_code=REDIS_ERROR,
    )
