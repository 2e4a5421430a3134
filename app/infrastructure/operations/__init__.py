"""Operation result types and status enums.

This module contains standardized result types for backend operations,
including status enums, result dataclasses, and error classifiers for
client exceptions.
"""

from infrastructure.operations.classifiers import classify_redis_error
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
    "classify_redis_error",
]
