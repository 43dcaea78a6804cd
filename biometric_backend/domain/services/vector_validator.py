"""
Embedding validation and L2 normalization.

Validation always runs before normalization, and normalization never clamps
or drops values: a vector either comes out with unit norm or is rejected.
"""
# Standard library imports
import math
from collections.abc import Mapping
from numbers import Real
from typing import Any, List

# External package imports
import numpy as np

# Local application imports
from ..errors import (
    InvalidEmbeddingDimension,
    InvalidEmbeddingShape,
    InvalidEmbeddingValue,
    ZeroNormEmbedding,
)


def _is_number(value: Any) -> bool:
    # bool is a Real subclass but never a valid feature value
    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, (Real, np.number))


def validate(values: Any, expected_dims: int) -> np.ndarray:
    """
    Check that `values` is a flat numeric sequence of the expected length
    with only finite elements.

    Args:
        values: Candidate embedding (list, tuple or 1-D numpy array)
        expected_dims: Configured embedding width

    Returns:
        The embedding as a float64 numpy array

    Raises:
        InvalidEmbeddingShape: Not a flat sequence of numbers
        InvalidEmbeddingDimension: Length differs from expected_dims
        InvalidEmbeddingValue: Contains NaN or infinity
    """
    if isinstance(values, np.ndarray):
        if values.ndim != 1 or not np.issubdtype(values.dtype, np.number):
            raise InvalidEmbeddingShape(
                "Embedding must be a flat numeric sequence",
                {"ndim": int(values.ndim), "dtype": str(values.dtype)},
            )
        elements = values.tolist()
    elif isinstance(values, (str, bytes, bytearray, Mapping)) or not hasattr(values, "__len__"):
        raise InvalidEmbeddingShape(
            "Embedding must be a flat numeric sequence",
            {"type": type(values).__name__},
        )
    else:
        elements = list(values)

    for index, element in enumerate(elements):
        if not _is_number(element):
            raise InvalidEmbeddingShape(
                "Embedding must contain only numbers",
                {"index": index, "type": type(element).__name__},
            )

    if len(elements) != expected_dims:
        raise InvalidEmbeddingDimension(
            f"Invalid embedding dimension: expected {expected_dims}, received {len(elements)}",
            {"expected": expected_dims, "received": len(elements)},
        )

    vector = np.asarray(elements, dtype=np.float64)
    finite = np.isfinite(vector)
    if not finite.all():
        raise InvalidEmbeddingValue(
            "Embedding contains non-finite values",
            {"index": int(np.argmin(finite))},
        )
    return vector


def normalize(vector: Any) -> List[float]:
    """
    Scale a validated vector to unit L2 norm.

    Raises:
        ZeroNormEmbedding: If the norm is zero or not finite
    """
    array = np.asarray(vector, dtype=np.float64)
    norm = float(np.linalg.norm(array))
    if not math.isfinite(norm) or norm == 0.0:
        raise ZeroNormEmbedding("Invalid embedding: zero or non-finite norm")
    # Native floats for BSON
    return [float(x) for x in array / norm]
