# Standard library imports
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional


@dataclass
class FaceEmbedding:
    """Normalized feature vector tied 1:1 to an enrollment."""
    enrollment_id: str
    vector: List[float]
    created_at: Optional[datetime] = None

    @property
    def dims(self) -> int:
        return len(self.vector)

    def __post_init__(self) -> None:
        """Business validations"""
        if not self.enrollment_id:
            raise ValueError("Enrollment ID is required")
        if not self.vector:
            raise ValueError("Embedding vector is required")
