from typing import List, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, StrictBool, StrictFloat, StrictInt
from pydantic.alias_generators import to_camel

from ...domain.models.enrollment import CaptureSource, EnrollmentState
from ...domain.models.person import PersonKind


class _InboundModel(BaseModel):
    """Accepts snake_case or camelCase keys and strips surrounding whitespace"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class PersonInput(_InboundModel):
    """DTO for the person block of an enrollment request"""
    kind: PersonKind
    national_id: Optional[str] = Field(default=None, min_length=1, max_length=32)
    first_name: str = Field(min_length=1, max_length=120)
    last_name: str = Field(min_length=1, max_length=120)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=32)


class ConsentInput(_InboundModel):
    """DTO for the consent block. `accepted` must be explicitly true to enroll."""
    policy_version: str = Field(min_length=1, max_length=32)
    accepted: StrictBool = False
    origin: Optional[str] = Field(default=None, max_length=64)


class EmbeddingInput(_InboundModel):
    """DTO for a client-computed face embedding"""
    dims: StrictInt = Field(gt=0)
    values: List[StrictFloat]


class EnrollmentRequest(_InboundModel):
    """DTO for a one-shot enrollment request"""
    person: PersonInput
    consent: ConsentInput
    source: CaptureSource
    branch_id: Optional[StrictInt] = Field(default=None, gt=0)
    device_id: Optional[str] = Field(default=None, max_length=128)
    request_id: Optional[str] = Field(default=None, max_length=128)  # correlation only, not a dedup key
    embedding: Optional[EmbeddingInput] = None
    liveness_score: Optional[StrictFloat] = Field(default=None, ge=0.0, le=1.0)
    quality_score: Optional[StrictFloat] = Field(default=None, ge=0.0, le=1.0)


class ThresholdsResponse(BaseModel):
    """Configured thresholds, echoed for client display"""
    similarity: float
    liveness: float
    quality: float


class EnrollmentResponse(BaseModel):
    """DTO for a committed enrollment"""
    person_id: str
    consent_id: Optional[str] = None
    enrollment_id: str
    state: EnrollmentState = EnrollmentState.CURRENT
    thresholds: ThresholdsResponse


class ErrorResponse(BaseModel):
    """DTO for enrollment error bodies"""
    error: str
    message: str
    details: dict = Field(default_factory=dict)
