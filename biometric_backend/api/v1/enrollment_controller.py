# Standard library imports
from typing import Dict, Optional, Type

# External package imports
from fastapi import APIRouter, Depends, HTTPException, Request, status

# Local application imports
from ...application.dto.enrollment_dto import EnrollmentRequest, EnrollmentResponse, ErrorResponse
from ...application.use_cases.enrollment.enroll_person import EnrollPersonUseCase
from ...domain.errors import (
    CaptureRejected,
    ConsentNotGiven,
    EnrollmentError,
    InvalidEmbedding,
    InvalidRequestShape,
    PersistenceError,
    PersonBlocked,
)
from ...di.container import get_container
from .dependencies import get_actor_person_id


router = APIRouter(tags=["enrollments"])

# Most specific class wins (looked up along the exception's MRO)
ERROR_STATUS: Dict[Type[EnrollmentError], int] = {
    InvalidRequestShape: status.HTTP_400_BAD_REQUEST,
    ConsentNotGiven: status.HTTP_403_FORBIDDEN,
    PersonBlocked: status.HTTP_423_LOCKED,
    InvalidEmbedding: status.HTTP_422_UNPROCESSABLE_ENTITY,
    CaptureRejected: status.HTTP_412_PRECONDITION_FAILED,
    PersistenceError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_for(exception: EnrollmentError) -> int:
    """HTTP status for an enrollment error"""
    for cls in type(exception).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@router.post(
    "/one-shot",
    response_model=EnrollmentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={code: {"model": ErrorResponse} for code in set(ERROR_STATUS.values())},
)
async def enroll_one_shot(
    request: EnrollmentRequest,
    http_request: Request,
    actor_person_id: Optional[str] = Depends(get_actor_person_id),
) -> EnrollmentResponse:
    """
    Enroll a person with a client-computed face embedding in one transaction

    Args:
        request: Enrollment request
        http_request: Raw request (client address is the fallback consent origin)
        actor_person_id: Operator from the bearer token, if any

    Returns:
        EnrollmentResponse with the new CURRENT enrollment
    """
    container = get_container()
    enroll_use_case = container.get(EnrollPersonUseCase)

    client_origin = http_request.client.host if http_request.client else None

    try:
        return await enroll_use_case.execute(
            request,
            actor_person_id=actor_person_id,
            client_origin=client_origin,
        )
    except EnrollmentError as exception:
        raise HTTPException(
            status_code=status_for(exception),
            detail=exception.to_dict()
        )
