from .person import Person, PersonKind, PersonProfile
from .consent import Consent
from .enrollment import Enrollment, EnrollmentState, CaptureSource
from .face_embedding import FaceEmbedding
from .audit_entry import AuditEntry
from .block_record import BlockRecord

__all__ = [
    "Person",
    "PersonKind",
    "PersonProfile",
    "Consent",
    "Enrollment",
    "EnrollmentState",
    "CaptureSource",
    "FaceEmbedding",
    "AuditEntry",
    "BlockRecord",
]
