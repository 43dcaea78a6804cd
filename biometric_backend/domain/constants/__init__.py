"""Constants for domain model field names"""

from .person_fields import PersonFields
from .consent_fields import ConsentFields
from .enrollment_fields import EnrollmentFields, EmbeddingFields
from .audit_fields import AuditFields, AuditActions, AuditObjectTypes
from .block_fields import BlockFields

__all__ = [
    "PersonFields",
    "ConsentFields",
    "EnrollmentFields",
    "EmbeddingFields",
    "AuditFields",
    "AuditActions",
    "AuditObjectTypes",
    "BlockFields",
]
