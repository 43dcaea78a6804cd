"""Constants for AuditEntry model field names"""


class AuditFields:
    """Field name constants for AuditEntry model"""
    ID = "id"
    ACTOR_PERSON_ID = "actor_person_id"
    ACTION = "action"
    OBJECT_TYPE = "object_type"
    OBJECT_ID = "object_id"
    DETAIL = "detail"
    CREATED_AT = "created_at"

    # MongoDB specific
    MONGO_ID = "_id"


class AuditActions:
    """Action tags written to the audit trail"""
    ENROLLMENT_CREATED = "ENROLLMENT_CREATED"


class AuditObjectTypes:
    """Subject types referenced by audit entries"""
    ENROLLMENT = "enrollment"
