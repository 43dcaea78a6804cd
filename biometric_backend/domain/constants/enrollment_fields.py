"""Constants for Enrollment and FaceEmbedding field names"""


class EnrollmentFields:
    """Field name constants for Enrollment model"""
    ID = "id"
    PERSON_ID = "person_id"
    STATE = "state"
    SOURCE = "source"
    LIVENESS_SCORE = "liveness_score"
    QUALITY_SCORE = "quality_score"
    CREATED_AT = "created_at"
    SUPERSEDED_AT = "superseded_at"

    # MongoDB specific
    MONGO_ID = "_id"


class EmbeddingFields:
    """Field name constants for FaceEmbedding model"""
    ENROLLMENT_ID = "enrollment_id"
    DIMS = "dims"
    VECTOR = "vector"
    CREATED_AT = "created_at"

    # MongoDB specific
    MONGO_ID = "_id"
