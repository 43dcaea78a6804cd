"""Constants for BlockRecord model field names"""


class BlockFields:
    """Field name constants for BlockRecord model"""
    ID = "id"
    PERSON_ID = "person_id"
    ACTIVE = "active"
    EXPIRES_AT = "expires_at"
    REASON = "reason"

    # MongoDB specific
    MONGO_ID = "_id"
