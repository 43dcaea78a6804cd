"""Constants for Consent model field names"""


class ConsentFields:
    """Field name constants for Consent model"""
    ID = "id"
    PERSON_ID = "person_id"
    POLICY_VERSION = "policy_version"
    ORIGIN = "origin"
    CREATED_AT = "created_at"

    # MongoDB specific
    MONGO_ID = "_id"
