"""Constants for Person model field names"""


class PersonFields:
    """Field name constants for Person model"""
    ID = "id"
    KIND = "kind"
    NATIONAL_ID = "national_id"
    FIRST_NAME = "first_name"
    LAST_NAME = "last_name"
    EMAIL = "email"
    PHONE = "phone"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"

    # MongoDB specific
    MONGO_ID = "_id"  # MongoDB's internal _id field
