from enum import Enum

# Keys that must stay unique across the collection, in the order
# they are checked when a duplicate-key error does not name the field.
UNIQUE_FIELDS = ("rollNumber", "email")

# Fields clients may never set; the store owns them.
SYSTEM_FIELDS = ("_id", "createdAt", "updatedAt")


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class StudentStatus(str, Enum):
    ACTIVE = "Active"
    GRADUATED = "Graduated"
    ON_LEAVE = "On Leave"


# (keys, unique) pairs passed to create_index at startup
STUDENT_INDEXES = [
    ([("rollNumber", 1)], True),
    ([("email", 1)], True),
    ([("fullName", 1)], False),
]
