from .database_provider import DatabaseProvider
from .repository_provider import RepositoryProvider
from .enrollment_provider import EnrollmentProvider


__all__ = [
    "DatabaseProvider",
    "RepositoryProvider",
    "EnrollmentProvider",
]
