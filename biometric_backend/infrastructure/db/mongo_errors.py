"""Translation of driver errors into the domain error taxonomy."""
# External package imports
from pymongo.errors import PyMongoError

# Local application imports
from ...domain.errors import PersistenceError, TransactionConflict

TRANSIENT_TRANSACTION_ERROR = "TransientTransactionError"


def translate_mongo_error(error: PyMongoError, message: str) -> PersistenceError:
    """
    Wrap a PyMongo error.

    Errors labelled TransientTransactionError (write conflicts with a
    concurrent transaction, primary step-down) become TransactionConflict so
    the whole unit of work can be re-run; everything else is a plain
    PersistenceError.
    """
    details = {"driver_error": error.__class__.__name__}
    code = getattr(error, "code", None)
    if code is not None:
        details["code"] = code
    if error.has_error_label(TRANSIENT_TRANSACTION_ERROR):
        return TransactionConflict(f"{message}: {str(error)}", details)
    return PersistenceError(f"{message}: {str(error)}", details)
