# core/exceptions.py
class SchoolManagementException(Exception):
    """Base exception for all school management system errors."""
    status_code = 400

    def __init__(self, message=None, user_friendly=False, details=None, error_code=None):
        self.message = message or "An error occurred"
        self.user_friendly = user_friendly
        self.details = details or {}
        self.error_code = error_code
        super().__init__(self.message)

class InvalidArgument(SchoolManagementException):
    """Malformed or out-of-range input, rejected before any read."""
    status_code = 400

    def __init__(self, message=None, user_friendly=True, details=None):
        super().__init__(message or "Invalid argument", user_friendly, details, "INVALID_ARGUMENT")

class NotFound(SchoolManagementException):
    """Referenced class, year or timetable has no data."""
    status_code = 404

    def __init__(self, message=None, user_friendly=True, details=None, error_code="NOT_FOUND"):
        super().__init__(message or "Not found", user_friendly, details, error_code)

class NoClassesConfigured(NotFound):
    """No classes exist for the requested (year, grade)."""
    def __init__(self, year, grade):
        super().__init__(
            f"No classes configured for grade {grade} in {year}",
            details={'year': year, 'grade': grade},
            error_code="NO_CLASSES_CONFIGURED",
        )

class TimetableConflictError(SchoolManagementException):
    """A timetable save double-books one or more teachers."""
    status_code = 409

    def __init__(self, conflicts):
        self.conflicts = list(conflicts)
        super().__init__(
            f"Teacher double-booking detected in {len(self.conflicts)} slot(s)",
            True,
            {'conflicts': [conflict.as_dict() for conflict in self.conflicts]},
            "TIMETABLE_CONFLICT",
        )

class TimetableLocked(SchoolManagementException):
    """The timetable is published and must be unlocked before editing."""
    status_code = 403

    def __init__(self, message=None, user_friendly=True, details=None):
        super().__init__(
            message or "Timetable is locked. Unlock it before editing.",
            user_friendly, details, "TIMETABLE_LOCKED",
        )

class TransactionFailed(SchoolManagementException):
    """The atomic commit did not complete; nothing was changed."""
    status_code = 503

    def __init__(self, message=None, user_friendly=True, details=None):
        super().__init__(
            message or "The operation could not be committed. Please retry.",
            user_friendly, details, "TRANSACTION_FAILED",
        )
