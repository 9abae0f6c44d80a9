# mentor_connect/exceptions.py (COMPLETE)
class BusinessLogicError(Exception):
    """Base exception for business logic errors"""
    status_code = 400

    def __init__(self, message: str = "Business rule violated"):
        super().__init__(message)
        self.message = message

class InvalidArgumentError(BusinessLogicError):
    """Raised when input is missing or malformed"""
    status_code = 400

class UnauthenticatedError(BusinessLogicError):
    """Raised when a bearer credential is missing or invalid"""
    status_code = 401

class ForbiddenError(BusinessLogicError):
    """Raised when an authenticated user lacks authorization for a resource"""
    status_code = 403

class NotFoundError(BusinessLogicError):
    """Raised when a resource is not found"""
    status_code = 404

class ConflictError(BusinessLogicError):
    """Raised on uniqueness or state collisions"""
    status_code = 409

class DuplicateRequestError(ConflictError):
    """Raised when a connection already exists for a pair of users"""
    pass

class EmailAlreadyRegisteredError(ConflictError):
    """Raised when registering an email that is already taken"""
    pass

class InvalidStatusTransitionError(BusinessLogicError):
    """Raised when invalid status transition is attempted"""
    status_code = 400
