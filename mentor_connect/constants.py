# mentor_connect/constants.py
class ErrorMessages:
    USER_NOT_FOUND = "User not found"
    RECIPIENT_NOT_FOUND = "Recipient user not found"
    CONNECTION_NOT_FOUND = "Connection request not found"
    INVALID_RECIPIENT = "Valid Recipient ID is required"
    SELF_CONNECTION = "You cannot send a connection request to yourself"
    REQUEST_ALREADY_PENDING = "Request already sent and is pending"
    REQUEST_PENDING_FROM_OTHER = "This user has already sent you a pending request. Check your received requests."
    ALREADY_CONNECTED = "You are already connected with this user"
    OWN_REQUEST_DECLINED = "Your previous request to this user was declined. Cannot send again."
    DECLINED_THEIR_REQUEST = "You previously declined a request from this user. Cannot send request."
    PAIR_CONFLICT = "A connection record conflict occurred"
    INVALID_DECISION = 'Invalid status provided. Must be "accepted" or "declined".'
    NOT_RECIPIENT = "You are not authorized to manage this request"
    NOT_PARTICIPANT = "You are not authorized to modify this connection"
    DECLINED_IMMUTABLE = "Declined connection records cannot be deleted"
    INVALID_CONNECTION_TYPE = (
        "Invalid connection type specified. Use 'pending_received', 'pending_sent', "
        "'accepted', 'declined_sent', or 'declined_received'."
    )
    INVALID_ROLE = "Invalid role specified"
    INVALID_ROLE_FILTER = "Invalid role filter specified"
    EMAIL_TAKEN = "User already exists with this email"
    INVALID_CREDENTIALS = "Invalid email or password"
    NOT_AUTHENTICATED = "Could not validate credentials"
    MISSING_FIELDS = "Please provide all required fields"
    PASSWORD_TOO_SHORT = "Password must be at least 6 characters"
    EMPTY_NAME = "Name cannot be empty"
    NAME_TOO_LONG = "Name cannot be more than 100 characters"
    NO_UPDATE_DATA = "No update data provided"

class BusinessRules:
    MIN_PASSWORD_LENGTH = 6
    MAX_NAME_LENGTH = 100
