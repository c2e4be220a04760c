# prompt_driver/core/exceptions.py
from enum import Enum
from typing import Optional

from fastapi import status


class ErrorCode(Enum):
    # Authentication & authorization
    INVALID_CREDENTIALS = (status.HTTP_401_UNAUTHORIZED, "AUTH001", "Invalid email or password")
    INVALID_TOKEN = (status.HTTP_401_UNAUTHORIZED, "AUTH002", "Invalid token")
    EXPIRED_TOKEN = (status.HTTP_401_UNAUTHORIZED, "AUTH003", "Token has expired")
    UNAUTHORIZED_ACCESS = (status.HTTP_401_UNAUTHORIZED, "AUTH004", "Unauthorized access")
    FORBIDDEN = (status.HTTP_403_FORBIDDEN, "AUTH005", "Access forbidden")

    # Users
    USER_NOT_FOUND = (status.HTTP_404_NOT_FOUND, "USER001", "User not found")
    USER_ALREADY_EXISTS = (status.HTTP_409_CONFLICT, "USER002", "User already exists with this email")

    # Prompts
    PROMPT_NOT_FOUND = (status.HTTP_404_NOT_FOUND, "PROMPT001", "Prompt not found")
    INVALID_CATEGORY = (status.HTTP_400_BAD_REQUEST, "PROMPT002", "Invalid category")

    # Ratings
    RATING_ALREADY_EXISTS = (status.HTTP_409_CONFLICT, "RATING001", "Rating already exists")
    RATING_NOT_FOUND = (status.HTTP_404_NOT_FOUND, "RATING002", "Rating not found")

    # Validation
    VALIDATION_ERROR = (status.HTTP_400_BAD_REQUEST, "VAL001", "Validation error")
    INVALID_INPUT = (status.HTTP_400_BAD_REQUEST, "VAL002", "Invalid input")

    # Bookmarks
    BOOKMARK_NOT_FOUND = (status.HTTP_404_NOT_FOUND, "BOOKMARK001", "Bookmark not found")
    BOOKMARK_FOLDER_NOT_FOUND = (status.HTTP_404_NOT_FOUND, "BOOKMARK002", "Bookmark folder not found")
    BOOKMARK_FOLDER_LIMIT_EXCEEDED = (status.HTTP_400_BAD_REQUEST, "BOOKMARK003", "Maximum bookmark folders limit exceeded")
    FOLDER_NAME_ALREADY_EXISTS = (status.HTTP_409_CONFLICT, "BOOKMARK004", "Folder with this name already exists")
    SELF_BOOKMARK_NOT_ALLOWED = (status.HTTP_403_FORBIDDEN, "BOOKMARK005", "Cannot bookmark your own prompt")

    # Follows
    SELF_FOLLOW_NOT_ALLOWED = (status.HTTP_400_BAD_REQUEST, "FOLLOW001", "Cannot follow yourself")
    ALREADY_FOLLOWING = (status.HTTP_409_CONFLICT, "FOLLOW002", "Already following this user")
    NOT_FOLLOWING = (status.HTTP_404_NOT_FOUND, "FOLLOW003", "Not following this user")

    # Notifications
    NOTIFICATION_NOT_FOUND = (status.HTTP_404_NOT_FOUND, "NOTIF001", "Notification not found")

    # General
    INTERNAL_SERVER_ERROR = (status.HTTP_500_INTERNAL_SERVER_ERROR, "SYS001", "Internal server error")
    SERVICE_UNAVAILABLE = (status.HTTP_503_SERVICE_UNAVAILABLE, "SYS002", "Service temporarily unavailable")
    TOO_MANY_REQUESTS = (status.HTTP_429_TOO_MANY_REQUESTS, "SYS003", "Too many requests")

    def __init__(self, http_status: int, code: str, default_message: str):
        self.http_status = http_status
        self.code = code
        self.default_message = default_message


class BusinessException(Exception):
    error_code: ErrorCode = ErrorCode.INTERNAL_SERVER_ERROR

    def __init__(self, message: Optional[str] = None, error_code: Optional[ErrorCode] = None):
        if error_code is not None:
            self.error_code = error_code
        self.message = message or self.error_code.default_message
        super().__init__(self.message)


class UserNotFoundException(BusinessException):
    error_code = ErrorCode.USER_NOT_FOUND


class UserAlreadyExistsException(BusinessException):
    error_code = ErrorCode.USER_ALREADY_EXISTS


class InvalidCredentialsException(BusinessException):
    error_code = ErrorCode.INVALID_CREDENTIALS


class InvalidTokenException(BusinessException):
    error_code = ErrorCode.INVALID_TOKEN


class ExpiredTokenException(BusinessException):
    error_code = ErrorCode.EXPIRED_TOKEN


class UnauthorizedAccessException(BusinessException):
    error_code = ErrorCode.UNAUTHORIZED_ACCESS


class ForbiddenException(BusinessException):
    error_code = ErrorCode.FORBIDDEN


class ValidationException(BusinessException):
    error_code = ErrorCode.VALIDATION_ERROR


class PromptNotFoundException(BusinessException):
    error_code = ErrorCode.PROMPT_NOT_FOUND


class InvalidCategoryException(BusinessException):
    error_code = ErrorCode.INVALID_CATEGORY


class InvalidRatingException(BusinessException):
    error_code = ErrorCode.VALIDATION_ERROR


class RatingAlreadyExistsException(BusinessException):
    error_code = ErrorCode.RATING_ALREADY_EXISTS


class RatingNotFoundException(BusinessException):
    error_code = ErrorCode.RATING_NOT_FOUND


class SelfRatingException(BusinessException):
    error_code = ErrorCode.FORBIDDEN


class UnauthorizedRatingAccessException(BusinessException):
    error_code = ErrorCode.FORBIDDEN


class BookmarkNotFoundException(BusinessException):
    error_code = ErrorCode.BOOKMARK_NOT_FOUND


class BookmarkFolderNotFoundException(BusinessException):
    error_code = ErrorCode.BOOKMARK_FOLDER_NOT_FOUND


class BookmarkFolderLimitExceededException(BusinessException):
    error_code = ErrorCode.BOOKMARK_FOLDER_LIMIT_EXCEEDED


class FolderNameAlreadyExistsException(BusinessException):
    error_code = ErrorCode.FOLDER_NAME_ALREADY_EXISTS


class SelfBookmarkNotAllowedException(BusinessException):
    error_code = ErrorCode.SELF_BOOKMARK_NOT_ALLOWED


class SelfFollowNotAllowedException(BusinessException):
    error_code = ErrorCode.SELF_FOLLOW_NOT_ALLOWED


class AlreadyFollowingException(BusinessException):
    error_code = ErrorCode.ALREADY_FOLLOWING


class NotFollowingException(BusinessException):
    error_code = ErrorCode.NOT_FOLLOWING


class NotificationNotFoundException(BusinessException):
    error_code = ErrorCode.NOTIFICATION_NOT_FOUND
