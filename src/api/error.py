from fastapi import status
from libs.result import Error

from src.domain import errors


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


STATUS_BY_CODE = {
    errors.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    errors.CAPACITY_EXCEEDED: status.HTTP_400_BAD_REQUEST,
    errors.ALREADY_USED_OR_EXPIRED: status.HTTP_400_BAD_REQUEST,
    errors.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    errors.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    errors.HAS_ACTIVE_PLAN: status.HTTP_409_CONFLICT,
    errors.ALREADY_MEMBER: status.HTTP_409_CONFLICT,
    errors.ALREADY_OWNER: status.HTTP_409_CONFLICT,
}


def to_http_error(error: Error) -> Exception:
    """ClientError for known business codes, ServerError for anything else"""
    status_code = STATUS_BY_CODE.get(error.code)
    if status_code is None:
        return ServerError(error)
    return ClientError(error, status_code=status_code)


def error_body(error: Error) -> dict:
    body = {"code": error.code, "message": error.message}
    if error.reason:
        body["reason"] = error.reason
    return body
