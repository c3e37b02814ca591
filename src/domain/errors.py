"""
Seat Domain Error Codes

Stable, machine-readable kinds carried by every libs.result.Error the use
cases return. ``reason`` sub-codes refine a kind without changing its HTTP
mapping.
"""

from libs.result import Error

VALIDATION_ERROR = "VALIDATION_ERROR"
FORBIDDEN = "FORBIDDEN"
NOT_FOUND = "NOT_FOUND"
CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
ALREADY_USED_OR_EXPIRED = "ALREADY_USED_OR_EXPIRED"
HAS_ACTIVE_PLAN = "HAS_ACTIVE_PLAN"
ALREADY_MEMBER = "ALREADY_MEMBER"
ALREADY_OWNER = "ALREADY_OWNER"
CONSISTENCY_FAULT = "CONSISTENCY_FAULT"
TRANSIENT_CONFLICT = "TRANSIENT_CONFLICT"


class ConsistencyFault(Exception):
    """
    A persisted seat invariant was found violated.

    Never repaired in place: raised through the use case, logged and
    rendered as 500 by the API layer.
    """

    def __init__(self, message: str, **context):
        self.base_error = Error(CONSISTENCY_FAULT, message)
        self.context = context
        super().__init__(message)


def invalid_token() -> Error:
    return Error(VALIDATION_ERROR, "Invalid invite token format", reason="INVALID_TOKEN")


def invite_not_found() -> Error:
    return Error(NOT_FOUND, "Invite not found", reason="INVITE_NOT_FOUND")


def invite_unavailable() -> Error:
    return Error(
        ALREADY_USED_OR_EXPIRED,
        "This invite has already been used or has expired",
    )


def family_full() -> Error:
    return Error(
        CAPACITY_EXCEEDED, "This family has no seats available", reason="FAMILY_FULL"
    )
