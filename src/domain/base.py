import re
import secrets

from email_validator import EmailNotValidError, validate_email

# Invite tokens: "c" followed by 25 base-36 characters (~129 bits of entropy).
# The format is deliberately disjoint from UUIDs so legacy tokens fail validation.
TOKEN_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
TOKEN_BODY_LENGTH = 25
TOKEN_PATTERN = re.compile(r"^c[0-9a-z]{%d}$" % TOKEN_BODY_LENGTH)

EMAIL_MAX_LENGTH = 254


def generate_invite_token() -> str:
    body = "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(TOKEN_BODY_LENGTH))
    return "c" + body


def is_valid_invite_token(token: str) -> bool:
    if not isinstance(token, str):
        return False
    return TOKEN_PATTERN.match(token) is not None


def normalize_email(email: str) -> str:
    return email.strip().lower()


def is_valid_email(email: str) -> bool:
    if not email or len(email) > EMAIL_MAX_LENGTH:
        return False
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True
