from config import ApplicationConfig
from src.api.utils.jwt import generate_jwt
from src.domain.entities import Account


def auth_headers(account: Account) -> dict:
    return {"Authorization": f"Bearer {generate_jwt(account.id)}"}


def admin_headers() -> dict:
    return {"X-Admin-API-Key": ApplicationConfig.ADMIN_API_KEY}
