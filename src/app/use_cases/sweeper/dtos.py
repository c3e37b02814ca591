from pydantic import BaseModel


class SweepResponse(BaseModel):
    """Counts reported by a sweep run"""

    expired: int
    failed: int = 0
