from __future__ import annotations

from careerforge.schemas.base import CamelModel


class AuthUserOut(CamelModel):
    id: str
    email: str | None = None
    has_premium_export: bool = False
