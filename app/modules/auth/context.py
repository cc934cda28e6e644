"""Per-request identity, resolved once from the session cookie."""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AuthContext:
    user_id: Optional[int] = None
    username: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        # 0 and other non-positive ids never count as logged in
        return self.user_id is not None and self.user_id > 0

    @property
    def initial(self) -> Optional[str]:
        if not self.username:
            return None
        return self.username[0].upper()


ANONYMOUS = AuthContext()
