import json

from sqlalchemy import func, select

from projectdesk.db.models.user import User
from projectdesk.db.repositories.base_repo import BaseRepository


class UserRepository(BaseRepository):
    def get_by_login(self, login: str) -> User | None:
        """Case-insensitive login lookup."""
        stmt = select(User).where(func.lower(User.login) == login.strip().lower()).limit(1)
        return self.db.scalars(stmt).first()

    def create_user(
        self,
        *,
        user_id: str,
        login: str,
        admin: bool,
        permissions: list[str],
        created_at: str,
    ) -> User:
        user = User(
            id=user_id,
            login=login,
            admin=1 if admin else 0,
            permissions_json=json.dumps(sorted(set(permissions))),
            created_at=created_at,
        )
        self.db.add(user)
        return user
