from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from projectdesk.db.base import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    login: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    admin: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # JSON array of global permission names, e.g. '["add_project"]'
    permissions_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    created_at: Mapped[str] = mapped_column(Text, nullable=False)
