from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from projectdesk.db.base import Base

STATUS_CODES = ("on_track", "at_risk", "off_track")


class Project(Base):
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    identifier: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    parent_id: Mapped[str | None] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"), nullable=True, index=True
    )
    # Nested-set bounds; rewritten by ProjectRepository.rebuild_nested_set().
    lft: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)
    rgt: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    active: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    public: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    templated: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status_code: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[str] = mapped_column(Text, nullable=False)

    parent: Mapped["Project | None"] = relationship(remote_side=[id])

    @property
    def archived(self) -> bool:
        return not self.active

    def is_leaf(self) -> bool:
        return self.rgt - self.lft <= 1

    def is_descendant_of(self, other: "Project") -> bool:
        return other.lft < self.lft < other.rgt
