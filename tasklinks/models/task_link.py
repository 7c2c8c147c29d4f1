"""Task link model (one half of a link pair)"""

from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint
from tasklinks.core.database import Base


class TaskLink(Base):
    __tablename__ = "task_has_links"
    __table_args__ = (
        UniqueConstraint("task_id", "opposite_task_id", "link_id", name="task_has_links_unique"),
    )

    id = Column(Integer, primary_key=True, index=True)
    task_id = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    opposite_task_id = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    link_id = Column(Integer, ForeignKey("links.id", ondelete="CASCADE"), nullable=False)  # type de relation vu depuis task_id
