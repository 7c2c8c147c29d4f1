from sqlalchemy import Column, Integer, String, ForeignKey
from tasklinks.core.database import Base

class BoardColumn(Base):
    __tablename__ = "columns"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    position = Column(Integer, default=0)  # ordre dans le board
