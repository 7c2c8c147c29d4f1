"""Relation catalog model"""

from sqlalchemy import Column, Integer, String
from tasklinks.core.database import Base


class Relation(Base):
    __tablename__ = "links"

    id = Column(Integer, primary_key=True, index=True)
    label = Column(String, unique=True, nullable=False)
    opposite_id = Column(Integer, nullable=False, default=0)  # 0 = la relation est son propre opposé
