"""Relation catalog: labels and opposite relation types"""

import logging
from sqlalchemy.orm import Session
from typing import List, Optional
from tasklinks.core.errors import RelationNotFoundError
from tasklinks.models.relation import Relation

logger = logging.getLogger(__name__)

# (id, label, opposite_id) - 0 = relation symétrique
DEFAULT_RELATIONS = [
    (1, "relates to", 0),
    (2, "blocks", 3),
    (3, "is blocked by", 2),
    (4, "duplicates", 5),
    (5, "is duplicated by", 4),
    (6, "is a child of", 7),
    (7, "is a parent of", 6),
    (8, "targets milestone", 9),
    (9, "is a milestone of", 8),
    (10, "fixes", 11),
    (11, "is fixed by", 10),
]


def get_by_id(db: Session, link_id: int) -> Optional[Relation]:
    return db.get(Relation, link_id)


def get_all(db: Session) -> List[Relation]:
    return db.query(Relation).order_by(Relation.id).all()


def get_opposite_link_id(db: Session, link_id: int) -> int:
    relation = get_by_id(db, link_id)
    if relation is None:
        raise RelationNotFoundError(link_id)
    return relation.opposite_id or relation.id


def get_label(db: Session, link_id: int) -> str:
    relation = get_by_id(db, link_id)
    if relation is None:
        raise RelationNotFoundError(link_id)
    return relation.label


def seed_default_relations(db: Session) -> int:
    """Insère le catalogue par défaut si la table est vide."""
    if db.query(Relation).first() is not None:
        return 0

    db.add_all(
        Relation(id=link_id, label=label, opposite_id=opposite_id)
        for link_id, label, opposite_id in DEFAULT_RELATIONS
    )
    db.commit()
    logger.info("Seeded %d default relations", len(DEFAULT_RELATIONS))
    return len(DEFAULT_RELATIONS)
