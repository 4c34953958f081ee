from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from datetime import datetime
import logging

from tinylink.db.Models.models import Link, utcnow

logger = logging.getLogger(__name__)


def get_link_by_short_code(db: Session, short_code: str) -> Optional[Link]:
    return db.query(Link).filter(Link.short_code == short_code).first()

def short_code_exists(db: Session, short_code: str) -> bool:
    return db.query(Link.id).filter(Link.short_code == short_code).first() is not None

def list_links(db: Session) -> List[Link]:
    return db.query(Link).order_by(Link.created_at.desc()).all()


def insert_link(db: Session, short_code: str, target_url: str) -> Link:
    db_link = Link(short_code=short_code, target_url=target_url, total_clicks=0, created_at=utcnow())
    try:
        db.add(db_link)
        db.commit()
        db.refresh(db_link)
        return db_link
    except IntegrityError as e:
        db.rollback()
        logger.warning(
            "IntegrityError creating Link short_code=%s target=%s: %s",
            short_code, target_url[:50], str(e.orig) if hasattr(e, 'orig') else str(e)
        )
        raise

def delete_link(db: Session, short_code: str) -> int:
    deleted = db.query(Link).filter(Link.short_code == short_code).delete(synchronize_session=False)
    db.commit()
    return deleted

def increment_click(db: Session, short_code: str, clicked_at: Optional[datetime] = None) -> Optional[str]:
    """Count one click on ``short_code`` and return its target URL.

    The counter and timestamp move together in one UPDATE. The target is read
    back inside the same transaction, while the updated row is still locked,
    so a concurrent delete cannot slip in between. Returns None when no row
    matched.
    """
    updated = db.query(Link).filter(Link.short_code == short_code).update({
        Link.total_clicks: Link.total_clicks + 1,
        Link.last_clicked_at: clicked_at or utcnow()
    }, synchronize_session=False)
    if not updated:
        db.rollback()
        return None

    target_url = db.query(Link.target_url).filter(Link.short_code == short_code).scalar()
    db.commit()
    return target_url
