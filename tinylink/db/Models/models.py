import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, DateTime, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Link(Base):
    __tablename__ = "links"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Unique constraint is what finally settles concurrent creates on the same code
    short_code = Column(String(8), unique=True, index=True, nullable=False)

    target_url = Column(Text, nullable=False)
    total_clicks = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    last_clicked_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<Link {self.short_code} -> {self.target_url}>"
