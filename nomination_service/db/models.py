"""
SQLAlchemy models for the nominations table.
"""
from datetime import datetime, UTC

from sqlalchemy import CheckConstraint, Column, DateTime, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import declarative_base

from nomination_service.constants import ALL_DOMAINS, ALL_GENDERS, sql_in_list


def now_utc():
    """Return an aware UTC datetime for default/updated timestamps."""
    return datetime.now(UTC)


Base = declarative_base()


class Nomination(Base):
    __tablename__ = 'nominations'
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    course = Column(String(255), nullable=False)
    phone_no = Column(String(20), nullable=False)
    domain = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    insta_id = Column(String(255), nullable=True)
    github_id = Column(String(255), nullable=True)
    gender = Column(String(20), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    __table_args__ = (
        UniqueConstraint('email', name='uq_nominations_email'),
        Index('idx_nominations_domain', 'domain'),
        Index('idx_nominations_created_at', 'created_at'),
        CheckConstraint(f"domain in {sql_in_list(ALL_DOMAINS)}", name='ck_nominations_domain'),
        CheckConstraint(f"gender in {sql_in_list(ALL_GENDERS)}", name='ck_nominations_gender'),
    )

    def __repr__(self):
        return f"<Nomination id={self.id} email={self.email!r} domain={self.domain!r}>"
