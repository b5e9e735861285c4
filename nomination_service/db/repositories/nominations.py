"""
Nomination repository functions.

Implements create/read/update/delete, paginated listing (optionally filtered
by domain) and the single-statement statistics aggregate. Uniqueness of email
is decided by the database constraint; callers may pre-check with
`get_nomination_by_email` but that is only a fast path.
"""
from __future__ import annotations

import logging
import math
from contextlib import contextmanager
from typing import Any, Dict, Mapping, Optional

from sqlalchemy import case, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

from nomination_service.constants import ALL_DOMAINS, ALL_GENDERS
from nomination_service.db import models, schemas
from nomination_service.errors import DuplicateKey, InvalidRequest, StorageFault
from nomination_service.validation import NOMINATION_FIELDS

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"
EMAIL_CONSTRAINT = "uq_nominations_email"

# Columns an update may touch; anything else is rejected before SQL is built.
UPDATABLE_FIELDS = frozenset(NOMINATION_FIELDS)


def _is_unique_violation(exc: IntegrityError) -> bool:
    """Inspect the driver error behind an IntegrityError for a unique-key hit."""
    orig = getattr(exc, "orig", None)
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code is not None:
        if code != UNIQUE_VIOLATION:
            return False
        diag = getattr(orig, "diag", None)
        constraint = getattr(diag, "constraint_name", None)
        return constraint in (None, EMAIL_CONSTRAINT)
    # sqlite3 exposes no SQLSTATE, only the message
    return "UNIQUE constraint failed" in str(orig)


@contextmanager
def _storage_errors(db: Session, action: str):
    try:
        yield
    except IntegrityError as e:
        db.rollback()
        if _is_unique_violation(e):
            logger.info("nomination_%s_duplicate_email", action)
            raise DuplicateKey("Email already exists") from e
        logger.exception("nomination_%s_integrity_error", action)
        raise StorageFault() from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("nomination_%s_failed", action)
        raise StorageFault() from e


def create_nomination(db: Session, record: Mapping[str, Any]) -> models.Nomination:
    db_nomination = models.Nomination(**{key: record.get(key) for key in NOMINATION_FIELDS})
    with _storage_errors(db, "create"):
        db.add(db_nomination)
        db.commit()
        db.refresh(db_nomination)
    return db_nomination


def get_nomination(db: Session, nomination_id: int) -> Optional[models.Nomination]:
    with _storage_errors(db, "get"):
        return db.query(models.Nomination).filter(models.Nomination.id == nomination_id).first()


def get_nomination_by_email(db: Session, email: str) -> Optional[models.Nomination]:
    with _storage_errors(db, "get_by_email"):
        return db.query(models.Nomination).filter(models.Nomination.email == email).first()


def _pagination(page: int, page_size: int, total: int) -> Dict[str, Any]:
    total_pages = math.ceil(total / page_size) if page_size else 0
    return {
        "current_page": page,
        "total_pages": total_pages,
        "total_items": total,
        "items_per_page": page_size,
        "has_next_page": page < total_pages,
        "has_prev_page": page > 1,
    }


def _paginate(q: Query, page: int, page_size: int) -> Dict[str, Any]:
    total = q.order_by(None).count()
    items = (
        q.order_by(models.Nomination.created_at.desc(), models.Nomination.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return {"nominations": items, "pagination": _pagination(page, page_size, total)}


def get_nominations(db: Session, page: int = 1, page_size: int = 10) -> Dict[str, Any]:
    """List nominations, newest first, with pagination metadata."""
    with _storage_errors(db, "list"):
        return _paginate(db.query(models.Nomination), page, page_size)


def get_nominations_by_domain(db: Session, domain: str, page: int = 1, page_size: int = 10) -> Dict[str, Any]:
    """List one domain's nominations; counts cover the filtered set only."""
    with _storage_errors(db, "list_by_domain"):
        q = db.query(models.Nomination).filter(models.Nomination.domain == domain)
        return _paginate(q, page, page_size)


def update_nomination(db: Session, nomination_id: int, changes: Mapping[str, Any]) -> Optional[models.Nomination]:
    if not changes:
        raise InvalidRequest("No fields to update")
    unknown = sorted(set(changes) - UPDATABLE_FIELDS)
    if unknown:
        raise InvalidRequest(f"Unknown fields: {', '.join(unknown)}")

    with _storage_errors(db, "update"):
        db_nomination = db.query(models.Nomination).filter(models.Nomination.id == nomination_id).first()
        if db_nomination is None:
            return None
        for key, value in changes.items():
            setattr(db_nomination, key, value)
        # Unchanged values emit no UPDATE, so bump the timestamp explicitly
        db_nomination.updated_at = models.now_utc()
        db.commit()
        db.refresh(db_nomination)
    return db_nomination


def delete_nomination(db: Session, nomination_id: int) -> Optional[schemas.Nomination]:
    """Delete a nomination and return a snapshot of the removed record."""
    with _storage_errors(db, "delete"):
        db_nomination = db.query(models.Nomination).filter(models.Nomination.id == nomination_id).first()
        if db_nomination is None:
            return None
        snapshot = schemas.Nomination.model_validate(db_nomination)
        db.delete(db_nomination)
        db.commit()
    return snapshot


def get_nomination_stats(db: Session) -> Dict[str, Any]:
    """Total plus per-domain and per-gender counts from one SELECT.

    Every count comes from the same statement so the breakdowns always sum
    to the total, even with writes in flight.
    """
    n = models.Nomination
    columns = [func.count(n.id)]
    columns += [func.count(case((n.domain == d, 1))) for d in ALL_DOMAINS]
    columns += [func.count(case((n.gender == g, 1))) for g in ALL_GENDERS]

    with _storage_errors(db, "stats"):
        row = db.query(*columns).one()

    counts = [int(c or 0) for c in row]
    domain_counts = counts[1:1 + len(ALL_DOMAINS)]
    gender_counts = counts[1 + len(ALL_DOMAINS):]
    return {
        "total_nominations": counts[0],
        "by_domain": dict(zip(ALL_DOMAINS, domain_counts)),
        "by_gender": dict(zip(ALL_GENDERS, gender_counts)),
    }
