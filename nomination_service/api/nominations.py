"""
Nominations API endpoints.

Each handler checks structural preconditions, runs validation, delegates to
the repository and wraps the outcome in the response envelope. Domain rules
live in `nomination_service.validation` and the repository.
"""
import logging
import re
from typing import Any, Dict, Optional, Tuple

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from nomination_service.api.responses import error_response, success_response
from nomination_service.constants import ALL_DOMAINS, DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, is_valid_domain
from nomination_service.db import schemas
from nomination_service.db.database import get_db
from nomination_service.db.repositories import nominations as repo
from nomination_service.errors import DuplicateKey, InvalidRequest, NotFound
from nomination_service.validation import validate_or_raise

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/nominations", tags=["nominations"])

# Largest value an INTEGER primary key can hold
MAX_NOMINATION_ID = 2**31 - 1
_DIGITS_RE = re.compile(r"[0-9]+")


def _parse_id(raw: str) -> int:
    if not raw or not _DIGITS_RE.fullmatch(raw):
        raise InvalidRequest("Invalid nomination ID")
    value = int(raw)
    if value < 1 or value > MAX_NOMINATION_ID:
        raise InvalidRequest("Invalid nomination ID")
    return value


def _pagination_value(raw: Optional[str], default: int) -> int:
    if raw is None or raw == "":
        return default
    # int() would also accept padding, signs and underscores
    if not _DIGITS_RE.fullmatch(raw):
        raise InvalidRequest("Invalid pagination parameters")
    return int(raw)


def _parse_pagination(page: Optional[str], limit: Optional[str]) -> Tuple[int, int]:
    page_n = _pagination_value(page, DEFAULT_PAGE)
    limit_n = _pagination_value(limit, DEFAULT_PAGE_SIZE)
    if page_n < 1 or limit_n < 1 or limit_n > MAX_PAGE_SIZE:
        raise InvalidRequest("Invalid pagination parameters")
    return page_n, limit_n


def _serialize(nomination) -> dict:
    return schemas.Nomination.model_validate(nomination).model_dump(mode="json")


def _serialize_page(result: Dict[str, Any]) -> dict:
    return schemas.NominationPage.model_validate(
        {
            "nominations": [schemas.Nomination.model_validate(n) for n in result["nominations"]],
            "pagination": result["pagination"],
        }
    ).model_dump(mode="json")


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_nomination_endpoint(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    db: Session = Depends(get_db),
):
    try:
        record = validate_or_raise(payload)
        # Fast path only; the unique constraint decides concurrent submissions
        if repo.get_nomination_by_email(db, record["email"]):
            logger.info("nomination_create_duplicate_email")
            raise DuplicateKey("Email already exists. Each person can only submit one nomination.")
        created = repo.create_nomination(db, record)
    except Exception as e:
        return error_response(e, "create")
    logger.info("nomination_created: id=%s domain=%s", created.id, created.domain)
    return success_response("Nomination submitted successfully", _serialize(created), status.HTTP_201_CREATED)


@router.get("/")
def get_all_nominations_endpoint(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    db: Session = Depends(get_db),
):
    try:
        page_n, limit_n = _parse_pagination(page, limit)
        result = repo.get_nominations(db, page=page_n, page_size=limit_n)
    except Exception as e:
        return error_response(e, "list")
    return success_response("Nominations retrieved successfully", _serialize_page(result))


@router.get("/stats")
def get_nomination_stats_endpoint(db: Session = Depends(get_db)):
    try:
        stats = repo.get_nomination_stats(db)
    except Exception as e:
        return error_response(e, "stats")
    return success_response("Statistics retrieved successfully", schemas.NominationStats(**stats).model_dump())


@router.get("/domains")
def get_domains_endpoint():
    return success_response("Domains retrieved successfully", list(ALL_DOMAINS))


# `path` converter: "UI/UX" contains a slash
@router.get("/domain/{domain:path}")
def get_nominations_by_domain_endpoint(
    domain: str,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    db: Session = Depends(get_db),
):
    try:
        if not is_valid_domain(domain):
            raise InvalidRequest("Invalid domain")
        page_n, limit_n = _parse_pagination(page, limit)
        result = repo.get_nominations_by_domain(db, domain, page=page_n, page_size=limit_n)
    except Exception as e:
        return error_response(e, "list_by_domain")
    return success_response(f"Nominations for {domain} retrieved successfully", _serialize_page(result))


@router.get("/{nomination_id}")
def get_nomination_endpoint(nomination_id: str, db: Session = Depends(get_db)):
    try:
        db_nomination = repo.get_nomination(db, _parse_id(nomination_id))
        if db_nomination is None:
            raise NotFound()
    except Exception as e:
        return error_response(e, "get")
    return success_response("Nomination retrieved successfully", _serialize(db_nomination))


@router.put("/{nomination_id}")
def update_nomination_endpoint(
    nomination_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    db: Session = Depends(get_db),
):
    try:
        target_id = _parse_id(nomination_id)
        changes = validate_or_raise(payload, partial=True)
        if not changes:
            raise InvalidRequest("No fields to update")
        existing = repo.get_nomination(db, target_id)
        if existing is None:
            raise NotFound()
        new_email = changes.get("email")
        if new_email is not None and new_email != existing.email:
            other = repo.get_nomination_by_email(db, new_email)
            if other is not None and other.id != target_id:
                logger.info("nomination_update_duplicate_email: id=%s", target_id)
                raise DuplicateKey()
        updated = repo.update_nomination(db, target_id, changes)
        if updated is None:
            raise NotFound()
    except Exception as e:
        return error_response(e, "update")
    logger.info("nomination_updated: id=%s fields=%s", updated.id, sorted(changes))
    return success_response("Nomination updated successfully", _serialize(updated))


@router.delete("/{nomination_id}")
def delete_nomination_endpoint(nomination_id: str, db: Session = Depends(get_db)):
    try:
        deleted = repo.delete_nomination(db, _parse_id(nomination_id))
        if deleted is None:
            raise NotFound()
    except Exception as e:
        return error_response(e, "delete")
    logger.info("nomination_deleted: id=%s", deleted.id)
    return success_response("Nomination deleted successfully", _serialize(deleted))
