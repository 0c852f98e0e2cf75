"""
Database - Session Store I/O Operations

Handles all database operations for finished session summaries.
Uses SQLAlchemy ORM; SQLite by default, any SQLAlchemy URL via DATABASE_URL.

This module handles ONLY database I/O.
Grading and lifecycle logic live in the grading and lifecycle modules.
"""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger
from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from core.digits.constants import ConstantKind
from core.digits.models import Base, SessionRecord as SessionRecordModel
from core.digits.summary import SessionSummary
from core.digits.tokens import token_from_dict, token_to_dict

load_dotenv()

DEFAULT_DATABASE_URL = "sqlite:///data/digit_sessions.db"


# Database configuration
def get_database_url() -> str:
    """
    Get the database URL from environment variables.

    Falls back to a local SQLite file when DATABASE_URL is not set.
    In TEST_MODE the database name 'digit_sessions' is replaced with
    'test_digit_sessions'.

    Returns:
        SQLAlchemy database URL
    """
    base_url = os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL
    if is_test_mode():
        return base_url.replace("digit_sessions", "test_digit_sessions")
    return base_url


def is_test_mode() -> bool:
    """Check if running in test mode."""
    return os.getenv("TEST_MODE", "false").lower() == "true"


@lru_cache(maxsize=None)
def _engine_for_url(db_url: str) -> Engine:
    url = make_url(db_url)
    if url.get_backend_name() == "sqlite":
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        return create_engine(db_url, echo=False)

    return create_engine(
        db_url,
        pool_size=5,           # Keep 5 connections open
        max_overflow=10,       # Allow up to 10 extra connections
        pool_pre_ping=True,    # Verify connections before use
        echo=False
    )


def get_engine() -> Engine:
    """
    Get the SQLAlchemy engine for the configured database.

    Engines are cached per URL, so changing DATABASE_URL switches databases.
    """
    return _engine_for_url(get_database_url())


def get_session() -> Session:
    """
    Get a SQLAlchemy session for database operations.

    Returns:
        SQLAlchemy Session instance
    """
    SessionLocal = sessionmaker(bind=get_engine(), expire_on_commit=False)
    return SessionLocal()


def init_db():
    """
    Initialize database schema if tables don't exist.

    Safe to call multiple times - only creates tables if they don't exist.
    """
    engine = get_engine()
    if 'session_records' not in inspect(engine).get_table_names():
        Base.metadata.create_all(engine)
        logger.info(f"Created session_records table ({engine.url.render_as_string(hide_password=True)})")


def reset_db():
    """
    DANGEROUS: Delete all stored sessions and recreate tables.

    Only use this for testing or when you want to start fresh.
    """
    engine = get_engine()
    Base.metadata.drop_all(engine)
    logger.warning("All session tables dropped")
    init_db()


# ---- Row conversion ----

def _as_utc(value: datetime) -> datetime:
    # SQLite returns naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_model(summary: SessionSummary) -> SessionRecordModel:
    return SessionRecordModel(
        record_id=summary.record_id,
        constant=summary.constant.slug,
        started_at=summary.started_at,
        duration_seconds=summary.duration_seconds,
        digits_recited=summary.digits_recited,
        correct=summary.correct,
        wrong=summary.wrong,
        pauses=summary.pauses,
        accuracy=summary.accuracy,
        auto_ended=summary.auto_ended,
        tokens=json.dumps([token_to_dict(t) for t in summary.tokens]),
    )


def _from_model(row: SessionRecordModel) -> SessionSummary:
    return SessionSummary(
        record_id=row.record_id,
        constant=ConstantKind.from_slug(row.constant),
        started_at=_as_utc(row.started_at),
        duration_seconds=row.duration_seconds,
        digits_recited=row.digits_recited,
        correct=row.correct,
        wrong=row.wrong,
        pauses=row.pauses,
        accuracy=row.accuracy,
        auto_ended=bool(row.auto_ended),
        tokens=tuple(token_from_dict(t) for t in json.loads(row.tokens)),
    )


# ---- Queries ----

def insert_summary(summary: SessionSummary):
    """
    Append one finished session.

    Args:
        summary: SessionSummary to store
    """
    session = get_session()
    try:
        session.add(_to_model(summary))
        session.commit()
    finally:
        session.close()


def batch_insert_summaries(summaries: list[SessionSummary]):
    """
    Append several sessions in one transaction, oldest first.

    Args:
        summaries: Summaries in the order they should be inserted
    """
    if not summaries:
        return

    session = get_session()
    try:
        for summary in summaries:
            session.add(_to_model(summary))
        session.commit()
    finally:
        session.close()


def fetch_summaries(constant: ConstantKind) -> list[SessionSummary]:
    """
    Get all stored sessions for a constant.

    Returns:
        List of SessionSummary values, newest first
    """
    session = get_session()
    try:
        rows = session.query(SessionRecordModel).filter(
            SessionRecordModel.constant == ConstantKind(constant).slug
        ).order_by(SessionRecordModel.seq.desc()).all()
        return [_from_model(row) for row in rows]
    finally:
        session.close()


def fetch_record_ids(constant: ConstantKind) -> list[str]:
    """Record ids for a constant, newest first."""
    session = get_session()
    try:
        rows = session.query(SessionRecordModel.record_id).filter(
            SessionRecordModel.constant == ConstantKind(constant).slug
        ).order_by(SessionRecordModel.seq.desc()).all()
        return [row.record_id for row in rows]
    finally:
        session.close()


def delete_summary(record_id: str) -> bool:
    """
    Delete one stored session.

    Returns:
        True if a row was deleted
    """
    session = get_session()
    try:
        deleted = session.query(SessionRecordModel).filter(
            SessionRecordModel.record_id == record_id
        ).delete()
        session.commit()
        return deleted > 0
    finally:
        session.close()


def delete_all(constant: ConstantKind) -> int:
    """
    Delete every stored session for a constant.

    Returns:
        Number of rows deleted
    """
    session = get_session()
    try:
        deleted = session.query(SessionRecordModel).filter(
            SessionRecordModel.constant == ConstantKind(constant).slug
        ).delete()
        session.commit()
        return deleted
    finally:
        session.close()
