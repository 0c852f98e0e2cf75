"""
Session Store - durable per-constant history of finished sessions.

The lifecycle controller only appends. Listing, deleting and clearing are
called by the UI directly. Writes are serialized by a lock; reads are not.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Union

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from core.digits import database
from core.digits.constants import ConstantKind
from core.digits.errors import StoreUnavailableError
from core.digits.schemas import SessionHistoryFile, SessionSummaryRecord
from core.digits.summary import SessionSummary


class SessionStore:
    """
    append/list_all/delete_at/clear_all over the configured database.
    """

    def __init__(self, initialize: bool = True):
        """
        Args:
            initialize: Create the schema on construction if it is missing
        """
        self._write_lock = threading.Lock()
        if initialize:
            try:
                database.init_db()
            except SQLAlchemyError as exc:
                raise StoreUnavailableError(f"Could not initialize session store: {exc}") from exc

    def append(self, summary: SessionSummary) -> None:
        """
        Insert a summary as the newest entry of its constant's history.

        Raises:
            StoreUnavailableError: If the database write fails
        """
        with self._write_lock:
            try:
                database.insert_summary(summary)
            except SQLAlchemyError as exc:
                raise StoreUnavailableError(f"Could not save session: {exc}") from exc
        logger.debug(f"Stored {summary.constant.slug} session {summary.record_id}")

    def list_all(self, constant: ConstantKind) -> list[SessionSummary]:
        """All summaries for a constant, newest first."""
        try:
            return database.fetch_summaries(constant)
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"Could not load sessions: {exc}") from exc

    def delete_at(self, constant: ConstantKind, index: int) -> SessionSummary:
        """
        Delete the summary at a newest-first index.

        Returns:
            The deleted summary

        Raises:
            IndexError: If index is outside the current list
        """
        with self._write_lock:
            summaries = self.list_all(constant)
            if index < 0 or index >= len(summaries):
                raise IndexError(f"No {ConstantKind(constant).slug} session at index {index}")
            target = summaries[index]
            try:
                database.delete_summary(target.record_id)
            except SQLAlchemyError as exc:
                raise StoreUnavailableError(f"Could not delete session: {exc}") from exc
        logger.info(f"Deleted {target.constant.slug} session {target.record_id}")
        return target

    def delete(self, record_id: str) -> bool:
        """
        Delete one summary by its record id.

        Returns:
            True if a summary was deleted
        """
        with self._write_lock:
            try:
                deleted = database.delete_summary(record_id)
            except SQLAlchemyError as exc:
                raise StoreUnavailableError(f"Could not delete session: {exc}") from exc
        if deleted:
            logger.info(f"Deleted session {record_id}")
        return deleted

    def clear_all(self, constant: ConstantKind) -> int:
        """
        Delete every summary for a constant.

        Returns:
            Number of deleted summaries
        """
        with self._write_lock:
            try:
                deleted = database.delete_all(constant)
            except SQLAlchemyError as exc:
                raise StoreUnavailableError(f"Could not clear sessions: {exc}") from exc
        logger.info(f"Cleared {deleted} {ConstantKind(constant).slug} sessions")
        return deleted

    # ---- JSON export / import ----

    def export_history(self, constant: ConstantKind, directory: Union[str, Path]) -> Path:
        """
        Write a constant's history to `<directory>/<slug>_sessions.json`.

        Returns:
            Path of the written file
        """
        constant = ConstantKind(constant)
        payload = SessionHistoryFile(
            constant=constant.slug,
            sessions=[SessionSummaryRecord.from_summary(s) for s in self.list_all(constant)],
        )
        path = Path(directory) / constant.file_name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(payload.model_dump_json(indent=2), encoding="utf-8")
        logger.info(f"Exported {len(payload.sessions)} {constant.slug} sessions to {path}")
        return path

    def import_history(self, constant: ConstantKind, path: Union[str, Path]) -> int:
        """
        Append sessions from an export file that are not already stored.

        The file lists sessions newest first; they are inserted oldest first so
        the stored order matches the file.

        Returns:
            Number of imported sessions

        Raises:
            ValueError: If the file belongs to another constant or is malformed
        """
        constant = ConstantKind(constant)
        history = SessionHistoryFile.model_validate_json(Path(path).read_text(encoding="utf-8"))
        if ConstantKind.from_slug(history.constant) != constant:
            raise ValueError(f"{path} holds {history.constant} sessions, not {constant.slug}")
        strays = [r.record_id for r in history.sessions if ConstantKind.from_slug(r.constant) != constant]
        if strays:
            raise ValueError(f"{path} has {len(strays)} sessions for another constant: {strays[0]}")

        with self._write_lock:
            try:
                existing = set(database.fetch_record_ids(constant))
                fresh = [
                    record.to_summary()
                    for record in reversed(history.sessions)
                    if record.record_id not in existing
                ]
                database.batch_insert_summaries(fresh)
            except SQLAlchemyError as exc:
                raise StoreUnavailableError(f"Could not import sessions: {exc}") from exc

        logger.info(f"Imported {len(fresh)} {constant.slug} sessions from {path}")
        return len(fresh)
