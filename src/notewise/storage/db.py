from __future__ import annotations

import json
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from notewise.errors import MeetingNotFoundError
from notewise.schemas import ARRAY_FIELDS, CreateMeetingInput, UpdateMeetingInput
from notewise.storage.models import MeetingRecord


def _dump_list(items: list[str]) -> str:
    return json.dumps(list(items), ensure_ascii=False)


def _load_list(raw: str | None) -> list[str]:
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        return []
    if not isinstance(data, list):
        return []
    return [str(item) for item in data]


def _to_column(name: str, value: Any) -> Any:
    if name in ARRAY_FIELDS:
        return _dump_list(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return value


class NotesDB:
    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def _session(self):
        conn = self._connect()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def initialize(self) -> None:
        with self._session() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS meetings (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    date TEXT NOT NULL,
                    attendees TEXT NOT NULL DEFAULT '[]',
                    general_notes TEXT,
                    discussion_points TEXT NOT NULL DEFAULT '[]',
                    action_items TEXT NOT NULL DEFAULT '[]',
                    summary TEXT,
                    transcribed_text TEXT,
                    ai_enhanced_notes TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
                """
            )

    @staticmethod
    def _now() -> datetime:
        return datetime.now(tz=timezone.utc)

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> MeetingRecord:
        return MeetingRecord(
            id=int(row["id"]),
            title=str(row["title"]),
            date=datetime.fromisoformat(row["date"]),
            attendees=_load_list(row["attendees"]),
            general_notes=row["general_notes"],
            discussion_points=_load_list(row["discussion_points"]),
            action_items=_load_list(row["action_items"]),
            summary=row["summary"],
            transcribed_text=row["transcribed_text"],
            ai_enhanced_notes=row["ai_enhanced_notes"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

    def create_meeting(self, data: CreateMeetingInput) -> MeetingRecord:
        now = self._now().isoformat()
        with self._session() as conn:
            cursor = conn.execute(
                """
                INSERT INTO meetings(
                    title, date, attendees, general_notes, discussion_points, action_items,
                    summary, transcribed_text, ai_enhanced_notes, created_at, updated_at
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    data.title,
                    data.date.isoformat(),
                    _dump_list(data.attendees),
                    data.general_notes,
                    _dump_list(data.discussion_points),
                    _dump_list(data.action_items),
                    data.summary,
                    data.transcribed_text,
                    data.ai_enhanced_notes,
                    now,
                    now,
                ),
            )
            row = conn.execute("SELECT * FROM meetings WHERE id = ?", (cursor.lastrowid,)).fetchone()
        return self._row_to_record(row)

    def list_meetings(self) -> list[MeetingRecord]:
        with self._session() as conn:
            rows = conn.execute("SELECT * FROM meetings ORDER BY id ASC").fetchall()
        return [self._row_to_record(row) for row in rows]

    def get_meeting(self, meeting_id: int) -> MeetingRecord | None:
        with self._session() as conn:
            row = conn.execute("SELECT * FROM meetings WHERE id = ?", (meeting_id,)).fetchone()
        if row is None:
            return None
        return self._row_to_record(row)

    def update_meeting(self, data: UpdateMeetingInput) -> MeetingRecord:
        changes = {name: _to_column(name, value) for name, value in data.changes().items()}
        changes["updated_at"] = self._now().isoformat()

        # Column names come from the input model's declared fields, never from user text.
        assignments = ", ".join(f"{name} = ?" for name in changes)
        with self._session() as conn:
            cursor = conn.execute(
                f"UPDATE meetings SET {assignments} WHERE id = ?",
                (*changes.values(), data.id),
            )
            if cursor.rowcount == 0:
                raise MeetingNotFoundError(data.id)
            row = conn.execute("SELECT * FROM meetings WHERE id = ?", (data.id,)).fetchone()
        return self._row_to_record(row)

    def delete_meeting(self, meeting_id: int) -> bool:
        with self._session() as conn:
            cursor = conn.execute("DELETE FROM meetings WHERE id = ?", (meeting_id,))
            return cursor.rowcount > 0
