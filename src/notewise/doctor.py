from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone

from notewise.config import Settings
from notewise.enhance.base import EnhanceType
from notewise.enhance.pipeline import DEFAULT_ENHANCERS


@dataclass(slots=True)
class DoctorCheck:
    name: str
    status: str
    detail: str


def healthcheck() -> dict[str, str]:
    return {"status": "ok", "timestamp": datetime.now(tz=timezone.utc).isoformat()}


def _check_data_dir(settings: Settings) -> DoctorCheck:
    try:
        settings.ensure_dirs()
    except OSError as exc:  # pragma: no cover - environment dependent
        return DoctorCheck("Data directory", "fail", f"Cannot create {settings.data_dir}: {exc}")
    return DoctorCheck("Data directory", "ok", str(settings.data_dir))


def _check_db(settings: Settings) -> DoctorCheck:
    try:
        with sqlite3.connect(settings.db_path) as conn:
            conn.execute("SELECT 1")
        return DoctorCheck("Database", "ok", f"SQLite writable at {settings.db_path}")
    except sqlite3.Error as exc:  # pragma: no cover - environment dependent
        return DoctorCheck("Database", "fail", f"Cannot open SQLite at {settings.db_path}: {exc}")


def _check_enhancers() -> DoctorCheck:
    missing = [mode.value for mode in EnhanceType if mode not in DEFAULT_ENHANCERS]
    if missing:
        return DoctorCheck("Enhancers", "fail", f"No enhancer for: {', '.join(missing)}")
    return DoctorCheck("Enhancers", "ok", ", ".join(EnhanceType.values()))


def _check_default_mode(settings: Settings) -> DoctorCheck:
    if settings.default_enhance_type in EnhanceType.values():
        return DoctorCheck("Default mode", "ok", settings.default_enhance_type)
    return DoctorCheck(
        "Default mode",
        "warn",
        f"NOTEWISE_DEFAULT_ENHANCE_TYPE='{settings.default_enhance_type}' is not a known mode; "
        "pass --type explicitly.",
    )


def run_doctor(settings: Settings) -> list[DoctorCheck]:
    checks = [_check_data_dir(settings)]
    if checks[0].status == "ok":
        checks.append(_check_db(settings))
    checks.append(_check_enhancers())
    checks.append(_check_default_mode(settings))
    return checks
