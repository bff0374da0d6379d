from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from werkzeug.security import generate_password_hash

from .connection import DBConfig, DatabaseConnection

logger = logging.getLogger(__name__)

DEMO_CLASS_CODE = "DEM000001"


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_line_comments(sql: str) -> str:
    return re.sub(r"(?m)^\s*--.*$", "", sql)


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a schema/seed file into statements (handles ';' inside quotes)."""
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
            buf.append(ch)
            continue

        if ch == '"' and not in_single:
            in_double = not in_double
            buf.append(ch)
            continue

        if ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run_script(db: DatabaseConnection, path: str | Path) -> int:
    sql = Path(path).read_text(encoding="utf-8")
    sql = _strip_line_comments(_strip_create_db_and_use(sql))

    conn = db.connect()
    try:
        cur = conn.cursor()
        count = 0
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
        return count
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    config = DBConfig.from_mapping(db_config)
    conn = DatabaseConnection(config).connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    count = _run_script(DatabaseConnection(DBConfig.from_mapping(db_config)), schema_path)
    logger.info("Applied %s (%d statements)", Path(schema_path).name, count)


def ensure_demo_users(db_config: dict) -> None:
    """Create (or reset) a demo teacher, a demo student and one shared class."""

    conn = DatabaseConnection(DBConfig.from_mapping(db_config)).connect()
    try:
        cur = conn.cursor(dictionary=True)

        def upsert_user(*, username: str, password: str, role: str, full_name: str, email: str, branch: str,
                        prn: str | None = None, year: str | None = None) -> int:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT user_id FROM users WHERE username=%s", (username,))
            existing = cur.fetchone()
            if existing:
                cur.execute(
                    """
                    UPDATE users
                    SET password_hash=%s, role=%s, full_name=%s, email=%s, branch=%s, prn=%s, year=%s
                    WHERE username=%s
                    """,
                    (password_hash, role, full_name, email, branch, prn, year, username),
                )
                return int(existing["user_id"])
            cur.execute(
                """
                INSERT INTO users (username, password_hash, role, full_name, email, branch, prn, year)
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                """,
                (username, password_hash, role, full_name, email, branch, prn, year),
            )
            return int(cur.lastrowid)

        teacher_id = upsert_user(
            username="teacher", password="teacher123", role="teacher",
            full_name="Demo Teacher", email="teacher@example.com", branch="Computer Science",
        )
        student_id = upsert_user(
            username="student", password="student123", role="student",
            full_name="Demo Student", email="student@example.com", branch="Computer Science",
            prn="demo-0001", year="2",
        )

        cur.execute("SELECT class_id FROM classes WHERE class_code=%s", (DEMO_CLASS_CODE,))
        row = cur.fetchone()
        if row:
            class_id = int(row["class_id"])
        else:
            cur.execute(
                """
                INSERT INTO classes (name, description, class_code, password_hash, teacher_id)
                VALUES (%s, %s, %s, %s, %s)
                """,
                ("Demo Class", "Seeded demo class", DEMO_CLASS_CODE, generate_password_hash("join123"), teacher_id),
            )
            class_id = int(cur.lastrowid)

        cur.execute(
            "INSERT IGNORE INTO enrollments (student_id, class_id) VALUES (%s, %s)",
            (student_id, class_id),
        )

        conn.commit()
        logger.info("Demo users ready (teacher=%s, student=%s, class=%s)", teacher_id, student_id, DEMO_CLASS_CODE)
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
