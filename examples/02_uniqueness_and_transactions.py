"""Uniqueness errors and transaction scopes."""

from __future__ import annotations

import sqlite3
import sys
from pathlib import Path

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "simple_orm").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from simple_orm import ErrorKind, Executor, OrmError, SimpleOrmError, SQLiteDialect, UniquenessError

INSERT_USER = 'INSERT INTO "users" ("email", "age") VALUES (?, ?)'


def main() -> None:
    db = Executor(sqlite3.connect(":memory:"), SQLiteDialect())

    with db:
        db.exec('CREATE TABLE "users" ("id" INTEGER PRIMARY KEY, "email" TEXT UNIQUE, "age" INTEGER)')
        db.insert(INSERT_USER, ["alice@example.com", 25])

        # 1) Duplicate key: a distinct error kind, no message parsing needed.
        try:
            db.insert(INSERT_USER, ["alice@example.com", 40])
        except UniquenessError:
            print("alice@example.com is already registered")

        # 2) Any other failure carries the driver diagnostic.
        try:
            db.select('SELEC * FROM "users"')
        except OrmError as exc:
            print("Query failed:", exc.message)

        # 3) Branch on the closed error kind.
        try:
            db.insert(INSERT_USER, ["alice@example.com", 41])
        except SimpleOrmError as exc:
            match exc.kind:
                case ErrorKind.UNIQUE_VIOLATION:
                    print("kind:", exc.kind.value)
                case ErrorKind.GENERIC:
                    print("generic failure:", exc.message)

        # 4) Several writes in one transaction; an exception rolls all back.
        try:
            with db.transaction():
                db.insert(INSERT_USER, ["bob@example.com", 30])
                db.insert(INSERT_USER, ["carol@example.com", 35])
                raise RuntimeError("abort")
        except RuntimeError:
            pass
        print("Users after rollback:", db.select('SELECT COUNT(*) AS "n" FROM "users"')[0]["n"])


if __name__ == "__main__":
    main()
