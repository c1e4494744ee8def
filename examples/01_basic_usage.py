"""Basic insert/exec/select example on an in-memory SQLite database."""

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

from simple_orm import Executor, SQLiteDialect


def main() -> None:
    # 1) Wrap a DB-API connection; the executor owns it from here on.
    db = Executor(sqlite3.connect(":memory:"), SQLiteDialect())

    with db:
        # 2) Create a table. DDL reports zero affected rows.
        db.exec(
            'CREATE TABLE "users" ('
            '"id" INTEGER PRIMARY KEY AUTOINCREMENT, '
            '"email" TEXT NOT NULL UNIQUE, '
            '"age" INTEGER)'
        )

        # 3) Insert rows; parameter types are inferred from the values.
        alice_id = db.insert('INSERT INTO "users" ("email", "age") VALUES (?, ?)', ["alice@example.com", 25])
        bob_id = db.insert('INSERT INTO "users" ("email", "age") VALUES (?, ?)', ["bob@example.com", 30])
        print("Inserted ids:", alice_id, bob_id)

        # 4) Update and report affected rows.
        updated = db.exec('UPDATE "users" SET "age" = "age" + 1 WHERE "age" > ?', [26])
        print("Updated row count:", updated)

        # 5) Select; rows are addressable by column name and by index.
        for row in db.select('SELECT "id", "email", "age" FROM "users" ORDER BY "id"'):
            print(row["email"], "is", row[2], "->", row.as_dict())


if __name__ == "__main__":
    main()
