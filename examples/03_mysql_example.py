"""MySQL example (requires pymysql and a running server)."""

from __future__ import annotations

import sys
from pathlib import Path

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "simple_orm").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from simple_orm import Credentials, UniquenessError, configure_logging, connect


def main() -> None:
    configure_logging("DEBUG")
    creds = Credentials.from_env()
    db = connect(creds.host, creds.username, creds.password, creds.database, port=creds.port)

    with db:
        db.exec("DROP TABLE IF EXISTS `users`")
        db.exec(
            "CREATE TABLE `users` ("
            "`id` INT AUTO_INCREMENT PRIMARY KEY, "
            "`email` VARCHAR(191) NOT NULL UNIQUE, "
            "`age` INT)"
        )

        user_id = db.insert("INSERT INTO users(email, age) VALUES(%s, %s)", ["a@x.com", 30])
        print("Inserted id:", user_id)

        try:
            db.insert("INSERT INTO users(email, age) VALUES(%s, %s)", ["a@x.com", 30])
        except UniquenessError:
            print("Duplicate email rejected")

        print(db.select("SELECT * FROM users WHERE age > %s", [18]))


if __name__ == "__main__":
    main()
