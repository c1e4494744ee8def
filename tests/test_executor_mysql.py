from __future__ import annotations

import importlib
import unittest
from typing import Any
from unittest import mock

from simple_orm import (
    ConnectionProvider,
    Credentials,
    MySQLDialect,
    OrmError,
    PoolConnector,
    UniquenessError,
    connect,
)
from simple_orm.ports.db_api.mysql import open_connection
from tests.fake_driver import FakeConnection


def _load_pymysql() -> Any:
    try:
        return importlib.import_module("pymysql")
    except ImportError:
        return None


PYMYSQL = _load_pymysql()


class _FakePyMySQL:
    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []

    def connect(self, **kwargs: Any) -> FakeConnection:
        self.calls.append(kwargs)
        return FakeConnection(lastrowid=5, rowcount=1)


class MySQLFactoryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.driver = _FakePyMySQL()
        patcher = mock.patch(
            "simple_orm.ports.db_api.mysql._load_pymysql",
            return_value=self.driver,
        )
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_connect_is_lazy_and_shares_one_connection(self) -> None:
        db = connect("db.internal", "app", "pw", "shop")

        self.assertIsInstance(db.source, ConnectionProvider)
        self.assertIsInstance(db.dialect, MySQLDialect)
        self.assertEqual(self.driver.calls, [])

        self.assertEqual(db.insert("INSERT INTO t(v) VALUES(%s)", [1]), 5)
        self.assertEqual(db.exec("UPDATE t SET v = %s", [2]), 1)
        self.assertEqual(len(self.driver.calls), 1)
        self.assertEqual(
            self.driver.calls[0],
            {
                "host": "db.internal",
                "port": 3306,
                "user": "app",
                "password": "pw",
                "database": "shop",
                "charset": "utf8mb4",
                "autocommit": False,
            },
        )

    def test_connect_with_pool(self) -> None:
        db = connect("db.internal", "app", "pw", "shop", pool_size=2, connect_timeout=3)
        self.assertIsInstance(db.source, PoolConnector)
        db.exec("DELETE FROM t")
        self.assertEqual(self.driver.calls[0]["connect_timeout"], 3)

    def test_open_connection_driver_kwargs_override_defaults(self) -> None:
        open_connection(Credentials("h", "u", "p", "d", 3307), autocommit=True)
        self.assertTrue(self.driver.calls[0]["autocommit"])
        self.assertEqual(self.driver.calls[0]["port"], 3307)


@unittest.skipUnless(PYMYSQL is not None, "pymysql is not installed")
class ExecutorMySQLIntegrationTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.credentials = Credentials.from_env()
        try:
            bootstrap = PYMYSQL.connect(
                host=cls.credentials.host,
                port=cls.credentials.port,
                user=cls.credentials.username,
                password=cls.credentials.password,
                charset="utf8mb4",
            )
            cur = bootstrap.cursor()
            cur.execute(f"CREATE DATABASE IF NOT EXISTS `{cls.credentials.database}`;")
            bootstrap.commit()
            cur.close()
            bootstrap.close()
        except Exception as exc:
            raise unittest.SkipTest(
                f"MySQL is not reachable at {cls.credentials.host}:{cls.credentials.port} "
                f"with configured credentials: {exc}"
            ) from exc

        creds = cls.credentials
        cls.db = connect(creds.host, creds.username, creds.password, creds.database, port=creds.port)

    @classmethod
    def tearDownClass(cls) -> None:
        db = getattr(cls, "db", None)
        if db is not None:
            db.close()

    def setUp(self) -> None:
        self.db.exec("DROP TABLE IF EXISTS `users`;")
        self.db.exec(
            "CREATE TABLE `users` ("
            "`id` INT AUTO_INCREMENT PRIMARY KEY, "
            "`email` VARCHAR(191) NOT NULL UNIQUE, "
            "`age` INT)"
        )

    def test_end_to_end_users_scenario(self) -> None:
        user_id = self.db.insert("INSERT INTO users(email, age) VALUES(%s, %s)", ["a@x.com", 30])
        self.assertGreater(user_id, 0)

        with self.assertRaises(UniquenessError):
            self.db.insert("INSERT INTO users(email, age) VALUES(%s, %s)", ["a@x.com", 30])

        self.db.insert("INSERT INTO users(email, age) VALUES(%s, %s)", ["kid@x.com", 9])
        rows = self.db.select("SELECT * FROM users WHERE age > %s", [18])

        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]["id"], user_id)
        self.assertEqual(rows[0][1], rows[0]["email"])

    def test_exec_returns_affected_rows(self) -> None:
        for email, age in [("a@x.com", 20), ("b@x.com", 30), ("c@x.com", 40)]:
            self.db.insert("INSERT INTO users(email, age) VALUES(%s, %s)", [email, age])
        self.assertEqual(self.db.exec("UPDATE users SET age = age + 1 WHERE age > %s", [25]), 2)

    def test_syntax_error_has_message(self) -> None:
        with self.assertRaises(OrmError) as ctx:
            self.db.exec("UPDAT users SET age = 1")
        self.assertTrue(ctx.exception.message)

    def test_duplicate_key_code_is_1062(self) -> None:
        self.assertEqual(MySQLDialect().unique_violation_codes, frozenset({1062}))
        err = PYMYSQL.err.IntegrityError(1062, "Duplicate entry")
        self.assertTrue(MySQLDialect().is_unique_violation(err))


if __name__ == "__main__":
    unittest.main()
