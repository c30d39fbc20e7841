import logging
import sqlite3


class ConfigStore:
    """String key/value configuration shared with the UI and other pollers."""

    def __init__(self, sqlite3_database: str, logger: logging.Logger | None = None) -> None:
        """
        Open (or create) the configuration store.

        Args:
            sqlite3_database (str): Path to SQLite database file, or ":memory:".
            logger (logging.Logger, optional): Logger instance.
        """
        self.logger = logger or logging.getLogger(__name__)
        self.sqlite_path = sqlite3_database
        self.logger.info("Connecting to config store %s", self.sqlite_path)
        # writes happen on the scheduler thread, the store is opened on the host thread
        self.conn: sqlite3.Connection = sqlite3.connect(sqlite3_database, check_same_thread=False)
        self.create_table()

    def create_table(self) -> None:
        """
        Create the config table if it does not exist.
        """
        sql = """
        CREATE TABLE IF NOT EXISTS "config" (
            "key"   TEXT PRIMARY KEY,
            "value" TEXT NOT NULL,
            "updated_at"    datetime NOT NULL DEFAULT (datetime('now', 'localtime'))
        );
        """
        self.conn.execute(sql)
        self.conn.commit()

    def get(self, key: str) -> str | None:
        """
        Return the stored value for key, or None when the key is absent.
        """
        cur = self.conn.execute('SELECT "value" FROM "config" WHERE "key"=?', (key,))
        row = cur.fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        """
        Insert or replace the value for key.
        """
        sql = (
            'INSERT INTO "config" ("key", "value", "updated_at") '
            "VALUES (?, ?, datetime('now', 'localtime')) "
            'ON CONFLICT("key") DO UPDATE SET "value"=excluded."value", "updated_at"=excluded."updated_at"'
        )
        self.conn.execute(sql, (key, value))
        self.conn.commit()
        self.logger.debug("set %s", key)

    def close(self) -> None:
        """
        Close the database connection.
        """
        self.conn.close()
