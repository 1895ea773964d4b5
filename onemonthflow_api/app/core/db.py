"""
SQLite execution gateway and schema migrations.

``SqlService`` is the only object in the code base that talks to
``sqlite3``.  Every call acquires its own connection, executes a single
parameterized statement, commits, and closes the connection again,
whether or not the statement succeeded.  Multi-statement writes use
:meth:`SqlService.transaction`, which hands out a gateway bound to one
connection so the whole block commits or rolls back together.

Statements use named parameters (``:ProjectCode``) and values are
always bound; callers must never format values into SQL text.

``init_db`` stores applied migration versions in the ``migrations``
table and executes new migrations in order.
"""

import datetime as dt
import logging
import os
import sqlite3
from contextlib import contextmanager
from decimal import Decimal
from pathlib import Path
from typing import Any, Iterator, List, Mapping, Optional, Sequence, Union


logger = logging.getLogger(__name__)

Params = Optional[Union[Mapping[str, Any], Sequence[Any]]]


class SqlError(Exception):
    """Raised by the gateway for result-shape violations (``query_single``)."""


def get_database_path(database_url: str) -> str:
    """Resolve the configured connection string to a SQLite file path.

    A ``sqlite:///`` prefix is accepted and stripped.  Relative paths
    are resolved against the current working directory.
    """
    if database_url.startswith("sqlite:///"):
        database_url = database_url[len("sqlite:///"):]
    if os.path.isabs(database_url):
        return database_url
    return str(Path(database_url).resolve())


def _bind_value(value: Any) -> Any:
    # sqlite3's implicit date adapters are deprecated; store ISO text.
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    return value


def _bind(params: Params) -> Union[dict, tuple]:
    if params is None:
        return ()
    if isinstance(params, Mapping):
        return {key: _bind_value(value) for key, value in params.items()}
    return tuple(_bind_value(value) for value in params)


def _one_line(sql: str) -> str:
    return " ".join(sql.split())


class SqlService:
    """Thin gateway over ``sqlite3``.

    Parameters
    ----------
    database_url : str
        Path (or ``sqlite:///`` URL) of the database file.
    connection : Optional[sqlite3.Connection]
        When given, every call runs on this connection and nothing is
        committed or closed.  Only :meth:`transaction` passes one.
    """

    def __init__(self, database_url: str, connection: Optional[sqlite3.Connection] = None) -> None:
        self.database_url = database_url
        self.database_path = get_database_path(database_url)
        self._connection = connection

    @property
    def in_transaction(self) -> bool:
        return self._connection is not None

    def connect(self) -> sqlite3.Connection:
        """Open a new connection with rows addressable by column name."""
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def _acquire(self) -> Iterator[sqlite3.Connection]:
        if self._connection is not None:
            yield self._connection
            return
        conn = self.connect()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    @contextmanager
    def transaction(self) -> Iterator["SqlService"]:
        """Run several statements atomically.

        Yields a gateway bound to a single connection.  The block is
        committed when it exits normally and rolled back if it raises.
        Nested calls join the outer transaction.
        """
        if self._connection is not None:
            yield self
            return
        conn = self.connect()
        try:
            yield SqlService(self.database_url, connection=conn)
            conn.commit()
            logger.debug("Transaction committed")
        except BaseException:
            conn.rollback()
            logger.warning("Transaction rolled back")
            raise
        finally:
            conn.close()

    def _run(self, conn: sqlite3.Connection, sql: str, params: Params) -> sqlite3.Cursor:
        bound = _bind(params)
        logger.debug("Executing SQL: %s | Parameters: %s", _one_line(sql), bound)
        try:
            return conn.execute(sql, bound)
        except sqlite3.Error:
            logger.error("SQL failed: %s | Parameters: %s", _one_line(sql), bound, exc_info=True)
            raise

    def execute(self, sql: str, params: Params = None) -> int:
        """Execute a data-modifying statement and return the affected row count."""
        with self._acquire() as conn:
            affected = self._run(conn, sql, params).rowcount
        logger.debug("Rows affected: %s", affected)
        return affected

    def query(self, sql: str, params: Params = None) -> List[sqlite3.Row]:
        """Return every row produced by ``sql``."""
        with self._acquire() as conn:
            rows = self._run(conn, sql, params).fetchall()
        logger.debug("Query returned %s row(s)", len(rows))
        return rows

    def query_first_or_default(self, sql: str, params: Params = None) -> Optional[sqlite3.Row]:
        """Return the first row, or ``None`` when the query yields nothing."""
        with self._acquire() as conn:
            row = self._run(conn, sql, params).fetchone()
        logger.debug("Query returned %s", "a row" if row is not None else "no rows")
        return row

    def query_single(self, sql: str, params: Params = None) -> sqlite3.Row:
        """Return exactly one row; raise ``SqlError`` on zero or several."""
        with self._acquire() as conn:
            rows = self._run(conn, sql, params).fetchmany(2)
        if len(rows) != 1:
            message = "Query returned no rows" if not rows else "Query returned more than one row"
            logger.error("%s: %s", message, _one_line(sql))
            raise SqlError(message)
        return rows[0]

    def scalar(self, sql: str, params: Params = None) -> Any:
        """Return the first column of the single row produced by ``sql``."""
        return self.query_single(sql, params)[0]


MIGRATIONS: list[tuple[int, str]] = [
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS Tbl_Project (
            ProjectId TEXT PRIMARY KEY,
            ProjectCode TEXT NOT NULL UNIQUE,
            ProjectName TEXT NOT NULL,
            RepoUrl TEXT,
            StartDate TEXT,
            EndDate TEXT,
            ProjectDescription TEXT,
            Status TEXT NOT NULL DEFAULT 'Active'
        );

        CREATE TABLE IF NOT EXISTS Tbl_Team (
            TeamId TEXT PRIMARY KEY,
            TeamCode TEXT NOT NULL UNIQUE,
            TeamName TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS Tbl_User (
            UserId TEXT PRIMARY KEY,
            UserCode TEXT NOT NULL UNIQUE,
            UserName TEXT NOT NULL,
            GitHubAccountName TEXT,
            Nrc TEXT,
            MobileNo TEXT
        );

        CREATE TABLE IF NOT EXISTS Tbl_TechStack (
            TechStackId TEXT PRIMARY KEY,
            TechStackCode TEXT NOT NULL UNIQUE,
            TechStackShortCode TEXT,
            TechStackName TEXT NOT NULL
        );

        -- Link tables are keyed by business codes, not surrogate ids.
        CREATE TABLE IF NOT EXISTS Tbl_ProjectTeam (
            ProjectTeamId TEXT PRIMARY KEY,
            ProjectCode TEXT NOT NULL,
            TeamCode TEXT NOT NULL,
            ProjectTeamRating REAL,
            Duration INTEGER
        );

        CREATE TABLE IF NOT EXISTS Tbl_TeamUser (
            TeamUserId TEXT PRIMARY KEY,
            TeamCode TEXT NOT NULL,
            UserCode TEXT NOT NULL,
            UserRating REAL
        );

        CREATE TABLE IF NOT EXISTS Tbl_UserTechStack (
            UserTechStackId TEXT PRIMARY KEY,
            UserCode TEXT NOT NULL,
            TechStackCode TEXT NOT NULL,
            ProficiencyLevel TEXT
        );

        CREATE TABLE IF NOT EXISTS Tbl_ProjectTechStack (
            ProjectTechStackId TEXT PRIMARY KEY,
            ProjectCode TEXT NOT NULL,
            TechStackCode TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS Tbl_TeamTechStack (
            TeamTechStackId TEXT PRIMARY KEY,
            TeamCode TEXT NOT NULL,
            TechStackCode TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS Tbl_ProjectTeamActivity (
            ProjectTeamActivityId TEXT PRIMARY KEY,
            ProjectCode TEXT NOT NULL,
            TeamCode TEXT NOT NULL,
            UserCode TEXT,
            TechStackCode TEXT,
            ActivityDate TEXT NOT NULL,
            Tasks TEXT NOT NULL
        );

        CREATE INDEX IF NOT EXISTS idx_project_team_project ON Tbl_ProjectTeam(ProjectCode);
        CREATE INDEX IF NOT EXISTS idx_team_user_team ON Tbl_TeamUser(TeamCode);
        CREATE INDEX IF NOT EXISTS idx_user_tech_stack_user ON Tbl_UserTechStack(UserCode);
        CREATE INDEX IF NOT EXISTS idx_project_tech_stack_project ON Tbl_ProjectTechStack(ProjectCode);
        CREATE INDEX IF NOT EXISTS idx_activity_project ON Tbl_ProjectTeamActivity(ProjectCode);
        """,
    ),
    (
        2,
        """
        -- Tech stacks referenced by the GitHub language mapping.
        INSERT OR IGNORE INTO Tbl_TechStack (TechStackId, TechStackCode, TechStackShortCode, TechStackName) VALUES
            (lower(hex(randomblob(16))), 'TS001', 'CS', 'C#'),
            (lower(hex(randomblob(16))), 'TS002', 'JS', 'JavaScript / TypeScript'),
            (lower(hex(randomblob(16))), 'TS003', 'PY', 'Python'),
            (lower(hex(randomblob(16))), 'TS004', 'JAVA', 'Java'),
            (lower(hex(randomblob(16))), 'TS005', 'REACT', 'React'),
            (lower(hex(randomblob(16))), 'TS006', 'NG', 'Angular'),
            (lower(hex(randomblob(16))), 'TS007', 'SQL', 'SQL'),
            (lower(hex(randomblob(16))), 'TS008', 'NODE', 'Node.js'),
            (lower(hex(randomblob(16))), 'TS009', 'PHP', 'PHP'),
            (lower(hex(randomblob(16))), 'TS010', 'DART', 'Dart'),
            (lower(hex(randomblob(16))), 'TS011', 'GO', 'Go'),
            (lower(hex(randomblob(16))), 'TS012', 'VUE', 'Vue'),
            (lower(hex(randomblob(16))), 'TS013', 'SVELTE', 'Svelte');
        """,
    ),
]


def init_db(sql: SqlService) -> int:
    """Create the database if needed and apply pending migrations.

    Returns the schema version after migrating.  To change the schema,
    append a migration with the next version number; never edit an
    applied one.
    """
    conn = sql.connect()
    try:
        conn.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY, "
            "applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP)"
        )
        row = conn.execute("SELECT MAX(version) FROM migrations").fetchone()
        current = row[0] or 0
        for version, script in MIGRATIONS:
            if version <= current:
                continue
            logger.info("Applying migration %s to %s", version, sql.database_path)
            conn.executescript(script)
            conn.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
            conn.commit()
            current = version
        return current
    finally:
        conn.close()
