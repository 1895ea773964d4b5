import datetime as dt

import pytest

from onemonthflow_api.app.core.db import SqlError, SqlService, get_database_path, init_db


def test_init_db_is_idempotent_and_seeds_tech_stacks(sql, count_rows):
    assert init_db(sql) == 2
    assert init_db(sql) == 2
    assert count_rows("Tbl_TechStack") == 13
    row = sql.query_single("SELECT TechStackName FROM Tbl_TechStack WHERE TechStackCode = :Code", {"Code": "TS003"})
    assert row["TechStackName"] == "Python"


def test_get_database_path(tmp_path):
    absolute = str(tmp_path / "x.db")
    assert get_database_path(f"sqlite:///{absolute}") == absolute
    assert get_database_path("relative.db").endswith("relative.db")


def test_execute_returns_row_count(sql):
    sql.execute("INSERT INTO Tbl_Team (TeamId, TeamCode, TeamName) VALUES ('1', 'T1', 'One')")
    sql.execute("INSERT INTO Tbl_Team (TeamId, TeamCode, TeamName) VALUES ('2', 'T2', 'Two')")
    assert sql.execute("UPDATE Tbl_Team SET TeamName = :Name", {"Name": "Same"}) == 2
    assert sql.execute("DELETE FROM Tbl_Team WHERE TeamCode = :Code", {"Code": "nope"}) == 0


def test_query_helpers(sql):
    assert sql.query_first_or_default("SELECT * FROM Tbl_Team") is None
    with pytest.raises(SqlError):
        sql.query_single("SELECT * FROM Tbl_Team")
    with pytest.raises(SqlError):
        sql.query_single("SELECT * FROM Tbl_TechStack")
    assert sql.scalar("SELECT COUNT(*) FROM Tbl_TechStack") == 13


def test_dates_are_stored_as_iso_text(sql):
    sql.execute(
        "INSERT INTO Tbl_Project (ProjectId, ProjectCode, ProjectName, StartDate) VALUES (:Id, :Code, :Name, :Start)",
        {"Id": "p", "Code": "P", "Name": "Project", "Start": dt.date(2024, 5, 1)},
    )
    assert sql.scalar("SELECT StartDate FROM Tbl_Project") == "2024-05-01"


def test_transaction_rolls_back_every_statement(sql, count_rows):
    with pytest.raises(RuntimeError):
        with sql.transaction() as tx:
            tx.execute("INSERT INTO Tbl_Team (TeamId, TeamCode, TeamName) VALUES ('1', 'T1', 'One')")
            tx.execute("INSERT INTO Tbl_Team (TeamId, TeamCode, TeamName) VALUES ('2', 'T2', 'Two')")
            raise RuntimeError("abort")
    assert count_rows("Tbl_Team") == 0


def test_transaction_commits_and_nests(sql, count_rows):
    with sql.transaction() as tx:
        assert tx.in_transaction
        tx.execute("INSERT INTO Tbl_Team (TeamId, TeamCode, TeamName) VALUES ('1', 'T1', 'One')")
        with tx.transaction() as inner:
            assert inner is tx
            inner.execute("INSERT INTO Tbl_Team (TeamId, TeamCode, TeamName) VALUES ('2', 'T2', 'Two')")
    assert not sql.in_transaction
    assert count_rows("Tbl_Team") == 2


def test_failed_statement_raises(tmp_path):
    service = SqlService(str(tmp_path / "empty.db"))
    with pytest.raises(Exception):
        service.query("SELECT * FROM Tbl_Missing")
