"""
Employee demo against an in-memory SQLite database.

    python -m sqlbind.demo

Creates a table, inserts rows (re-executing one prepared multi-row INSERT with
new values), then selects with an IN list and reuses the SELECT with a new
bound value.
"""

import logging
import sys
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

from sqlbind.core.connect import connect
from sqlbind.engines.sql import SqlSession
from sqlbind.exceptions import SqlBindError
from sqlbind.models import DataSource, ProductTypeEnum

_log = logging.getLogger(__name__)

SOME_DATE = date(2018, 9, 12)


@dataclass(frozen=True)
class Employee:
    id: int
    name: str
    created: date


def _employee(row: Any) -> Employee:
    created = row[2]
    if isinstance(created, str):
        created = date.fromisoformat(created)
    return Employee(id=row[0], name=row[1], created=created)


def run(connection: Any) -> dict[str, list[Employee]]:
    """Run the scenario on *connection* and return the two SELECT results."""
    with SqlSession(connection) as builder:
        builder.sql(
            "CREATE TABLE employee",
            "( id INTEGER PRIMARY KEY",
            ", name VARCHAR(256) DEFAULT 'test'",
            ", code VARCHAR(1)",
            ", created DATE NOT NULL",
            ")",
        ).execute()

        builder.sql("""
            INSERT INTO employee
            ( id, code, created ) VALUES
            ( :id, :code, :created )
            """) \
            .bind("id", 1) \
            .bind("code", "T") \
            .bind("created", SOME_DATE.isoformat()) \
            .execute()

        builder.sql("""
            INSERT INTO employee
            (id,code,created) VALUES
            (:id1,:code,:created),
            (:id2,:code,:created)
            """) \
            .bind("id1", 2) \
            .bind("id2", 3) \
            .bind("code", "T") \
            .bind("created", (SOME_DATE + timedelta(days=1)).isoformat()) \
            .execute()
        builder.bind("id1", 11) \
            .bind("id2", 12) \
            .bind("code", "V") \
            .execute()

        employees = builder.sql("""
            SELECT t.id, t.name, t.created
            FROM employee t
            WHERE t.id < :id
              AND t.code IN (:code)
            ORDER BY t.id
            """) \
            .bind("id", 10) \
            .bind("code", "T", "V") \
            .query(_employee) \
            .to_list()
        _log.info("Preview: %s", builder.debug_render())

        employees2 = builder.bind("id", 100).query(_employee).to_list()

    return {"first": employees, "second": employees2}


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    conn = connect(DataSource(product_type=ProductTypeEnum.SQLITE, database=":memory:"))
    try:
        result = run(conn)
        conn.commit()
    except SqlBindError:
        _log.error("Demo failed", exc_info=True)
        return 1
    finally:
        conn.close()

    first, second = result["first"], result["second"]
    if len(first) != 3 or first[0] != Employee(1, "test", SOME_DATE) or len(second) != 5:
        _log.error("Unexpected demo result: %s", result)
        return 1
    for employee in second:
        print(employee)
    return 0


if __name__ == "__main__":
    sys.exit(main())
