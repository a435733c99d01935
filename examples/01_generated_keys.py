"""
Example 01: Generated Keys

This example shows the three ways to read the keys an INSERT generates:
first(), list() and iterator().
"""

import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path

from row_keys import ConnectionConfig, DictMapper, Engine, ModelRowMapper, SQLRegistry


@dataclass
class CreatedUser:
    id: int
    name: str


def main():
    logging.basicConfig(level=logging.DEBUG)

    work_dir = Path(tempfile.mkdtemp())
    sql_dir = work_dir / "sql"
    user_dir = sql_dir / "user"
    user_dir.mkdir(parents=True)

    # Create SQL query files
    (user_dir / "create_table.sql").write_text(
        "CREATE TABLE users (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT NOT NULL)"
    )
    (user_dir / "insert.sql").write_text("INSERT INTO users (name) VALUES (:name)")
    (user_dir / "insert_returning.sql").write_text(
        "INSERT INTO users (name) VALUES (:name) RETURNING id, name"
    )
    (user_dir / "insert_batch.sql").write_text(
        "INSERT INTO users (name) VALUES ('Carol'), ('Dave'), ('Erin') RETURNING id, name"
    )

    # Configure engine
    config = ConnectionConfig(driver="sqlite", database=str(work_dir / "users.db"))
    engine = Engine.from_config(config, SQLRegistry(sql_dir))
    engine.execute("user.create_table")

    print("=== Generated Keys ===\n")

    # first(): a single key; the statement is released right away
    user_id = engine.execute_returning_keys("user.insert", {"name": "Alice"}).first()
    print(f"first() via lastrowid: {user_id}")

    # first() with a model mapper over RETURNING columns
    user = engine.execute_returning_keys(
        "user.insert_returning", {"name": "Bob"}, mapper=ModelRowMapper(CreatedUser)
    ).first()
    print(f"first() as model: {user}\n")

    # list(): every key, or at most max_rows of them
    rows = engine.execute_returning_keys("user.insert_batch", mapper=DictMapper()).list()
    print(f"list() result ({len(rows)} rows):")
    for row in rows:
        print(f"  - {row['id']}: {row['name']}")
    print()

    # iterator(): lazy, and the caller decides when to release
    with engine.execute_returning_keys("user.insert_batch").iterator() as keys:
        for key in keys:
            print(f"iterator() key: {key}")

    engine.close()


if __name__ == "__main__":
    main()
