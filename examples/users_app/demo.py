"""
Helpers for running the users example end-to-end on SQLite.
"""

from __future__ import annotations

from typing import Any, Dict, List

from dataaccess import Builder, DataAccess

from .schema import CREATE_STATEMENTS, TABLES_DEFINITION


def bootstrap(dsn: str = "sqlite:///:memory:") -> DataAccess:
    """
    Build a data-access facade with column stripping enabled and create the schema.
    """

    builder = (
        Builder()
        .set_dsn(dsn)
        .set_tables_definition(TABLES_DEFINITION)
        .set_strip_missing_columns(True)
    )
    dal = builder.build()
    for statement in CREATE_STATEMENTS:
        dal.exec(statement)
    return dal


def seed_sample_data(dal: DataAccess) -> Dict[str, List[int]]:
    """
    Insert two users and three posts inside one transaction.
    """

    with dal.transaction():
        user_ids = [
            # "nickname" is not a users column and is dropped before the insert.
            dal.create("users", {"name": "Alice", "email": "alice@example.com", "nickname": "al"}),
            dal.create("users", {"name": "Brian", "email": "brian@example.com"}),
        ]
        post_ids = [
            dal.create("posts", {"user_id": user_ids[0], "title": "Hello", "published": 1}),
            dal.create("posts", {"user_id": user_ids[0], "title": "Draft", "published": 0}),
            dal.create("posts", {"user_id": user_ids[1], "title": "Notes", "published": 1}),
        ]
    return {"users": user_ids, "posts": post_ids}


def fetch_published_feed(dal: DataAccess, limit: int = 10) -> List[Dict[str, Any]]:
    feed = []
    for post in dal.find_all("posts", {"published": 1}, order_by="id DESC", limit=limit):
        author = dal.find_column("users", {"id": post["user_id"]}, "name")
        feed.append({"title": post["title"], "author": author, "published": bool(post["published"])})
    return feed


def count_posts_per_user(dal: DataAccess) -> Dict[int, int]:
    rows = dal.query(
        "SELECT user_id, COUNT(*) AS total FROM posts GROUP BY user_id ORDER BY user_id"
    )
    return {row["user_id"]: row["total"] for row in rows}


def run_demo() -> List[Dict[str, Any]]:
    with bootstrap() as dal:
        seed_sample_data(dal)
        return fetch_published_feed(dal)


if __name__ == "__main__":  # pragma: no cover
    for entry in run_demo():
        print(f"{entry['title']} by {entry['author']}")
