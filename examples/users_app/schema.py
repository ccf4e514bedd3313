"""
Table definitions for the users example.
"""

TABLES_DEFINITION = {
    "users": ("id", "name", "email"),
    "posts": ("id", "user_id", "title", "published"),
}

CREATE_STATEMENTS = (
    "CREATE TABLE IF NOT EXISTS users ("
    "id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT NOT NULL, email TEXT NOT NULL UNIQUE)",
    "CREATE TABLE IF NOT EXISTS posts ("
    "id INTEGER PRIMARY KEY AUTOINCREMENT, user_id INTEGER NOT NULL REFERENCES users (id), "
    "title TEXT NOT NULL, published INTEGER NOT NULL DEFAULT 0)",
)
