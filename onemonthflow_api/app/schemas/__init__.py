"""
Pydantic schema definitions for API payloads.

Each domain defines its own request and read models.  Read models are
built from ``sqlite3.Row`` objects by the services, so field names are
snake_case even though the table columns are PascalCase.
"""
