"""
Service layer.

Every service is constructed with a :class:`~..core.db.SqlService` and
returns :class:`~..core.result.Result` values instead of raising.
"""
