"""
SQL catalogues, one module per table family.

Constant statements use named parameters (``:ProjectCode``).  Paginated
lists are described by a :class:`~..core.pagination.ListQuery` whose
filter and sort allow-lists are the only column names a caller can
reach.
"""
