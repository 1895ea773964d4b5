"""
Application package.

Each domain (projects, teams, users, tech stacks and the link tables
between them) has a query catalogue in ``queries``, request/response
models in ``schemas``, a service in ``services`` and a router in
``api/v1/endpoints``.  The FastAPI application itself is assembled in
``main``; import it from there (``onemonthflow_api.app.main:app``).
"""
