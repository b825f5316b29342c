"""
Service layer.

Each service encapsulates the SQL for one domain.  Endpoints call
services for reads and writes and keep the authorization decisions
to themselves.
"""
