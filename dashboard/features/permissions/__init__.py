"""
Permission feature module.

Implements Role-Based Access Control (RBAC): a fixed permission catalog, the
role table, pure decision functions, their binding to the current actor and
the dependencies that gate routes.
"""
