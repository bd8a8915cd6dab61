"""Authentication and authorization.

Three layers, applied in this order on every tenant-scoped route:
1. Token codec (jwt.py): signed bearer credential with userId, companyId, isAdmin
2. Identity resolver (dependencies.py): credential -> live, active user identity
3. Policies (policies.py): same-company / admin / self-or-admin guards
"""
