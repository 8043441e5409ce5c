"""
HTTP routers, grouped by audience.

- auth: /api/auth
- content: /api/ingredientes, /api/mixes, /api/fichas, /api/insumos
- admin: /api/users, /api/admin/audit-log
- public: /api/health
"""
