"""
Shared module for common utilities used by the REST API.

STRUCTURE:
- shared.security: Authentication and password hashing
  - auth.py: JWT signing/verification, current_user_context, account tokens
  - password.py: Bcrypt hashing

- shared.infrastructure: Database and request plumbing
  - db.py: SQLAlchemy sessions, safe_commit()
  - correlation.py: X-Request-ID middleware and logging filter
  - email.py: EmailSender interface and logging implementation

- shared.config: Configuration
  - settings.py: Environment config (pydantic-settings)
  - logging.py: Structured logging
  - constants.py: Collections, audit actions, limits

- shared.utils: Utilities
  - exceptions.py: HTTP exceptions with auto-logging
  - validators.py: Search sanitizing, numeric text parsing
  - schemas.py: Shared Pydantic schemas

IMPORT EXAMPLES:
    from shared.security.auth import verify_jwt, current_user_context
    from shared.infrastructure.db import get_db, safe_commit
    from shared.config.settings import settings
    from shared.utils.exceptions import NotFoundError, DuplicateNameError
"""
