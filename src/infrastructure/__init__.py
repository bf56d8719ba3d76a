"""Infrastructure layer - Adapters implementing domain protocols (ports).

Structure:
- persistence/: SQLAlchemy models, database manager and repositories
- security/: bcrypt hashing (passwords, refresh tokens), JWT signing, TOTP
- audit/, notification/: Structured-log audit sink and code delivery
- captcha/, enrichers/: reCAPTCHA verification and user agent parsing
- logging/: structlog console/JSON adapter

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""
