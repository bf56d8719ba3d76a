"""Application layer - Use cases and orchestration.

This layer contains the authentication use cases following the CQRS pattern:
- Commands: Write operations that change state (login, refresh, logout, 2FA,
  password change)
- Queries: Read operations that fetch data (active sessions)
- Services: Orchestration shared by several handlers (session tokens,
  password policy, audit trail)

The application layer orchestrates domain logic but contains no business rules.
Only domain protocols are imported; infrastructure is injected.
"""
