"""Domain layer - Pure business logic.

This layer contains the core business entities, value objects, policies,
errors and protocols (ports). The domain layer has NO dependencies on any
framework or infrastructure - it is pure Python.

Structure:
- entities/: Domain entities (mutable, have identity)
- enums/: Status and method enumerations
- value_objects/: Value objects (immutable, no identity)
- policies/: Lockout and password rules configured from SecurityPolicy
- errors/: Domain errors returned inside Failure
- protocols/: Domain protocols (repository interfaces, service interfaces)

The domain layer defines WHAT the business does, not HOW it's implemented.
"""
