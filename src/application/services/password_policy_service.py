"""Password policy service.

Combines the pure strength rules with the per-user password history.
History checks use the hasher's verify function (bcrypt hashes are salted,
so raw equality would never match).
"""

from datetime import UTC, datetime
from uuid import UUID

from uuid_extensions import uuid7

from src.application.dtos.auth_dtos import LoginContext
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.entities.password_history import PasswordHistoryEntry
from src.domain.errors import PasswordPolicyError
from src.domain.policies import PasswordPolicy
from src.domain.protocols import PasswordHashingProtocol, PasswordHistoryRepository
from src.domain.value_objects import SecurityPolicy


class PasswordPolicyService:
    """Validates candidate passwords and maintains password history.

    Example:
        >>> service = PasswordPolicyService(
        ...     policy=SecurityPolicy(),
        ...     password_service=bcrypt_service,
        ...     history_repo=history_repo,
        ... )
        >>> service.validate("short")
        Failure(error=PasswordPolicyError(...))
    """

    def __init__(
        self,
        *,
        policy: SecurityPolicy,
        password_service: PasswordHashingProtocol,
        history_repo: PasswordHistoryRepository,
    ) -> None:
        self._rules = PasswordPolicy(policy)
        self._history_limit = policy.password_history_limit
        self._password_service = password_service
        self._history_repo = history_repo

    def validate(self, password: str) -> Result[None, PasswordPolicyError]:
        """Check the strength rules.

        Returns:
            Success(None) if every rule passes, otherwise
            Failure(PASSWORD_POLICY_VIOLATION) listing each violation.
        """
        violations = self._rules.violations(password)
        if violations:
            return Failure(
                error=PasswordPolicyError(
                    code=ErrorCode.PASSWORD_POLICY_VIOLATION,
                    message="Password does not meet the policy requirements",
                    field="new_password",
                    violations=tuple(violations),
                )
            )
        return Success(value=None)

    async def check_history(
        self,
        user_id: UUID,
        candidate: str,
    ) -> Result[None, PasswordPolicyError]:
        """Reject a candidate matching any of the recent passwords.

        Returns:
            Success(None) if unused, Failure(PASSWORD_HISTORY_VIOLATION) otherwise.
        """
        recent = await self._history_repo.find_recent(user_id, self._history_limit)
        for entry in recent:
            if self._password_service.verify_password(candidate, entry.password_hash):
                return Failure(
                    error=PasswordPolicyError(
                        code=ErrorCode.PASSWORD_HISTORY_VIOLATION,
                        message=(
                            f"Password was used within the last "
                            f"{self._history_limit} changes"
                        ),
                        field="new_password",
                    )
                )
        return Success(value=None)

    async def record(
        self,
        user_id: UUID,
        password_hash: str,
        *,
        context: LoginContext | None = None,
        now: datetime | None = None,
    ) -> None:
        """Append a hash to the history, evicting beyond the limit."""
        await self._history_repo.append(
            PasswordHistoryEntry(
                id=uuid7(),
                user_id=user_id,
                password_hash=password_hash,
                changed_at=now or datetime.now(UTC),
                ip_address=context.ip_address if context else None,
                user_agent=context.user_agent if context else None,
            ),
            self._history_limit,
        )
