"""Session token service.

Issues, validates, refreshes and revokes session tokens.

Token model:
    - Access token: signed JWT whose ``jti`` is the session id
    - Refresh token: opaque random string; only its bcrypt hash is stored on
      the session
    - A token is valid only while its session is neither revoked nor expired,
      so revocation takes effect on the very next validation

Validation always reads the session store (no caching). Every store call runs
under the configured store timeout; a validation that times out is refused.
"""

import asyncio
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from uuid_extensions import uuid7

from src.application.dtos.auth_dtos import IssuedTokens, LoginContext, TokenClaims
from src.core.result import Failure, Result, Success
from src.domain.entities.session import Session
from src.domain.entities.user import User
from src.domain.enums import UserStatus
from src.domain.errors import AuthenticationError
from src.domain.protocols import (
    DeviceEnricher,
    LoggerProtocol,
    RefreshTokenServiceProtocol,
    RolePermissionLookup,
    SessionRepository,
    TokenGenerationProtocol,
    UserRepository,
)
from src.domain.value_objects import SecurityPolicy

# Revocation reasons stored on sessions
REASON_LOGOUT = "logout"
REASON_LOGOUT_ALL = "logout_all"
REASON_REFRESHED = "refreshed"
REASON_PASSWORD_CHANGED = "password_changed"
REASON_PASSWORD_RESET = "password_reset"
REASON_TWO_FACTOR_DISABLED = "two_factor_disabled"


class SessionTokenService:
    """Token issuance bound to server-side sessions.

    Attributes:
        policy: Token lifetimes (normal and remember-me).
    """

    def __init__(
        self,
        *,
        session_repo: SessionRepository,
        user_repo: UserRepository,
        token_service: TokenGenerationProtocol,
        refresh_token_service: RefreshTokenServiceProtocol,
        role_lookup: RolePermissionLookup,
        device_enricher: DeviceEnricher,
        policy: SecurityPolicy,
        logger: LoggerProtocol,
        store_timeout_seconds: float = 10.0,
    ) -> None:
        self._session_repo = session_repo
        self._user_repo = user_repo
        self._token_service = token_service
        self._refresh_token_service = refresh_token_service
        self._role_lookup = role_lookup
        self._device_enricher = device_enricher
        self.policy = policy
        self._logger = logger
        self._store_timeout = store_timeout_seconds

    async def issue(
        self,
        user: User,
        *,
        extended: bool = False,
        now: datetime | None = None,
    ) -> IssuedTokens:
        """Mint a token pair for a new session id.

        Nothing is persisted; see ``start_session``.

        Args:
            user: Token subject.
            extended: Remember-me lifetime instead of the normal one.
            now: Issue time (defaults to current UTC time).

        Returns:
            IssuedTokens with a fresh uuid7 session id.
        """
        now = now or datetime.now(UTC)
        session_id = uuid7()
        expires_at = now + self.policy.token_lifetime(extended=extended)

        async with asyncio.timeout(self._store_timeout):
            roles = await self._role_lookup.get_role_names(user.id)
            permissions = await self._role_lookup.get_permission_codes(user.id)

        access_token = self._token_service.generate_access_token(
            user_id=user.id,
            session_id=session_id,
            email=user.email,
            username=user.username,
            roles=roles,
            permissions=permissions,
            issued_at=now,
            expires_at=expires_at,
        )
        refresh_token, refresh_token_hash = self._refresh_token_service.generate_token()

        return IssuedTokens(
            access_token=access_token,
            refresh_token=refresh_token,
            refresh_token_hash=refresh_token_hash,
            session_id=session_id,
            user_id=user.id,
            issued_at=now,
            expires_at=expires_at,
            is_extended=extended,
        )

    async def start_session(
        self,
        user: User,
        *,
        context: LoginContext,
        extended: bool = False,
    ) -> IssuedTokens:
        """Issue a token pair and persist its session.

        Args:
            user: Authenticated user.
            context: Client metadata stored on the session.
            extended: Remember-me session.

        Returns:
            The issued tokens (session already committed).
        """
        tokens = await self.issue(user, extended=extended)
        device = self._device_enricher.enrich(context.user_agent)

        async with asyncio.timeout(self._store_timeout):
            await self._session_repo.create(
                Session(
                    id=tokens.session_id,
                    user_id=user.id,
                    refresh_token_hash=tokens.refresh_token_hash,
                    issued_at=tokens.issued_at,
                    expires_at=tokens.expires_at,
                    ip_address=context.ip_address,
                    user_agent=context.user_agent,
                    device_info=device.device_info,
                    is_extended=extended,
                )
            )

        self._logger.info(
            "session_created",
            user_id=str(user.id),
            session_id=str(tokens.session_id),
            is_extended=extended,
            device_type=device.device_type,
        )
        return tokens

    async def validate(self, token: str) -> Result[TokenClaims, AuthenticationError]:
        """Validate an access token against its session.

        Args:
            token: Access token.

        Returns:
            Success(TokenClaims) if the signature, expiry, issuer and audience
            verify and the session is active. Failure(TOKEN_INVALID) otherwise,
            including when the session store does not answer in time.
        """
        try:
            resolved = await self._resolve(token)
        except TimeoutError:
            self._logger.warning("session_store_timeout", operation="validate")
            return Failure(error=AuthenticationError.token_invalid())
        if isinstance(resolved, Failure):
            return resolved
        claims, _ = resolved.value
        return Success(value=claims)

    async def revoke(self, session_id: UUID, reason: str) -> bool:
        """Revoke one session.

        Returns:
            True if this call revoked it (False if missing or already revoked).
        """
        async with asyncio.timeout(self._store_timeout):
            revoked = await self._session_repo.revoke(session_id, reason)
        if revoked:
            self._logger.info(
                "session_revoked", session_id=str(session_id), reason=reason
            )
        return revoked

    async def revoke_all(
        self,
        user_id: UUID,
        reason: str,
        except_session_id: UUID | None = None,
    ) -> int:
        """Revoke every active session of a user ("logout everywhere").

        Returns:
            Number of sessions revoked.
        """
        async with asyncio.timeout(self._store_timeout):
            count = await self._session_repo.revoke_all_for_user(
                user_id, reason, except_session_id=except_session_id
            )
        self._logger.info(
            "sessions_revoked_all",
            user_id=str(user_id),
            reason=reason,
            revoked_count=count,
            kept_session_id=str(except_session_id) if except_session_id else None,
        )
        return count

    async def refresh(
        self,
        access_token: str,
        refresh_token: str,
        context: LoginContext,
    ) -> Result[IssuedTokens, AuthenticationError]:
        """Rotate a token pair.

        Steps:
            1. Strictly validate the access token (expired tokens are rejected)
            2. Verify the refresh token against the session's stored hash
            3. Require the user to still exist and be ACTIVE
            4. Revoke the old session
            5. Start a new session with the same remember-me setting

        Returns:
            Success(IssuedTokens) for the new session, Failure(TOKEN_INVALID)
            otherwise.

        Raises:
            TimeoutError: If the session store does not answer in time.
        """
        # Step 1: Access token and live session
        resolved = await self._resolve(access_token)
        if isinstance(resolved, Failure):
            return resolved
        claims, session = resolved.value

        # Step 2: Refresh token bound to this session
        if not refresh_token or not self._refresh_token_service.verify_token(
            refresh_token, session.refresh_token_hash
        ):
            self._logger.warning(
                "refresh_token_mismatch", session_id=str(session.id)
            )
            return Failure(error=AuthenticationError.token_invalid())

        # Step 3: User still allowed to hold sessions
        async with asyncio.timeout(self._store_timeout):
            user = await self._user_repo.find_by_id(claims.user_id)
        if user is None or user.status != UserStatus.ACTIVE:
            return Failure(error=AuthenticationError.token_invalid())

        # Step 4: Revoke old session; losing a concurrent refresh race fails here
        if not await self.revoke(session.id, REASON_REFRESHED):
            return Failure(error=AuthenticationError.token_invalid())

        # Step 5: New session
        tokens = await self.start_session(
            user, context=context, extended=session.is_extended
        )
        return Success(value=tokens)

    async def cleanup_expired(self, before: datetime | None = None) -> int:
        """Delete expired sessions.

        Returns:
            Number of sessions deleted.
        """
        async with asyncio.timeout(self._store_timeout):
            count = await self._session_repo.cleanup_expired(before)
        self._logger.info("expired_sessions_cleaned", deleted_count=count)
        return count

    async def _resolve(
        self, token: str
    ) -> Result[tuple[TokenClaims, Session], AuthenticationError]:
        """Verify the token and load its active session."""
        verified = self._token_service.validate_access_token(token)
        if isinstance(verified, Failure):
            self._logger.debug("access_token_rejected", reason=verified.error)
            return Failure(error=AuthenticationError.token_invalid())

        payload: dict[str, Any] = verified.value
        try:
            session_id = UUID(str(payload["jti"]))
            user_id = UUID(str(payload["sub"]))
            issued_at = datetime.fromtimestamp(payload["iat"], UTC)
        except (KeyError, TypeError, ValueError):
            return Failure(error=AuthenticationError.token_invalid())

        async with asyncio.timeout(self._store_timeout):
            session = await self._session_repo.find_active_by_jti(session_id)
        if session is None or session.user_id != user_id:
            return Failure(error=AuthenticationError.token_invalid())

        claims = TokenClaims(
            user_id=user_id,
            session_id=session_id,
            email=payload.get("email", ""),
            username=payload.get("username", ""),
            roles=list(payload.get("roles", [])),
            permissions=list(payload.get("permissions", [])),
            issued_at=issued_at,
            expires_at=session.expires_at,
        )
        return Success(value=(claims, session))
