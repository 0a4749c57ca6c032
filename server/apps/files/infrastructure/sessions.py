"""Session token store backed by the Django cache framework.

Tokens are stored as ``auth_<token>`` keys holding the user id. In
production the ``sessions`` cache alias points at Redis.
"""

import functools
import logging
import secrets
from typing import Final, final

from django.conf import settings
from django.core.cache import BaseCache, caches

logger = logging.getLogger(__name__)

_KEY_PREFIX: Final = 'auth_'

# Only the start of a token is logged
_TOKEN_LOG_LENGTH: Final = 8

# Token length in bytes (generates 32 hex chars)
_TOKEN_BYTES: Final = 16


def session_key(token: str) -> str:
    """Build the cache key holding a token's user id.

    Args:
        token: Opaque session token.

    Returns:
        Cache key (e.g., 'auth_3f2a...').
    """
    return f'{_KEY_PREFIX}{token}'


def raw_cache_key(key: str, key_prefix: str, version: int) -> str:
    """Use cache keys as given, without prefix or version.

    Configured as the ``KEY_FUNCTION`` of the sessions cache so that
    Redis holds plain ``auth_<token>`` keys.
    """
    return key


@final
class SessionStore:
    """Resolves, creates and ends session tokens.

    Reads are side-effect free and safe to run concurrently; all state
    lives in the cache backend.
    """

    def __init__(self, cache: BaseCache, ttl: int) -> None:
        """Initialize the session store.

        Args:
            cache: Cache backend holding the sessions.
            ttl: Lifetime of new sessions in seconds.
        """
        self._cache = cache
        self._ttl = ttl

    def connect(self) -> None:
        """Check the cache is reachable, logging when it is not."""
        if not self.is_alive():
            logger.warning('Session cache is not reachable')

    def close(self) -> None:
        """Close cache connections."""
        self._cache.close()

    def is_alive(self) -> bool:
        """Check that the cache answers.

        Returns:
            True if a read round-trip succeeds, False otherwise.
        """
        try:
            self._cache.get(session_key('ping'))
        except Exception:
            logger.exception('Session cache health check failed')
            return False
        return True

    def resolve(self, token: str | None) -> str | None:
        """Return the user id bound to a token.

        Args:
            token: Session token, None when the client sent none.

        Returns:
            User id as string, or None for missing, unknown or expired
            tokens.
        """
        if not token:
            return None
        user_id = self._cache.get(session_key(token))
        if user_id is None:
            logger.debug('Unknown session token: %s', token[:_TOKEN_LOG_LENGTH])
            return None
        return str(user_id)

    def create(self, user_id: object) -> str:
        """Open a new session for a user.

        Args:
            user_id: Identifier of the authenticated user.

        Returns:
            New session token.
        """
        token = secrets.token_hex(_TOKEN_BYTES)
        self._cache.set(session_key(token), str(user_id), timeout=self._ttl)
        logger.info(
            'Session created for user %s: %s',
            user_id,
            token[:_TOKEN_LOG_LENGTH],
        )
        return token

    def end(self, token: str) -> bool:
        """End a session.

        Args:
            token: Session token.

        Returns:
            True if the session existed and was removed.
        """
        deleted = bool(self._cache.delete(session_key(token)))
        if deleted:
            logger.info('Session ended: %s', token[:_TOKEN_LOG_LENGTH])
        return deleted


@functools.cache
def get_session_store() -> SessionStore:
    """Get the process-wide session store.

    Returns:
        SessionStore on the configured session cache alias.
    """
    return SessionStore(
        caches[settings.SESSION_CACHE_ALIAS],
        ttl=settings.SESSION_TTL,
    )
