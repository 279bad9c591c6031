"""Authority State Machine - irreversible mint/freeze/update authority tracking."""

from dataclasses import replace
from typing import List, Optional
import logging

from launchpad.errors import AuthorityRevoked, IrreversibleAuthority
from .models import Authority, AuthorityFlags, AuthorityState

logger = logging.getLogger(__name__)


class AuthorityStateMachine:
    """
    Tracks the three token authorities for one simulation session.

    Each authority starts ENABLED and can only move to REVOKED, mirroring an
    on-chain authority burn (`spl-token authorize <mint> mint --disable`).
    There is no way back:

        ENABLED --revoke--> REVOKED --revoke--> REVOKED (no-op)
        REVOKED --restore--> IrreversibleAuthority

    The machine never mutates a snapshot; ``flags`` is replaced wholesale on
    every transition so previously handed-out snapshots stay valid.
    """

    def __init__(self, flags: Optional[AuthorityFlags] = None):
        self._flags = flags or AuthorityFlags()
        self._history: List[Authority] = list(self._flags.revoked)

    @property
    def flags(self) -> AuthorityFlags:
        """Current immutable authority snapshot."""
        return self._flags

    @property
    def history(self) -> List[Authority]:
        """Authorities in the order they were revoked."""
        return list(self._history)

    def revoke(self, authority: Authority) -> AuthorityFlags:
        """
        Revoke an authority.

        Revoking an authority that is already revoked succeeds without
        changing anything.

        Returns:
            The (possibly unchanged) authority snapshot
        """
        authority = Authority(authority)
        if not self._flags.is_enabled(authority):
            logger.debug(f"{authority.value} authority already revoked")
            return self._flags

        self._flags = replace(self._flags, **{authority.value: AuthorityState.REVOKED})
        self._history.append(authority)
        logger.info(f"Revoked {authority.value} authority")
        return self._flags

    def restore(self, authority: Authority) -> AuthorityFlags:
        """
        Attempt to re-enable an authority.

        Only succeeds (as a no-op) when the authority was never revoked.

        Raises:
            IrreversibleAuthority: If the authority has been revoked
        """
        authority = Authority(authority)
        if not self._flags.is_enabled(authority):
            raise IrreversibleAuthority(
                f"{authority.value} authority was revoked and cannot be re-enabled",
                authority=authority,
            )
        return self._flags

    def set_enabled(self, authority: Authority, enabled: bool) -> AuthorityFlags:
        """Toggle-style entry point for presentation layers."""
        if enabled:
            return self.restore(authority)
        return self.revoke(authority)

    def require(self, authority: Authority) -> None:
        """
        Assert an authority is still held before an action that needs it.

        Raises:
            AuthorityRevoked: If the authority has been revoked
        """
        authority = Authority(authority)
        if not self._flags.is_enabled(authority):
            raise AuthorityRevoked(
                f"{authority.value} authority has been revoked",
                authority=authority,
            )
