"""
Identity Registry
=================

Maps caller credentials to registered, uniquely named identities.

Identities live in a dense table whose slot N holds identity index N + 1,
so that index 0 is never issued and can stand for "nobody". Two secondary
indexes, credential -> first identity and name -> identity, are kept in
step with the table on every registration.

Version: 0.1.0
"""

from shared.logging import get_logger

from services.asset_registry.models import (
    NO_IDENTITY,
    Identity,
    RegistrationOutcome,
    RegistryError,
)


logger = get_logger(__name__)


class IdentityRegistry:
    """Registry of caller identities with unique display names."""

    def __init__(self) -> None:
        self._identities: list[Identity] = []
        self._by_credential: dict[str, int] = {}
        self._by_name: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._identities)

    @property
    def count(self) -> int:
        """Number of registered identities."""
        return len(self._identities)

    def register(self, credential: str, name: str) -> RegistrationOutcome:
        """
        Register a display name for a credential.

        A credential may hold several names; only the first one it
        registered is used when resolving it.

        Args:
            credential: Caller credential to bind
            name: Display name, compared by exact string match

        Returns:
            RegistrationOutcome with the new identity index on success,
            INVALID_NAME for an empty name, DUPLICATE_NAME if the name
            is already taken
        """
        # "" is reserved for "no identity" in enriched views
        if not name:
            logger.warning("identity_name_invalid")
            return RegistrationOutcome(
                registered=False,
                error=RegistryError.INVALID_NAME,
            )

        if name in self._by_name:
            logger.warning(
                "identity_name_taken",
                display_name=name,
                holder=self._by_name[name],
            )
            return RegistrationOutcome(
                registered=False,
                error=RegistryError.DUPLICATE_NAME,
            )

        index = len(self._identities) + 1
        self._identities.append(
            Identity(index=index, credential=credential, display_name=name)
        )
        self._by_name[name] = index
        self._by_credential.setdefault(credential, index)

        logger.info("identity_registered", identity_index=index, display_name=name)

        return RegistrationOutcome(registered=True, identity_index=index)

    def resolve(self, credential: str) -> int:
        """Return the identity index for a credential, NO_IDENTITY if unknown."""
        return self._by_credential.get(credential, NO_IDENTITY)

    def name_of(self, index: int) -> str:
        """Return the display name for an identity index, "" if unassigned."""
        identity = self.get(index)
        return identity.display_name if identity else ""

    def get(self, index: int) -> Identity | None:
        """Return the identity with the given index, if any."""
        if 1 <= index <= len(self._identities):
            return self._identities[index - 1]
        return None
