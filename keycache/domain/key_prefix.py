"""Key namespace policy.

A KeyPrefix names a family of cache keys and how long they live. The
store-visible key is always prefix + key, so prefixes used by one
application must not overlap as strings (see ensure_disjoint).
"""

from collections.abc import Iterable
from dataclasses import dataclass

from keycache.core.constants import CACHE_KEY_SEP
from keycache.domain.exceptions import OverlappingPrefixError


@dataclass(frozen=True)
class KeyPrefix:
    """Immutable namespace policy: key prefix plus expiry.

    expire_seconds <= 0 means entries persist until deleted.
    """

    prefix: str
    expire_seconds: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.prefix, str) or not self.prefix:
            raise ValueError("Key prefix must be a non-empty string")
        if isinstance(self.expire_seconds, bool) or not isinstance(
            self.expire_seconds, int
        ):
            raise ValueError("expire_seconds must be an integer")

    @classmethod
    def for_owner(
        cls, owner: type | str, name: str, expire_seconds: int = 0
    ) -> "KeyPrefix":
        """Build the conventional "<Owner>:<name>" prefix.

        Args:
            owner: Class (its __name__ is used) or plain owner name.
            name: Key family within the owner (e.g. 'id', 'token').
            expire_seconds: TTL for entries; <= 0 persists indefinitely.

        Returns:
            KeyPrefix for the owner's key family.
        """
        owner_name = owner if isinstance(owner, str) else owner.__name__
        return cls(f"{owner_name}{CACHE_KEY_SEP}{name}", expire_seconds)

    @property
    def has_expiry(self) -> bool:
        return self.expire_seconds > 0

    def real_key(self, key: str) -> str:
        """Return the store-visible key for a bare key in this namespace."""
        return self.prefix + key


def ensure_disjoint(policies: Iterable[KeyPrefix]) -> None:
    """Raise OverlappingPrefixError if any two prefixes overlap.

    Prefixes overlap when one starts with the other; the same prefix
    listed twice is not an overlap.

    Args:
        policies: Every KeyPrefix an application uses.

    Raises:
        OverlappingPrefixError: On the first overlapping pair found.
    """
    prefixes = sorted({p.prefix for p in policies})
    # After sorting, a prefix of any string sorts immediately before some
    # string it prefixes, so adjacent pairs are enough.
    for shorter, longer in zip(prefixes, prefixes[1:]):
        if longer.startswith(shorter):
            raise OverlappingPrefixError(shorter, longer)
