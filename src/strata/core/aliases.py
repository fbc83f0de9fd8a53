"""
Alias table: lets one key name stand in for another.

Aliases form chains (a -> b -> c) that always end at a canonical key.
Registration refuses anything that would close a loop, so resolution
terminates; resolve() also keeps a visited set in case the table was
populated some other way.
"""

from __future__ import annotations

import logging as _logging

_logger = _logging.getLogger(__name__)


class AliasTable:
    """
    Mapping of alias -> target key, both lowercase.

    Example:
        >>> table = AliasTable()
        >>> table.register("verbose", "loud")
        True
        >>> table.resolve("verbose")
        'loud'
        >>> table.register("loud", "verbose")  # would loop
        False
    """

    def __init__(self) -> None:
        self._aliases: dict[str, str] = {}

    def __contains__(self, alias: object) -> bool:
        return alias in self._aliases

    def __len__(self) -> int:
        return len(self._aliases)

    def as_dict(self) -> dict[str, str]:
        """Return a copy of the alias -> target mapping."""
        return dict(self._aliases)

    def resolve(self, key: str) -> str:
        """
        Follow the alias chain starting at key.

        Returns key unchanged if it is not an alias.
        """
        seen = {key}
        while key in self._aliases:
            target = self._aliases[key]
            _logger.debug("Alias %s to %s", key, target)
            if target in seen:
                _logger.warning("Circular alias chain at %r, stopping resolution", target)
                break
            seen.add(target)
            key = target
        return key

    def would_cycle(self, alias: str, key: str) -> bool:
        """Check whether registering alias -> key would create a loop."""
        return alias == key or alias == self.resolve(key)

    def register(self, alias: str, key: str) -> bool:
        """
        Register alias as another name for key.

        Both names are lowercased. An alias that is already registered keeps
        its existing target.

        Args:
            alias: The new name.
            key: The name it stands in for (may itself be an alias).

        Returns:
            True if the alias was added, False if it was rejected as
            circular or already present.
        """
        alias = alias.lower()
        key = key.lower()

        if self.would_cycle(alias, key):
            _logger.warning(
                "Creating circular reference alias %s -> %s (%s), skipping",
                alias,
                key,
                self.resolve(key),
            )
            return False

        if alias in self._aliases:
            _logger.debug(
                "Alias %s already points to %s, keeping it", alias, self._aliases[alias]
            )
            return False

        self._aliases[alias] = key
        return True
