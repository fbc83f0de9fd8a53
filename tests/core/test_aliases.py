"""Tests for the alias table."""

import logging as _logging

import pytest as _pytest

import strata.core.aliases as aliases


class TestAliasTable:
    """Tests for AliasTable registration and resolution."""

    def test_resolve_non_alias_is_identity(self) -> None:
        """A key that is not an alias resolves to itself."""
        table = aliases.AliasTable()
        assert table.resolve("port") == "port"

    def test_register_and_resolve(self) -> None:
        """A registered alias resolves to its target."""
        table = aliases.AliasTable()
        assert table.register("new", "old") is True
        assert table.resolve("new") == "old"
        assert "new" in table
        assert len(table) == 1

    def test_names_are_lowercased(self) -> None:
        """Registration lowercases both names."""
        table = aliases.AliasTable()
        table.register("NewName", "OldName")
        assert table.as_dict() == {"newname": "oldname"}

    def test_chains_resolve_transitively(self) -> None:
        """alias -> alias -> canonical resolves to the canonical key."""
        table = aliases.AliasTable()
        table.register("b", "c")
        table.register("a", "b")
        assert table.resolve("a") == "c"

    def test_self_alias_rejected(self) -> None:
        """An alias for itself is rejected."""
        table = aliases.AliasTable()
        assert table.register("x", "X") is False
        assert len(table) == 0

    def test_direct_cycle_rejected(self, caplog: _pytest.LogCaptureFixture) -> None:
        """x -> y then y -> x rejects the second registration with a warning."""
        table = aliases.AliasTable()
        assert table.register("x", "y") is True
        with caplog.at_level(_logging.WARNING, logger="strata.core.aliases"):
            assert table.register("y", "x") is False
        assert "circular" in caplog.text.lower()
        assert table.resolve("x") == "y"
        assert table.resolve("y") == "y"

    def test_long_cycle_rejected(self) -> None:
        """A registration closing a longer chain is rejected."""
        table = aliases.AliasTable()
        table.register("a", "b")
        table.register("b", "c")
        assert table.register("c", "a") is False
        assert table.resolve("a") == "c"

    def test_existing_alias_keeps_target(self) -> None:
        """Re-registering an alias leaves the first target in place."""
        table = aliases.AliasTable()
        table.register("a", "b")
        assert table.register("a", "c") is False
        assert table.resolve("a") == "b"

    def test_resolve_terminates_on_corrupt_cycle(self) -> None:
        """A cycle inserted behind register()'s back still terminates."""
        table = aliases.AliasTable()
        table._aliases.update({"p": "q", "q": "p"})
        assert table.resolve("p") in {"p", "q"}
