"""Tests for the Authority State Machine and authority-gated token actions."""

import pytest

from launchpad.errors import (
    AuthorityError,
    AuthorityRevoked,
    IrreversibleAuthority,
    InvalidName,
    InvalidSupply,
    SupplyOverflow,
    ValidationError,
)
from launchpad.mint import (
    Authority,
    AuthorityFlags,
    AuthorityState,
    AuthorityStateMachine,
    ConfigValidator,
    mint_to,
    update_metadata,
)


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def machine():
    return AuthorityStateMachine()


@pytest.fixture
def config():
    return ConfigValidator().validate({
        "name": "Moon Coin",
        "symbol": "MOON",
        "decimals": 6,
        "supply": 1_000_000,
    })


# ============================================================================
# Unit Tests - AuthorityFlags
# ============================================================================

class TestAuthorityFlags:
    """Tests for the AuthorityFlags snapshot."""

    def test_default_all_enabled(self):
        """Test every authority starts enabled."""
        flags = AuthorityFlags()

        assert flags.mintable and flags.freezable and flags.updatable
        assert flags.retained == [Authority.MINT, Authority.FREEZE, Authority.UPDATE]
        assert flags.revoked == []
        assert flags.is_fully_decentralized is False

    def test_to_dict(self):
        """Test flags serialize to state names."""
        flags = AuthorityFlags(freeze=AuthorityState.REVOKED)

        assert flags.to_dict() == {"mint": "enabled", "freeze": "revoked", "update": "enabled"}


# ============================================================================
# Unit Tests - Transitions
# ============================================================================

class TestTransitions:
    """Tests for revoke / restore transitions."""

    def test_revoke(self, machine):
        """Test revoking one authority leaves the others enabled."""
        flags = machine.revoke(Authority.MINT)

        assert flags.mint == AuthorityState.REVOKED
        assert flags.mintable is False
        assert flags.freezable is True
        assert machine.history == [Authority.MINT]

    def test_revoke_accepts_plain_string(self, machine):
        """Test authorities may be named by string."""
        machine.revoke("freeze")
        assert machine.flags.freezable is False

    def test_revoke_is_idempotent(self, machine):
        """Test revoking twice is a no-op."""
        first = machine.revoke(Authority.FREEZE)
        second = machine.revoke(Authority.FREEZE)

        assert first == second
        assert machine.history == [Authority.FREEZE]

    def test_restore_revoked_fails(self, machine):
        """Test a revoked authority cannot be restored."""
        machine.revoke(Authority.UPDATE)

        with pytest.raises(IrreversibleAuthority) as exc:
            machine.restore(Authority.UPDATE)

        assert exc.value.authority == Authority.UPDATE
        assert machine.flags.updatable is False

    def test_restore_enabled_is_noop(self, machine):
        """Test restoring an enabled authority changes nothing."""
        before = machine.flags
        assert machine.restore(Authority.MINT) == before

    @pytest.mark.parametrize("authority", list(Authority))
    def test_revoked_stays_revoked(self, machine, authority):
        """Test repeated revoke / re-enable attempts never re-enable."""
        machine.revoke(authority)

        for _ in range(3):
            machine.revoke(authority)
            with pytest.raises(IrreversibleAuthority):
                machine.set_enabled(authority, True)

        assert not machine.flags.is_enabled(authority)

    def test_snapshots_are_not_mutated(self, machine):
        """Test earlier flag snapshots are unaffected by later revokes."""
        before = machine.flags
        machine.revoke(Authority.MINT)

        assert before.mintable is True
        assert machine.flags is not before

    def test_fully_decentralized(self, machine):
        """Test revoking everything yields a fully decentralized token."""
        for authority in Authority:
            machine.revoke(authority)

        assert machine.flags.is_fully_decentralized is True
        assert machine.flags.retained == []

    def test_irreversible_is_authority_error(self):
        """Test both authority errors share the AuthorityError base."""
        assert issubclass(IrreversibleAuthority, AuthorityError)
        assert issubclass(AuthorityRevoked, AuthorityError)

    def test_starts_from_given_flags(self):
        """Test a machine seeded with revoked flags honors them."""
        machine = AuthorityStateMachine(AuthorityFlags(mint=AuthorityState.REVOKED))
        assert machine.history == [Authority.MINT]
        with pytest.raises(IrreversibleAuthority):
            machine.restore(Authority.MINT)


# ============================================================================
# Unit Tests - Gated actions
# ============================================================================

class TestMintTo:
    """Tests for simulated minting."""

    def test_mint_increases_supply(self, machine, config):
        """Test minting returns a new config with more supply."""
        updated = mint_to(config, machine, 500)

        assert updated.supply == 1_000_500
        assert config.supply == 1_000_000

    def test_mint_after_revoke_fails(self, machine, config):
        """Test minting needs the mint authority."""
        machine.revoke(Authority.MINT)
        with pytest.raises(AuthorityRevoked):
            mint_to(config, machine, 1)

    @pytest.mark.parametrize("amount", [0, -1, "5", True])
    def test_invalid_amount(self, machine, config, amount):
        """Test the mint amount must be a positive integer."""
        with pytest.raises(ValidationError) as exc:
            mint_to(config, machine, amount)
        assert exc.value.has(InvalidSupply)

    def test_mint_overflow(self, machine, config):
        """Test minting past u64 base units is rejected."""
        with pytest.raises(ValidationError) as exc:
            mint_to(config, machine, 2**64)
        assert exc.value.has(SupplyOverflow)


class TestUpdateMetadata:
    """Tests for simulated metadata updates."""

    def test_update(self, machine, config):
        """Test metadata fields are rewritten and normalized."""
        updated = update_metadata(config, machine, name="Moon Coin V2", symbol="moon2")

        assert updated.name == "Moon Coin V2"
        assert updated.symbol == "MOON2"
        assert updated.supply == config.supply

    def test_update_after_revoke_fails(self, machine, config):
        """Test updating needs the update authority."""
        machine.revoke(Authority.UPDATE)
        with pytest.raises(AuthorityRevoked):
            update_metadata(config, machine, name="Renamed")

    def test_update_is_revalidated(self, machine, config):
        """Test the merged config goes through validation."""
        with pytest.raises(ValidationError) as exc:
            update_metadata(config, machine, name="")
        assert exc.value.has(InvalidName)

    def test_supply_not_updatable(self, machine, config):
        """Test supply is not a metadata field."""
        with pytest.raises(ValueError):
            update_metadata(config, machine, supply=5)
