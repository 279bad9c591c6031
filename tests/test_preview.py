"""Tests for the Preview Composer."""

import json

import pytest
from decimal import Decimal

from launchpad.errors import IncompletePreview
from launchpad.fees import FeeEstimator
from launchpad.mint import Authority, AuthorityStateMachine, ConfigValidator
from launchpad.pool import LiquidityPoolSimulator, SwapDirection
from launchpad.preview import Preview, PreviewComposer, RiskIndicator, compose


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def composer():
    return PreviewComposer()


@pytest.fixture
def config():
    return ConfigValidator().validate({
        "name": "Moon Coin",
        "symbol": "MOON",
        "decimals": 6,
        "supply": 1_000_000,
        "logo_uri": "https://example.com/moon.png",
        "socials": {"telegram": "https://t.me/mooncoin"},
    })


@pytest.fixture
def machine():
    return AuthorityStateMachine()


@pytest.fixture
def fee(config):
    return FeeEstimator().estimate(config, 5_000, Decimal("150"))


@pytest.fixture
def pool():
    return LiquidityPoolSimulator().initialize(1_000_000, 2_000_000)


# ============================================================================
# Unit Tests - Composition
# ============================================================================

class TestCompose:
    """Tests for assembling a Preview."""

    def test_minimal_preview(self, composer, config, machine, fee):
        """Test a preview without a pool."""
        preview = composer.compose(config, machine.flags, fee)

        assert isinstance(preview, Preview)
        assert preview.config is config
        assert preview.fee is fee
        assert preview.pool is None
        assert preview.swap is None
        assert preview.pool_after is None

    def test_with_pool_and_swap(self, composer, config, machine, fee, pool):
        """Test pool and swap are shown as before and after."""
        quote = LiquidityPoolSimulator().quote_swap(pool, 10_000, SwapDirection.A_TO_B, fee_bps=30)
        preview = composer.compose(config, machine.flags, fee, pool, quote, network="devnet")

        assert preview.pool is pool
        assert preview.pool_after is quote.pool_after
        assert preview.network == "devnet"

    def test_swap_without_pool_uses_pool_before(self, composer, config, machine, fee, pool):
        """Test the pool defaults to the swap's starting state."""
        quote = LiquidityPoolSimulator().quote_swap(pool, 10_000, SwapDirection.A_TO_B)
        preview = composer.compose(config, machine.flags, fee, swap_quote=quote)

        assert preview.pool is pool
        assert RiskIndicator.NO_LIQUIDITY_POOL not in preview.indicators

    def test_metadata_document(self, composer, config, machine, fee):
        """Test the metadata document is built and read-only."""
        preview = composer.compose(config, machine.flags, fee)

        assert preview.metadata["name"] == "Moon Coin"
        assert preview.metadata["image"] == "https://example.com/moon.png"
        assert preview.metadata["seller_fee_basis_points"] == 0
        assert preview.metadata["extensions"] == {"telegram": "https://t.me/mooncoin"}
        with pytest.raises(TypeError):
            preview.metadata["name"] = "Changed"

    def test_preview_is_frozen(self, composer, config, machine, fee):
        """Test a preview cannot be modified."""
        preview = composer.compose(config, machine.flags, fee)
        with pytest.raises(AttributeError):
            preview.network = "testnet"

    def test_later_revocation_does_not_change_preview(self, composer, config, machine, fee):
        """Test a preview keeps the authority state it was built with."""
        preview = composer.compose(config, machine.flags, fee)
        machine.revoke(Authority.MINT)

        assert preview.authority.mintable is True

    def test_module_level_compose(self, config, machine, fee):
        """Test the module-level compose() shortcut."""
        assert compose(config, machine.flags, fee).config is config


class TestIncompletePreview:
    """Missing required parts are a caller defect."""

    @pytest.mark.parametrize("missing", ["config", "authority", "fee_estimate"])
    def test_missing_part(self, composer, config, machine, fee, missing):
        """Test each required part is named when missing."""
        parts = {"config": config, "authority": machine.flags, "fee_estimate": fee}
        parts[missing] = None

        with pytest.raises(IncompletePreview) as exc:
            composer.compose(**parts)

        assert exc.value.missing == [missing]

    def test_reports_all_missing(self, composer):
        """Test every missing part is reported together."""
        with pytest.raises(IncompletePreview) as exc:
            composer.compose(None, None, None)

        assert exc.value.missing == ["config", "authority", "fee_estimate"]


# ============================================================================
# Unit Tests - Indicators
# ============================================================================

class TestIndicators:
    """Tests for holder-facing risk indicators."""

    def test_all_retained_without_pool(self, composer, config, machine, fee):
        """Test indicators for a fresh token without a pool."""
        preview = composer.compose(config, machine.flags, fee)

        assert preview.indicators == (
            RiskIndicator.MINT_AUTHORITY_RETAINED,
            RiskIndicator.FREEZE_AUTHORITY_RETAINED,
            RiskIndicator.UPDATE_AUTHORITY_RETAINED,
            RiskIndicator.NO_LIQUIDITY_POOL,
        )

    def test_revoked_authorities_clear_indicators(self, composer, config, machine, fee, pool):
        """Test revoked authorities drop their indicators."""
        machine.revoke(Authority.MINT)
        machine.revoke(Authority.FREEZE)
        preview = composer.compose(config, machine.flags, fee, pool)

        assert preview.indicators == (RiskIndicator.UPDATE_AUTHORITY_RETAINED,)

    def test_fully_decentralized_with_pool(self, composer, config, machine, fee, pool):
        """Test no indicators once everything is revoked and pooled."""
        for authority in Authority:
            machine.revoke(authority)

        assert composer.compose(config, machine.flags, fee, pool).indicators == ()


# ============================================================================
# Unit Tests - Serialization
# ============================================================================

class TestSerialization:
    """Tests for the dictionary / JSON view."""

    def test_to_json(self, composer, config, machine, fee, pool):
        """Test the JSON view carries amounts as strings."""
        quote = LiquidityPoolSimulator().quote_swap(pool, 10_000, SwapDirection.A_TO_B, fee_bps=30)
        machine.revoke(Authority.FREEZE)
        data = json.loads(composer.compose(config, machine.flags, fee, pool, quote).to_json())

        assert data["token"]["symbol"] == "MOON"
        assert data["token"]["base_unit_supply"] == "1000000000000"
        assert data["authority"]["freeze"] == "revoked"
        assert data["fee"]["native_fee"] == "0.000005"
        assert data["pool"]["reserve_a"] == "1000000"
        assert data["swap"]["amount_out"] == "19743"
        assert data["swap"]["pool_after"]["reserve_b"] == "1980257"
        assert "freeze_authority_retained" not in data["indicators"]

    def test_to_dict_without_pool(self, composer, config, machine, fee):
        """Test the dictionary view without a pool."""
        data = composer.compose(config, machine.flags, fee).to_dict()

        assert data["pool"] is None
        assert data["swap"] is None
        assert data["indicators"][-1] == "no_liquidity_pool"
