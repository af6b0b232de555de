"""Unit tests for sync input validation."""

import pytest

from sync.domain.exceptions import InvalidShapeError
from sync.domain.validation import (
    DEFAULT_INTERVAL_MINUTES,
    validate_intent,
    validate_interval_minutes,
    validate_shop_identity,
    validate_tenant_id,
)
from sync.domain.value_objects import ShopIdentity, SyncErrorType, SyncIntent, TenantId


class TestValidateShopIdentity:
    """Tests for shop identity validation."""

    def test_accepts_valid_shop_domain(self):
        """A well-formed shop domain should be accepted as is."""
        result = validate_shop_identity("test-store.myshopify.com")

        assert result == ShopIdentity(value="test-store.myshopify.com")

    def test_normalizes_case_and_whitespace(self):
        """Shop domains should be trimmed and lower-cased."""
        result = validate_shop_identity("  Test-Store.MyShopify.com ")

        assert result.value == "test-store.myshopify.com"

    @pytest.mark.parametrize("value", [None, 42, ["shop"], {"shop": "x"}])
    def test_rejects_non_strings(self, value):
        """Non-string values should be rejected regardless of content."""
        with pytest.raises(InvalidShapeError, match="must be a string"):
            validate_shop_identity(value)

    def test_rejects_empty(self):
        """Whitespace-only values should be rejected as empty."""
        with pytest.raises(InvalidShapeError, match="cannot be empty"):
            validate_shop_identity("   ")

    def test_rejects_too_long(self):
        """Values over 255 characters should be rejected."""
        with pytest.raises(InvalidShapeError, match="too long"):
            validate_shop_identity("a" * 250 + ".myshopify.com")

    @pytest.mark.parametrize(
        "value",
        [
            "example.com",
            "-store.myshopify.com",
            "store-.myshopify.com",
            "store.myshopify.com.evil.com",
            "sto_re.myshopify.com",
            "https://store.myshopify.com",
        ],
    )
    def test_rejects_off_pattern_domains(self, value):
        """Domains outside the shop domain pattern should be rejected."""
        with pytest.raises(InvalidShapeError) as exc_info:
            validate_shop_identity(value)

        assert "store.myshopify.com" in exc_info.value.message
        assert exc_info.value.error_type is SyncErrorType.INVALID_SHAPE
        assert exc_info.value.status_code == 400


class TestValidateIntent:
    """Tests for intent validation."""

    @pytest.mark.parametrize("intent", list(SyncIntent))
    def test_accepts_every_known_intent(self, intent):
        """Every member of the closed set should validate to itself."""
        assert validate_intent(intent.value) is intent

    def test_rejects_unknown_intent(self):
        """An unknown intent should list the allowed values."""
        with pytest.raises(InvalidShapeError) as exc_info:
            validate_intent("delete_everything")

        assert "pull, push_changed, push_all, toggle_auto" in exc_info.value.message

    @pytest.mark.parametrize("value", [None, 1, True, ["pull"]])
    def test_rejects_non_strings(self, value):
        """Non-string intents should be rejected."""
        with pytest.raises(InvalidShapeError, match="Intent must be a string"):
            validate_intent(value)

    def test_is_case_sensitive(self):
        """Intents are matched exactly."""
        with pytest.raises(InvalidShapeError):
            validate_intent("PULL")


class TestValidateIntervalMinutes:
    """Tests for auto-sync interval validation."""

    def test_none_yields_default(self):
        """A missing interval should fall back to the default."""
        assert validate_interval_minutes(None) == DEFAULT_INTERVAL_MINUTES == 15

    def test_none_yields_custom_default(self):
        """The caller may supply its own default."""
        assert validate_interval_minutes(None, default=30) == 30

    @pytest.mark.parametrize("value", [1, 15, 60, 1440])
    def test_accepts_integers_in_range(self, value):
        """Integers in [1, 1440] should be accepted."""
        assert validate_interval_minutes(value) == value

    def test_accepts_integral_float(self):
        """An integral float should be accepted as its integer value."""
        result = validate_interval_minutes(30.0)

        assert result == 30
        assert isinstance(result, int)

    def test_rejects_zero(self):
        with pytest.raises(InvalidShapeError, match="at least 1"):
            validate_interval_minutes(0)

    def test_rejects_above_one_day(self):
        with pytest.raises(InvalidShapeError, match="cannot exceed 1440"):
            validate_interval_minutes(1441)

    def test_rejects_fractional(self):
        with pytest.raises(InvalidShapeError, match="must be an integer"):
            validate_interval_minutes(1.5)

    @pytest.mark.parametrize("value", ["15", True, False, [15]])
    def test_rejects_non_numbers(self, value):
        """Strings and booleans should be rejected even when they look numeric."""
        with pytest.raises(InvalidShapeError, match="must be a number"):
            validate_interval_minutes(value)


class TestValidateTenantId:
    """Tests for tenant id validation."""

    @pytest.mark.parametrize(
        "value",
        ["tenant_123", "01HQXYZ", "a-b-c", "550e8400-e29b-41d4-a716-446655440000"],
    )
    def test_accepts_allowed_characters(self, value):
        """Letters, digits, underscores and hyphens should be accepted."""
        assert validate_tenant_id(value) == TenantId(value=value)

    def test_trims_whitespace(self):
        assert validate_tenant_id("  tenant_123 ").value == "tenant_123"

    def test_rejects_non_strings(self):
        with pytest.raises(InvalidShapeError, match="must be a string"):
            validate_tenant_id(123)

    def test_rejects_empty(self):
        with pytest.raises(InvalidShapeError, match="cannot be empty"):
            validate_tenant_id("")

    def test_rejects_too_long(self):
        with pytest.raises(InvalidShapeError, match="too long"):
            validate_tenant_id("a" * 256)

    @pytest.mark.parametrize("value", ["tenant 1", "tenant;drop", "tenant/1", "ténant"])
    def test_rejects_disallowed_characters(self, value):
        """Anything outside [A-Za-z0-9_-] should be rejected."""
        with pytest.raises(InvalidShapeError, match="disallowed characters"):
            validate_tenant_id(value)
