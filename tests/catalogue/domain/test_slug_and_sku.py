import pytest
from catalogue.shared.sku import normalize_sku
from catalogue.shared.slug import slugify
from shared.exceptions import ValidationError


class TestSlugify:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Wireless Mouse!!", "wireless-mouse"),
            ("Home & Garden", "home-garden"),
            ("  --Leading and trailing--  ", "leading-and-trailing"),
            ("USB-C   Cable 2m", "usb-c-cable-2m"),
        ],
    )
    def test_slugify(self, text, expected):
        assert slugify(text) == expected

    def test_only_punctuation_gives_empty_slug(self):
        assert slugify("!!!") == ""


class TestNormalizeSku:
    def test_upper_cases_and_trims(self):
        assert normalize_sku(" elec-phn-001 ") == "ELEC-PHN-001"

    def test_none_passes_through(self):
        assert normalize_sku(None) is None

    def test_blank_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            normalize_sku("  ", field="variant_sku")
        assert "variant_sku" in exc.value.messages
