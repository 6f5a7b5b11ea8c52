"""Tests for the Product aggregate and its derived values."""

import pytest
from catalogue.product.product import (
    Image,
    Product,
    ProductStatus,
    discount_percentage,
    has_stock_for,
    in_stock,
    main_image,
)
from shared.exceptions import ValidationError


def _make_product(**overrides):
    defaults = {
        "name": "Wireless Mouse",
        "description": "Ergonomic wireless mouse",
        "price": 25.0,
        "sku": "elec-mse-001",
        "quantity": 10,
        "category_id": "cat-001",
    }
    defaults.update(overrides)
    return Product.create(**defaults)


class TestProductCreation:
    def test_defaults(self):
        product = _make_product()
        assert product.status == ProductStatus.ACTIVE.value
        assert product.featured is False
        assert product.track_quantity is True
        assert product.created_at == product.updated_at

    def test_slug_derived_from_name(self):
        product = _make_product(name="Wireless Mouse!!")
        assert product.slug == "wireless-mouse"

    def test_explicit_slug_is_lowercased(self):
        product = _make_product(slug="My-Mouse")
        assert product.slug == "my-mouse"

    def test_explicit_slug_is_made_url_safe(self):
        product = _make_product(slug="My Slug!")
        assert product.slug == "my-slug"

    def test_slug_without_alphanumerics_is_rejected(self):
        with pytest.raises(Exception) as exc:
            _make_product(slug="!!!")
        assert "Slug must contain" in str(exc.value)

    def test_name_without_alphanumerics_is_rejected(self):
        with pytest.raises(Exception):
            _make_product(name="!!!")

    def test_sku_is_normalized(self):
        product = _make_product(sku="  elec-mse-001 ")
        assert product.sku == "ELEC-MSE-001"

    def test_blank_sku_is_rejected(self):
        with pytest.raises(ValidationError):
            _make_product(sku="   ")

    def test_negative_price_is_rejected(self):
        with pytest.raises(Exception) as exc:
            _make_product(price=-1)
        assert "price" in str(exc.value)

    def test_tags_are_trimmed(self):
        product = _make_product(tags=[" mouse ", "", "wireless"])
        assert product.tags == ["mouse", "wireless"]

    def test_seo_title_length(self):
        with pytest.raises(Exception):
            _make_product(seo={"title": "x" * 61})


class TestMainImage:
    def test_first_image_becomes_main(self):
        product = _make_product(images=[{"url": "a.jpg"}, {"url": "b.jpg"}])
        assert [i.is_main for i in product.images] == [True, False]

    def test_only_first_flag_survives(self):
        product = _make_product(
            images=[{"url": "a.jpg"}, {"url": "b.jpg", "is_main": True}, {"url": "c.jpg", "is_main": True}]
        )
        assert sum(i.is_main for i in product.images) == 1
        assert product.images[0].is_main

    def test_single_flag_is_kept(self):
        product = _make_product(images=[{"url": "a.jpg"}, {"url": "b.jpg", "is_main": True}])
        assert main_image(product).url == "b.jpg"

    def test_no_images(self):
        product = _make_product()
        assert product.images == []
        assert main_image(product) is None

    def test_main_image_helper_falls_back_to_first(self):
        product = _make_product()
        product.images = [Image(url="x.jpg"), Image(url="y.jpg")]
        assert main_image(product).url == "x.jpg"


class TestDerivedValues:
    def test_in_stock(self):
        assert in_stock(_make_product(quantity=1))
        assert not in_stock(_make_product(quantity=0))

    def test_untracked_is_always_in_stock(self):
        product = _make_product(quantity=0, track_quantity=False)
        assert in_stock(product)
        assert has_stock_for(product, 1000)

    def test_has_stock_for(self):
        product = _make_product(quantity=5)
        assert has_stock_for(product, 5)
        assert not has_stock_for(product, 6)

    def test_variant_stock_is_its_own(self):
        product = _make_product(
            quantity=50,
            variants=[{"id": "var-s", "name": "Small", "quantity": 1}],
        )
        assert has_stock_for(product, 1, "var-s")
        assert not has_stock_for(product, 2, "var-s")
        assert has_stock_for(product, 50)

    def test_unknown_variant_stock(self):
        with pytest.raises(ValidationError):
            has_stock_for(_make_product(), 1, "nope")

    def test_discount_percentage(self):
        assert discount_percentage(_make_product(price=75.0, compare_price=100.0)) == 25

    def test_discount_rounds_half_up(self):
        assert discount_percentage(_make_product(price=87.5, compare_price=100.0)) == 13

    @pytest.mark.parametrize("compare_price", [None, 0, 25.0, 20.0])
    def test_no_discount(self, compare_price):
        assert discount_percentage(_make_product(price=25.0, compare_price=compare_price)) == 0


class TestVariants:
    def _product(self):
        return _make_product(
            variants=[
                {"id": "var-s", "name": "Small", "price": 20.0, "sku": "mse-s"},
                {"id": "var-l", "name": "Large"},
            ]
        )

    def test_variant_price(self):
        product = self._product()
        assert product.unit_price("var-s") == 20.0

    def test_variant_without_price_uses_product_price(self):
        product = self._product()
        assert product.unit_price("var-l") == 25.0

    def test_no_variant_uses_product_price(self):
        assert self._product().unit_price() == 25.0

    def test_unknown_variant(self):
        with pytest.raises(ValidationError) as exc:
            self._product().unit_price("var-x")
        assert "variant_id" in exc.value.messages

    def test_sku_for_variant(self):
        product = self._product()
        assert product.sku_for("var-s") == "MSE-S"
        assert product.sku_for("var-l") == "ELEC-MSE-001"
        assert product.sku_for(None) == "ELEC-MSE-001"


class TestProductUpdate:
    def test_update_revalidates(self):
        product = _make_product()
        with pytest.raises(Exception):
            product.update(price=-5)
        assert product.price == 25.0

    def test_rename_keeps_slug(self):
        product = _make_product()
        product.update(name="Silent Mouse")
        assert product.name == "Silent Mouse"
        assert product.slug == "wireless-mouse"

    def test_update_moves_updated_at(self):
        product = _make_product()
        created_at = product.created_at
        product.update(quantity=3)
        assert product.quantity == 3
        assert product.created_at == created_at
        assert product.updated_at >= created_at

    def test_status_change(self):
        product = _make_product()
        product.update(status=ProductStatus.DRAFT)
        assert product.status == "draft"
        assert not product.is_active()
