import pytest
from catalogue.product.management import CreateProduct, ManageProductHandler, UpdateProduct
from catalogue.product.repository import ProductRepository
from shared.exceptions import ConflictError, ObjectNotFoundError, ValidationError


def _create_command(category_id, **overrides):
    data = {
        "name": "Wireless Mouse",
        "description": "Ergonomic wireless mouse",
        "price": 24.99,
        "sku": "elec-mse-001",
        "quantity": 100,
        "category_id": category_id,
    }
    data.update(overrides)
    return CreateProduct(**data)


class TestCreateProduct:
    def test_create_persists_product(self, database, category):
        product = ManageProductHandler(database).create_product(_create_command(category.id))

        stored = ProductRepository(database).get(product.id)
        assert stored.name == "Wireless Mouse"
        assert stored.slug == "wireless-mouse"
        assert stored.sku == "ELEC-MSE-001"

    def test_unknown_category(self, database, category):
        with pytest.raises(ValidationError) as exc:
            ManageProductHandler(database).create_product(_create_command("65a1f0c2e4b0a1b2c3d4e5f6"))
        assert exc.value.messages == {"category_id": ["Invalid category"]}

    def test_duplicate_sku_differs_only_in_case(self, database, category):
        handler = ManageProductHandler(database)
        handler.create_product(_create_command(category.id))

        with pytest.raises(ConflictError) as exc:
            handler.create_product(_create_command(category.id, name="Other Mouse", sku="ELEC-mse-001"))
        assert "sku" in exc.value.messages

    def test_duplicate_slug(self, database, category):
        handler = ManageProductHandler(database)
        handler.create_product(_create_command(category.id))

        with pytest.raises(ConflictError) as exc:
            handler.create_product(_create_command(category.id, name="Wireless  Mouse", sku="other-001"))
        assert "slug" in exc.value.messages


class TestUpdateProduct:
    def test_partial_update(self, database, make_product):
        product = make_product(price=10.0, quantity=5)

        updated = ManageProductHandler(database).update_product(product.id, UpdateProduct(price=12.5))

        assert updated.price == 12.5
        assert updated.quantity == 5
        assert ProductRepository(database).get(product.id).price == 12.5

    def test_required_field_cannot_be_cleared(self, database, make_product):
        product = make_product()
        with pytest.raises(ValidationError) as exc:
            ManageProductHandler(database).update_product(product.id, UpdateProduct(name=None))
        assert "name" in exc.value.messages

    def test_sku_conflict_with_other_product(self, database, make_product):
        make_product(sku="TAKEN-1")
        product = make_product()
        with pytest.raises(ConflictError):
            ManageProductHandler(database).update_product(product.id, UpdateProduct(sku="taken-1"))

    def test_keeping_own_sku_is_not_a_conflict(self, database, make_product):
        product = make_product(sku="MINE-1")
        updated = ManageProductHandler(database).update_product(product.id, UpdateProduct(sku="mine-1", quantity=1))
        assert updated.sku == "MINE-1"

    def test_unknown_category(self, database, make_product):
        product = make_product()
        with pytest.raises(ValidationError):
            ManageProductHandler(database).update_product(product.id, UpdateProduct(category_id="nope"))

    def test_missing_product(self, database):
        with pytest.raises(ObjectNotFoundError):
            ManageProductHandler(database).update_product("65a1f0c2e4b0a1b2c3d4e5f6", UpdateProduct(price=1))


class TestDeleteProduct:
    def test_delete(self, database, make_product):
        product = make_product()
        ManageProductHandler(database).delete_product(product.id)
        assert ProductRepository(database).find(product.id) is None

    def test_delete_missing(self, database):
        with pytest.raises(ObjectNotFoundError):
            ManageProductHandler(database).delete_product("65a1f0c2e4b0a1b2c3d4e5f6")
