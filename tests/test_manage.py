import pytest
from catalogue.category.repository import CategoryRepository
from identity.security import verify_password
from identity.user.repository import UserRepository
from manage import main, seed_database
from shared.config import get_settings


class TestSeed:
    def test_creates_admin_and_categories(self, database):
        seed_database(database)

        settings = get_settings()
        admin = UserRepository(database).by_email(settings.admin_email)
        assert admin.is_admin
        assert admin.email_verified
        assert verify_password(settings.admin_password, admin.password_hash)

        categories = CategoryRepository(database).active()
        assert [c.slug for c in categories] == ["electronics", "clothing", "books", "home-garden"]

    def test_is_idempotent(self, database):
        seed_database(database)
        seed_database(database)

        assert UserRepository(database).collection.count_documents({}) == 1
        assert CategoryRepository(database).collection.count_documents({}) == 4


class TestCli:
    def test_seed_command(self, database, capsys):
        main(["seed"])
        assert "Done." in capsys.readouterr().out
        assert CategoryRepository(database).collection.count_documents({}) == 4

    def test_unknown_command(self):
        with pytest.raises(SystemExit):
            main(["migrate"])
