from identity.user.user import User
from shared.database import USERS
from shared.repository import Repository


class UserRepository(Repository):
    aggregate_cls = User
    collection_name = USERS
    not_found_message = "User not found"

    def by_email(self, email):
        return self.find_one_by(email=email.strip().lower())
