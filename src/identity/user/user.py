"""User aggregate: a registered account that owns a cart and orders."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from identity.shared.email import validate_email_address
from identity.shared.phone import validate_phone_number
from shared.model import Aggregate, utc_now


class UserRole(Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


class Address(BaseModel):
    """An entry in a user's address book."""

    model_config = ConfigDict(str_strip_whitespace=True)

    label: str | None = Field(default=None, max_length=20)
    street: str = Field(min_length=1, max_length=255)
    city: str = Field(min_length=1, max_length=100)
    state: str | None = Field(default=None, max_length=100)
    zip_code: str = Field(min_length=1, max_length=20)
    country: str = Field(min_length=1, max_length=100)
    is_default: bool = False


class User(Aggregate):
    """A person with an account on the storefront.

    ``password_hash`` is stored with the document but never leaves the
    service: responses are built from ``public_profile()``.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    email: str
    password_hash: str
    phone: str | None = None
    addresses: list[Address] = Field(default_factory=list)
    role: UserRole = UserRole.CUSTOMER
    is_active: bool = True
    email_verified: bool = False
    last_login_at: datetime | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("email")
    @classmethod
    def _validate_email(cls, value):
        return validate_email_address(value)

    @field_validator("phone")
    @classmethod
    def _validate_phone(cls, value):
        return validate_phone_number(value)

    @field_validator("addresses")
    @classmethod
    def _single_default_address(cls, addresses):
        defaults = [a for a in addresses if a.is_default]
        if len(defaults) > 1:
            for address in addresses:
                address.is_default = address is defaults[0]
        elif addresses and not defaults:
            addresses[0].is_default = True
        return addresses

    @classmethod
    def register(cls, first_name, last_name, email, password_hash, phone=None, role=UserRole.CUSTOMER):
        now = utc_now()
        return cls(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=password_hash,
            phone=phone,
            role=role,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def update_profile(self, **changes):
        """Replace the supplied profile fields; omitted fields keep their values.

        Names are only replaced by non-blank values. A phone of ``None`` clears it.
        """
        allowed = ("first_name", "last_name", "phone", "addresses")
        data = self.model_dump()
        for name, value in changes.items():
            if name not in allowed:
                continue
            if name in ("first_name", "last_name") and not value:
                continue
            data[name] = value
        data["updated_at"] = utc_now()

        updated = type(self).model_validate(data)
        for name in (*allowed, "updated_at"):
            setattr(self, name, getattr(updated, name))

    def change_password_hash(self, password_hash):
        self.password_hash = password_hash
        self.updated_at = utc_now()

    def record_login(self):
        self.last_login_at = utc_now()
        self.updated_at = self.last_login_at

    def public_profile(self) -> dict:
        return self.model_dump(exclude={"password_hash"})
