"""Customer value object — who an order is for and where it ships."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from storefront.domain import storefront


def _clean(value):
    return value.strip() if isinstance(value, str) else value


@storefront.value_object
class Customer:
    """Contact and delivery details captured at checkout.

    Every field is trimmed of surrounding whitespace before validation, so a
    blank name, address or city is rejected as missing. The email only needs
    an ``@`` and a ``.``; deliverability is not our concern.
    """

    name: String(required=True, max_length=255)
    email: String(required=True, max_length=254)
    phone: String(max_length=50)
    address: String(required=True, max_length=500)
    city: String(required=True, max_length=100)

    @invariant.post
    def email_must_look_like_an_address(self):
        if self.email and ("@" not in self.email or "." not in self.email):
            raise ValidationError({"email": [f"Invalid email address: {self.email!r}"]})

    @classmethod
    def build(cls, name=None, email=None, address=None, city=None, phone=None):
        return cls(
            name=_clean(name),
            email=_clean(email),
            phone=_clean(phone) or None,
            address=_clean(address),
            city=_clean(city),
        )

    def full_info(self):
        return f"{self.name} <{self.email}> - {self.address}, {self.city}"

    def to_snapshot(self):
        return {
            "name": self.name,
            "email": self.email,
            "phone": self.phone or "",
            "address": self.address,
            "city": self.city,
        }
