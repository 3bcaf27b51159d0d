"""Tests for the Customer value object."""

import pytest
from protean.exceptions import ValidationError

from storefront.order.customer import Customer


def _build(**overrides):
    defaults = {
        "name": "Ana Torres",
        "email": "ana@example.com",
        "phone": "+593 99 123 4567",
        "address": "Av. Amazonas 123",
        "city": "Quito",
    }
    defaults.update(overrides)
    return Customer.build(**defaults)


def test_build_customer():
    customer = _build()
    assert customer.name == "Ana Torres"
    assert customer.email == "ana@example.com"
    assert customer.city == "Quito"


def test_fields_are_trimmed():
    customer = _build(name="  Ana Torres ", email=" ana@example.com ", city=" Quito")
    assert customer.name == "Ana Torres"
    assert customer.email == "ana@example.com"
    assert customer.city == "Quito"


def test_phone_is_optional():
    customer = _build(phone="   ")
    assert customer.phone is None
    assert customer.to_snapshot()["phone"] == ""


@pytest.mark.parametrize("field", ["name", "email", "address", "city"])
def test_required_fields(field):
    with pytest.raises(ValidationError) as exc:
        _build(**{field: "   "})
    assert field in exc.value.messages


@pytest.mark.parametrize("email", ["ana.example.com", "ana@example", "ana"])
def test_malformed_email_rejected(email):
    with pytest.raises(ValidationError) as exc:
        _build(email=email)
    assert "email" in exc.value.messages


def test_full_info():
    assert _build().full_info() == "Ana Torres <ana@example.com> - Av. Amazonas 123, Quito"


def test_customers_with_same_details_are_equal():
    assert _build() == _build()
