"""Tests for the MenuItem and Category aggregates."""

import pytest
from canteen.catalogue.category import Category
from canteen.catalogue.menu_item import DEFAULT_PREPARATION_TIME, MenuItem
from protean.exceptions import ValidationError


def _make_item(**overrides):
    params = {
        "name": " Masala Dosa ",
        "description": "Crispy rice crepe",
        "category_id": "cat-001",
        "price": 60.0,
    }
    params.update(overrides)
    return MenuItem.create(**params)


class TestMenuItem:
    def test_create_defaults(self):
        item = _make_item()
        assert item.name == "Masala Dosa"
        assert item.is_available is True
        assert item.preparation_time == DEFAULT_PREPARATION_TIME
        assert item.image_url is None

    def test_negative_price_is_rejected(self):
        with pytest.raises(ValidationError):
            _make_item(price=-1.0)

    def test_update_details_ignores_missing_values(self):
        item = _make_item()
        item.update_details(price=75.0, name=None)
        assert item.price == 75.0
        assert item.name == "Masala Dosa"

    def test_toggle_availability_flips_and_returns_state(self):
        item = _make_item()
        assert item.toggle_availability() is False
        assert item.is_available is False
        assert item.toggle_availability() is True

    def test_replace_image(self):
        item = _make_item()
        item.replace_image("https://img/menu-items/1", "menu-items/1")
        assert item.image_public_id == "menu-items/1"


class TestCategory:
    def test_create_strips_name(self):
        category = Category.create(name="  Snacks ", description="Light bites")
        assert category.name == "Snacks"

    def test_name_is_limited_to_fifty_characters(self):
        with pytest.raises(ValidationError):
            Category.create(name="x" * 51)

    def test_update_details(self):
        category = Category.create(name="Snacks")
        category.update_details(description="Light bites")
        assert category.name == "Snacks"
        assert category.description == "Light bites"
