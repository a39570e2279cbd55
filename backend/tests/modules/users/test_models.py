import pytest

from modules.users.models import (
    Address,
    Avatar,
    LegacyAddress,
    UserListResponse,
    UserRecord,
    UserView,
    WishlistToggleResult,
)


def make_record(**overrides) -> UserRecord:
    data = {
        "id": "user-123",
        "username": "al",
        "email": "a@b.com",
        "password_hash": "$2b$04$secret",
        "refresh_token": "refresh-secret",
    }
    data.update(overrides)
    return UserRecord(**data)


class TestAddress:
    def test_defaults_country(self):
        assert Address().country == "Australia"

    def test_store_shape_is_camel_case(self):
        stored = Address(zip_code="2000").to_store()
        assert stored["zipCode"] == "2000"
        assert "zip_code" not in stored


class TestUserView:
    def test_strips_secrets(self):
        view = UserView.from_record(make_record())
        dumped = view.model_dump()
        assert "password_hash" not in dumped
        assert "refresh_token" not in dumped

    def test_legacy_address_passed_through_as_string(self):
        view = UserView.from_record(make_record(address=LegacyAddress(raw="12 Garden Lane")))
        assert view.address == "12 Garden Lane"

    def test_structured_address_kept(self):
        view = UserView.from_record(make_record(address=Address(city="X")))
        assert view.address == Address(city="X")

    def test_role_and_avatar(self):
        view = UserView.from_record(
            make_record(role="admin", avatar=Avatar(store_id="a/b", url="https://x/a/b"))
        )
        assert view.role == "admin"
        assert view.avatar.store_id == "a/b"


class TestUserRecord:
    def test_secrets_not_in_repr(self):
        text = repr(make_record())
        assert "secret" not in text

    def test_has_legacy_address(self):
        assert make_record(address=LegacyAddress(raw="x")).has_legacy_address
        assert not make_record(address=Address()).has_legacy_address


class TestResults:
    @pytest.mark.parametrize("action,message", [
        ("added", "Product added to wishlist"),
        ("removed", "Product removed from wishlist"),
    ])
    def test_wishlist_message(self, action, message):
        result = WishlistToggleResult(action=action, product_id="p1", wishlist=[])
        assert result.message == message

    @pytest.mark.parametrize("total,limit,pages", [(0, 10, 0), (10, 10, 1), (11, 10, 2)])
    def test_total_pages(self, total, limit, pages):
        response = UserListResponse(items=[], page=1, limit=limit, total=total)
        assert response.total_pages == pages
