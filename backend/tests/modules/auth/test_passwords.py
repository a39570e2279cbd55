import pytest

from modules.auth.passwords import PasswordHasher


class TestPasswordHasher:
    @pytest.fixture
    def hasher(self):
        return PasswordHasher(rounds=4)

    def test_hash_differs_from_plaintext(self, hasher):
        digest = hasher.hash("password123")
        assert digest != "password123"
        assert digest.startswith("$2")

    def test_hash_is_salted(self, hasher):
        assert hasher.hash("password123") != hasher.hash("password123")

    def test_verify_matches(self, hasher):
        assert hasher.verify("password123", hasher.hash("password123"))

    def test_verify_rejects_wrong_password(self, hasher):
        assert not hasher.verify("password124", hasher.hash("password123"))

    def test_verify_rejects_malformed_digest(self, hasher):
        assert not hasher.verify("password123", "not-a-bcrypt-hash")

    def test_verify_rejects_empty_inputs(self, hasher):
        assert not hasher.verify("", hasher.hash("password123"))
        assert not hasher.verify("password123", None)

    def test_rounds_recorded_in_digest(self, hasher):
        assert hasher.rounds == 4
        assert hasher.hash("x" * 8).split("$")[2] == "04"

    @pytest.mark.asyncio
    async def test_async_roundtrip(self, hasher):
        digest = await hasher.hash_async("password123")
        assert await hasher.verify_async("password123", digest)
        assert not await hasher.verify_async("nope", digest)
