from modules.users.passwords import hash_password, verify_password


class TestPasswords:
    def test_hash_is_not_plaintext(self):
        hashed = hash_password("password123")
        assert hashed != "password123"
        assert hashed.startswith("$2")

    def test_verify_matches(self):
        assert verify_password("password123", hash_password("password123")) is True

    def test_verify_rejects_wrong_password(self):
        assert verify_password("wrong", hash_password("password123")) is False

    def test_verify_rejects_empty_hash(self):
        assert verify_password("password123", "") is False

    def test_verify_rejects_non_bcrypt_value(self):
        assert verify_password("password123", "password123") is False
