"""Tests for client/hints.py."""

from client.hints import FileHintStore, HintStore, MemoryHintStore


class TestMemoryHintStore:
    def test_round_trip_and_clear(self):
        hints = MemoryHintStore(token="abc")
        hints.set_user({"id": 1})

        assert isinstance(hints, HintStore)
        assert hints.get_token() == "abc"
        assert hints.get_user() == {"id": 1}

        hints.clear()
        assert hints.get_token() is None
        assert hints.get_user() is None


class TestFileHintStore:
    def test_persists_between_instances(self, tmp_path):
        path = tmp_path / "trak" / "session.json"
        FileHintStore(path).set_token("abc")
        FileHintStore(path).set_user({"id": 1, "username": "alex.morgan"})

        hints = FileHintStore(path)
        assert hints.get_token() == "abc"
        assert hints.get_user()["username"] == "alex.morgan"

    def test_setting_none_removes_key(self, tmp_path):
        hints = FileHintStore(tmp_path / "session.json")
        hints.set_token("abc")
        hints.set_user({"id": 1})

        hints.set_token(None)

        assert hints.get_token() is None
        assert hints.get_user() == {"id": 1}

    def test_missing_file(self, tmp_path):
        hints = FileHintStore(tmp_path / "none.json")
        assert hints.get_token() is None
        assert hints.get_user() is None

    def test_corrupt_file_is_empty(self, tmp_path):
        path = tmp_path / "session.json"
        path.write_text("{not json", encoding="utf-8")

        assert FileHintStore(path).get_token() is None

    def test_clear_deletes_file(self, tmp_path):
        hints = FileHintStore(tmp_path / "session.json")
        hints.set_token("abc")

        hints.clear()

        assert not hints.path.exists()
        hints.clear()
