"""Tests for cart storage backends and sessions"""

import os
import uuid

from storefront.core.session import CartSessionManager
from storefront.database.storage import JsonFileStorage, MemoryStorage, create_storage


class TestMemoryStorage:
    """In-memory key/value store"""

    def test_set_get_remove(self):
        storage = MemoryStorage()
        storage.set_item("k", "v")
        assert storage.get_item("k") == "v"

        storage.remove_item("k")
        assert storage.get_item("k") is None

    def test_remove_missing_key(self):
        MemoryStorage().remove_item("missing")


class TestJsonFileStorage:
    """One file per key"""

    def test_values_survive_new_instance(self, tmp_path):
        JsonFileStorage(str(tmp_path)).set_item("atlantic-leather-cart:abc", "[]")

        assert JsonFileStorage(str(tmp_path)).get_item("atlantic-leather-cart:abc") == "[]"

    def test_key_is_made_filename_safe(self, tmp_path):
        storage = JsonFileStorage(str(tmp_path))
        storage.set_item("cart:../../etc", "[]")

        assert os.listdir(tmp_path) == ["cart_.._.._etc.json"]

    def test_no_temp_files_left_behind(self, tmp_path):
        storage = JsonFileStorage(str(tmp_path))
        storage.set_item("a", "1")
        storage.set_item("a", "2")

        assert os.listdir(tmp_path) == ["a.json"]
        assert storage.get_item("a") == "2"

    def test_remove(self, tmp_path):
        storage = JsonFileStorage(str(tmp_path))
        storage.set_item("a", "1")
        storage.remove_item("a")
        storage.remove_item("a")

        assert storage.get_item("a") is None

    def test_create_storage(self, tmp_path):
        assert isinstance(create_storage(None), MemoryStorage)
        assert isinstance(create_storage(str(tmp_path / "carts")), JsonFileStorage)


class TestCartSessionManager:
    """One cart per session, keyed under the storage key"""

    def test_new_session_gets_uuid(self, session_manager):
        session = session_manager.get_or_create()

        uuid.UUID(session.session_id)
        assert session.cart.key == f"atlantic-leather-cart:{session.session_id}"

    def test_existing_session_is_reused(self, session_manager, make_line):
        session = session_manager.get_or_create()
        session.cart.add_line(make_line())

        again = session_manager.get_or_create(session.session_id)

        assert again is session
        assert again.cart.total_items == 1

    def test_invalid_session_id_gets_fresh_session(self, session_manager):
        session = session_manager.get_or_create("not-a-uuid")

        assert session.session_id != "not-a-uuid"

    def test_persisted_cart_is_rehydrated(self, storage, make_line):
        first = CartSessionManager(storage)
        session = first.get_or_create()
        session.cart.add_line(make_line(quantity=3))

        restarted = CartSessionManager(storage)
        restored = restarted.get_or_create(session.session_id)

        assert restored.cart.total_items == 3

    def test_delete_removes_persisted_cart(self, storage, session_manager, make_line):
        session = session_manager.get_or_create()
        session.cart.add_line(make_line())

        assert session_manager.delete(session.session_id)
        assert storage.get_item(session.cart.key) is None
        assert session_manager.get_session(session.session_id) is None

    def test_cleanup_old_sessions(self, session_manager):
        from datetime import datetime, timedelta

        stale = session_manager.get_or_create()
        fresh = session_manager.get_or_create()
        stale.updated_at = datetime.utcnow() - timedelta(hours=48)

        assert session_manager.cleanup_old_sessions(max_age_hours=24) == 1
        assert session_manager.get_session(fresh.session_id) is fresh

    def test_undecodable_cart_file_gets_empty_cart(self, tmp_path):
        session_id = str(uuid.uuid4())
        (tmp_path / f"atlantic-leather-cart_{session_id}.json").write_bytes(b"\x80\x81")

        session = CartSessionManager(JsonFileStorage(str(tmp_path))).get_or_create(session_id)

        assert session.session_id == session_id
        assert session.cart.total_items == 0
