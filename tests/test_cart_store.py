"""Tests for the cart store"""

import json

from storefront.database.carts import CartStore
from storefront.database.storage import JsonFileStorage, MemoryStorage


class TestAddLine:
    """add_line merges variants and keeps totals consistent"""

    def test_add_to_empty_cart(self, cart, make_line):
        state = cart.add_line(make_line(quantity=2))

        assert len(state.items) == 1
        assert state.total_items == 2
        assert state.total_amount == 200.0

    def test_same_variant_merges_quantities(self, cart, make_line):
        cart.add_line(make_line(id=1, quantity=2, price=100))
        state = cart.add_line(make_line(id=1, quantity=3, price=100))

        assert len(state.items) == 1
        assert state.items[0].quantity == 5
        assert state.total_amount == 500.0

    def test_merge_keeps_existing_price(self, cart, make_line):
        cart.add_line(make_line(quantity=1, price=100))
        state = cart.add_line(make_line(quantity=1, price=80))

        assert state.items[0].price == 100
        assert state.total_amount == 200.0

    def test_distinct_variants_stay_separate(self, cart, make_line):
        cart.add_line(make_line(id=1, size="M", color="Black", quantity=1))
        cart.add_line(make_line(id=1, size="L", color="Black", quantity=2))
        cart.add_line(make_line(id=1, size="M", color="Brown", quantity=3))
        state = cart.add_line(make_line(id=2, size="M", color="Black", quantity=4))

        assert len(state.items) == 4
        assert state.total_items == 10
        assert len({item.key for item in state.items}) == 4

    def test_added_line_is_copied(self, cart, make_line):
        line = make_line(quantity=1)
        cart.add_line(line)
        cart.add_line(make_line(quantity=1))

        assert line.quantity == 1
        assert cart.lines[0].quantity == 2


class TestRemoveAndQuantity:
    """Removal and quantity changes match on product id"""

    def test_remove_drops_every_variant_of_product(self, cart, make_line):
        cart.add_line(make_line(id=1, size="M"))
        cart.add_line(make_line(id=1, size="L"))
        cart.add_line(make_line(id=2, price=50))

        state = cart.remove_line(1)

        assert [item.product_id for item in state.items] == [2]
        assert state.total_items == 1
        assert state.total_amount == 50.0

    def test_remove_from_empty_cart_is_noop(self, cart):
        state = cart.remove_line(1)

        assert state.items == []
        assert state.total_items == 0
        assert state.total_amount == 0

    def test_set_quantity_updates_first_matching_line(self, cart, make_line):
        cart.add_line(make_line(id=1, size="M", quantity=1))
        cart.add_line(make_line(id=1, size="L", quantity=1))

        state = cart.set_quantity(1, 4)

        assert [item.quantity for item in state.items] == [4, 1]
        assert state.total_items == 5

    def test_set_quantity_zero_equals_remove(self, storage, make_line):
        by_quantity = CartStore(storage, "a")
        by_remove = CartStore(storage, "b")
        for store in (by_quantity, by_remove):
            store.add_line(make_line(id=1, size="M"))
            store.add_line(make_line(id=1, size="L"))
            store.add_line(make_line(id=2))

        by_quantity.set_quantity(1, 0)
        by_remove.remove_line(1)

        assert by_quantity.state == by_remove.state

    def test_set_negative_quantity_removes(self, cart, make_line):
        cart.add_line(make_line(id=1))

        assert cart.set_quantity(1, -3).items == []

    def test_set_quantity_unknown_product_is_noop(self, cart, make_line):
        cart.add_line(make_line(id=1, quantity=2))

        state = cart.set_quantity(99, 5)

        assert state.total_items == 2


class TestUpdateOptions:
    """Option updates touch the first line of a product"""

    def test_update_size_and_color(self, cart, make_line):
        cart.add_line(make_line(id=1, size="M", color="Black"))

        state = cart.update_options(1, size="XL", color="Brown")

        assert (state.items[0].size, state.items[0].color) == ("XL", "Brown")

    def test_missing_option_keeps_previous_value(self, cart, make_line):
        cart.add_line(make_line(id=1, size="M", color="Black"))

        state = cart.update_options(1, size="L")

        assert (state.items[0].size, state.items[0].color) == ("L", "Black")

    def test_only_first_line_changes(self, cart, make_line):
        cart.add_line(make_line(id=1, size="M"))
        cart.add_line(make_line(id=1, size="L"))

        state = cart.update_options(1, color="Tan")

        assert [item.color for item in state.items] == ["Tan", "Black"]


class TestClearAndRestore:
    """Bulk operations"""

    def test_clear(self, cart, make_line):
        cart.add_line(make_line(quantity=3))

        state = cart.clear()

        assert state.items == []
        assert state.total_items == 0
        assert state.total_amount == 0

    def test_restore_recomputes_totals(self, cart, make_line):
        lines = [
            make_line(id=1, quantity=2, price=100),
            make_line(id=2, quantity=1, price=45.5),
        ]

        state = cart.restore(lines)

        assert state.total_items == 3
        assert state.total_amount == 245.5

    def test_restore_replaces_contents(self, cart, make_line):
        cart.add_line(make_line(id=7))

        state = cart.restore([make_line(id=1)])

        assert [item.product_id for item in state.items] == [1]


class TestIsInCart:
    """Exact variant lookup"""

    def test_matches_exact_variant(self, cart, make_line):
        cart.add_line(make_line(id=1, size="M", color="Black"))

        assert cart.is_in_cart(1, "M", "Black")
        assert not cart.is_in_cart(1, "L", "Black")
        assert not cart.is_in_cart(2, "M", "Black")

    def test_line_without_options(self, cart, make_line):
        cart.add_line(make_line(id=3, size=None, color=None))

        assert cart.is_in_cart(3)


class TestPersistence:
    """Every mutation writes the line array to storage"""

    def test_mutation_writes_wire_names(self, storage, cart, make_line):
        cart.add_line(make_line(id=1, original_price=150, quantity=2))

        saved = json.loads(storage.get_item(cart.key))

        assert saved[0]["id"] == 1
        assert saved[0]["originalPrice"] == 150
        assert saved[0]["quantity"] == 2

    def test_noop_mutation_still_writes(self, storage, cart):
        cart.remove_line(42)

        assert json.loads(storage.get_item(cart.key)) == []

    def test_load_restores_saved_cart(self, storage, cart, make_line):
        cart.add_line(make_line(id=1, quantity=2))
        cart.add_line(make_line(id=2, quantity=1, price=60))

        reloaded = CartStore(storage, cart.key)
        state = reloaded.load()

        assert state.total_items == 3
        assert state.total_amount == 260.0

    def test_load_corrupt_storage_yields_empty_cart(self, storage):
        storage.set_item("broken", "{not json")

        state = CartStore(storage, "broken").load()

        assert state.items == []
        assert state.total_items == 0

    def test_load_invalid_lines_yields_empty_cart(self, storage):
        storage.set_item("invalid", json.dumps([{"id": "abc", "quantity": -1}]))

        assert CartStore(storage, "invalid").load().items == []

    def test_load_undecodable_file_yields_empty_cart(self, tmp_path):
        (tmp_path / "undecodable.json").write_bytes(b"\x80\x81")

        state = CartStore(JsonFileStorage(str(tmp_path)), "undecodable").load()

        assert state.items == []
        assert state.total_items == 0

    def test_storage_write_failure_is_swallowed(self, make_line):
        class ReadOnlyStorage(MemoryStorage):
            def set_item(self, key, value):
                raise OSError("disk full")

        store = CartStore(ReadOnlyStorage(), "readonly")
        state = store.add_line(make_line(quantity=2))

        assert state.total_items == 2
