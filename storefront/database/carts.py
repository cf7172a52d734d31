"""Cart storage for the storefront"""

import json
import logging
from typing import Iterable, Optional

from pydantic import TypeAdapter, ValidationError

from ..models.cart import CartLine, CartState
from .storage import KeyValueStorage

logger = logging.getLogger(__name__)

_lines_adapter = TypeAdapter(list[CartLine])


class CartStore:
    """
    Authoritative state of one pending order.

    Lines are keyed by (product_id, size, color) when added, but removal,
    quantity and option updates match on product_id alone.
    Every mutation writes the full line list to storage.
    """

    def __init__(self, storage: KeyValueStorage, key: str):
        self.storage = storage
        self.key = key
        self.state = CartState()

    @property
    def lines(self) -> list[CartLine]:
        return self.state.items

    @property
    def total_items(self) -> int:
        return self.state.total_items

    @property
    def total_amount(self) -> float:
        return self.state.total_amount

    # ==================== Mutations ====================

    def add_line(self, line: CartLine) -> CartState:
        """Add a line, merging quantities with an existing variant"""
        existing_line = next(
            (item for item in self.state.items if item.key == line.key),
            None,
        )

        if existing_line:
            existing_line.quantity += line.quantity
        else:
            self.state.items.append(line.model_copy())

        return self._commit()

    def remove_line(self, product_id: int) -> CartState:
        """Remove every line of a product, whatever its size or color"""
        self.state.items = [
            item for item in self.state.items if item.product_id != product_id
        ]
        return self._commit()

    def set_quantity(self, product_id: int, quantity: int) -> CartState:
        """Set the quantity of a product's first line (<= 0 removes it)"""
        if quantity <= 0:
            return self.remove_line(product_id)

        item = self._find(product_id)
        if item:
            item.quantity = quantity

        return self._commit()

    def update_options(
        self,
        product_id: int,
        size: Optional[str] = None,
        color: Optional[str] = None,
    ) -> CartState:
        """Change size/color of a product's first line; empty values keep the old option"""
        item = self._find(product_id)
        if item:
            item.size = size or item.size
            item.color = color or item.color

        return self._commit()

    def clear(self) -> CartState:
        """Clear all items from cart"""
        self.state = CartState()
        return self._commit()

    def restore(self, lines: Iterable[CartLine]) -> CartState:
        """Replace the cart contents and recompute totals from scratch"""
        self.state = CartState(items=[line.model_copy() for line in lines])
        return self._commit()

    # ==================== Queries ====================

    def is_in_cart(
        self,
        product_id: int,
        size: Optional[str] = None,
        color: Optional[str] = None,
    ) -> bool:
        """Check for an exact (product, size, color) line"""
        return any(item.key == (product_id, size, color) for item in self.state.items)

    # ==================== Persistence ====================

    def load(self) -> CartState:
        """
        Rehydrate the cart from storage.

        Unreadable data is logged and treated as an empty cart.
        """
        try:
            saved_cart = self.storage.get_item(self.key)
            if not saved_cart:
                return self.state
            lines = _lines_adapter.validate_python(json.loads(saved_cart))
        except (OSError, ValueError, ValidationError) as e:
            logger.error(f"Error loading cart {self.key} from storage: {e}")
            return self.state

        self.state = CartState(items=lines)
        self._recalculate_totals()
        return self.state

    def _save(self) -> None:
        payload = json.dumps(
            [item.model_dump(mode="json", by_alias=True) for item in self.state.items]
        )
        try:
            self.storage.set_item(self.key, payload)
        except OSError as e:
            logger.warning(f"Failed to persist cart {self.key}: {e}")

    # ==================== Internals ====================

    def _find(self, product_id: int) -> Optional[CartLine]:
        return next(
            (item for item in self.state.items if item.product_id == product_id),
            None,
        )

    def _commit(self) -> CartState:
        self._recalculate_totals()
        self._save()
        return self.state

    def _recalculate_totals(self) -> None:
        """Recalculate cart totals"""
        self.state.total_items = sum(item.quantity for item in self.state.items)
        self.state.total_amount = sum((item.line_total for item in self.state.items), 0.0)
