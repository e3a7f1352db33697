"""Inventory and Wallet — consumable food items and currency.

Shop screens live in the front end; the core keeps the price list and
the player's items and bills.
"""

from __future__ import annotations

from dataclasses import dataclass, field

BURGER = "burger"
ICE_CREAM = "ice_cream"
VEGETABLES = "vegetables"
PREMIUM_NUTRIENTS = "premium_nutrients"
SPECIAL_TREAT = "special_treat"

# Shop price in Bonsai Bills per item.
SHOP_PRICES: dict[str, int] = {
    BURGER: 5,
    ICE_CREAM: 8,
    VEGETABLES: 10,
    PREMIUM_NUTRIENTS: 20,
    SPECIAL_TREAT: 15,
}


def _starter_items() -> dict[str, int]:
    return {
        BURGER: 3,
        ICE_CREAM: 2,
        VEGETABLES: 5,
        PREMIUM_NUTRIENTS: 1,
        SPECIAL_TREAT: 0,
    }


@dataclass
class Inventory:
    """Item counts keyed by item id.

    Attributes:
        items: Quantity owned per item id (never negative).
    """

    items: dict[str, int] = field(default_factory=_starter_items)

    def count(self, item_id: str) -> int:
        """Return how many of ``item_id`` are owned."""
        return self.items.get(item_id, 0)

    def add(self, item_id: str, quantity: int = 1) -> None:
        """Add items; non-positive quantities are ignored."""
        if quantity <= 0:
            return
        self.items[item_id] = self.count(item_id) + quantity

    def use(self, item_id: str, quantity: int = 1) -> bool:
        """Consume items if enough are owned.

        Returns:
            True if the items were consumed.
        """
        if quantity <= 0 or self.count(item_id) < quantity:
            return False
        self.items[item_id] -= quantity
        return True


@dataclass
class Wallet:
    """Bonsai Bills balance.

    Attributes:
        bills: Current balance (never negative).
    """

    bills: int = 10

    def can_afford(self, cost: int) -> bool:
        return 0 <= cost <= self.bills

    def earn(self, amount: int) -> None:
        if amount > 0:
            self.bills += amount

    def spend(self, amount: int) -> bool:
        """Deduct ``amount`` if affordable.

        Returns:
            True if the bills were spent.
        """
        if not self.can_afford(amount):
            return False
        self.bills -= amount
        return True
