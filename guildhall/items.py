"""Equipment and material items and the fixed-size player inventory."""

from __future__ import annotations

import heapq
import itertools
import threading
from dataclasses import dataclass, replace
from typing import Iterable, Protocol

DEFAULT_SIZE = 20

_WEAPON = 1
_SHOES = 2


class InventoryFullError(Exception):
    """Raised when an item needs an inventory slot and none is free."""


@dataclass
class EquipItem:
    """A piece of equipment owned by a player."""

    unique_id: int
    item_code: int
    equip_type: int
    attack: int
    speed: int
    is_equip: int
    position: int
    use: int = 0

    @classmethod
    def empty(cls) -> EquipItem:
        """Return the placeholder item used where no item exists."""
        return cls(-1, -1, -1, -1, -1, 0, -1, 0)

    def is_empty(self) -> bool:
        return self.unique_id == -1 and self.item_code == -1

    def update_item(self, use: int = 1) -> None:
        self.use = use


@dataclass
class EtcItem:
    """A stack of material items."""

    item_code: int
    item_type: int
    count: int
    position: int
    is_new: bool = False

    @classmethod
    def empty(cls) -> EtcItem:
        """Return the placeholder stack used where no item exists."""
        return cls(-1, -1, -1, -1)

    def update_item(self, count: int = 1) -> None:
        self.count = count


class InventorySource(Protocol):
    def load_equips(self, player_code: int) -> Iterable[EquipItem]: ...

    def load_etcs(self, player_code: int) -> Iterable[EtcItem]: ...


class InventorySink(Protocol):
    def delete_equips(self, player_code: int) -> None: ...

    def insert_equip(self, player_code: int, item: EquipItem) -> None: ...

    def insert_etc(self, player_code: int, item: EtcItem) -> None: ...

    def update_etc(self, player_code: int, item: EtcItem) -> None: ...

    def delete_etc(self, player_code: int, item: EtcItem) -> None: ...


class GoldSink(Protocol):
    def save_gold(self, player_code: int, gold: int) -> None: ...


class Inventory:
    """A player's equipment and materials laid out in numbered slots.

    Free slots are handed out lowest first. Slots only become available
    once :meth:`load` has run.
    """

    def __init__(self, size: int = DEFAULT_SIZE) -> None:
        self.size = size
        self.gold = 0
        self.player_code = -1
        self.equips: dict[int, EquipItem] = {}
        self.etcs: dict[int, EtcItem] = {}
        self.updated_equips: list[EquipItem] = []
        self.updated_etcs: list[EtcItem] = []
        self._free_equip: list[int] = []
        self._free_etc: list[int] = []
        self._weapon_socket = -1
        self._shoe_socket = -1
        self._ids = itertools.count(1)
        self._lock = threading.RLock()

    def load(self, store: InventorySource, player_code: int, gold: int) -> None:
        """Fill the inventory from ``store`` and work out the free slots."""
        self.player_code = player_code
        used_equip: set[int] = set()
        for item in store.load_equips(player_code):
            item.use = 0
            self.add_equip(item)
            if item.position >= 0:
                used_equip.add(item.position)

        used_etc: set[int] = set()
        for item in store.load_etcs(player_code):
            self.add_etc(item)
            if item.position >= 0:
                used_etc.add(item.position)

        self.gold = gold
        with self._lock:
            for slot in range(self.size):
                if slot not in used_equip:
                    heapq.heappush(self._free_equip, slot)
                if slot not in used_etc:
                    heapq.heappush(self._free_etc, slot)

    def has_equip(self, unique_id: int) -> bool:
        return unique_id in self.equips

    def use_equip(self, unique_id: int) -> bool:
        """Remove an equipment item, freeing its slot."""
        with self._lock:
            item = self.equips.pop(unique_id, None)
            if item is None:
                return False
            if item.position >= 0:
                heapq.heappush(self._free_equip, item.position)
            return True

    def equip(self, unique_id: int, equipped: int) -> EquipItem:
        """Put an item on (``equipped == 1``) or take it off (``0``).

        Returns the item that was displaced from the socket, or an empty
        item when nothing was displaced.
        """
        with self._lock:
            item = self.equips.get(unique_id)
            if item is None:
                return EquipItem.empty()
            item.is_equip = equipped
            if equipped == 1:
                socket = self._weapon_socket
                if item.equip_type == _WEAPON:
                    socket = self._weapon_socket
                    self._weapon_socket = item.unique_id
                elif item.equip_type == _SHOES:
                    socket = self._shoe_socket
                    self._shoe_socket = item.unique_id
                slot = item.position
                item.position = -1
                if socket > 0:
                    previous = self.equips.get(socket)
                    if previous is not None and previous.equip_type == item.equip_type:
                        previous.is_equip = 0
                        previous.position = slot
                        return previous
                else:
                    heapq.heappush(self._free_equip, slot)
            elif equipped == 0:
                if item.equip_type == _WEAPON:
                    self._weapon_socket = -1
                elif item.equip_type == _SHOES:
                    self._shoe_socket = -1
                if not self._free_equip:
                    raise InventoryFullError("no free equipment slot")
                item.position = heapq.heappop(self._free_equip)
            return EquipItem.empty()

    def is_equipped(self, unique_id: int, equipped: int) -> bool:
        with self._lock:
            item = self.equips.get(unique_id)
            return item is not None and item.is_equip == equipped

    def add_equip(self, item: EquipItem) -> EquipItem:
        """Store ``item`` and return it with its slot and id assigned.

        When the inventory is full the item comes back unchanged, with a
        negative position, and is not stored.
        """
        with self._lock:
            if item.position < 0 and item.is_equip == 0:
                if not self._free_equip:
                    return item
                item.position = heapq.heappop(self._free_equip)
            item.unique_id = next(self._ids)
            self.equips.setdefault(item.unique_id, replace(item))
            if item.is_equip == 1:
                if item.equip_type == _WEAPON:
                    self._weapon_socket = item.unique_id
                elif item.equip_type == _SHOES:
                    self._shoe_socket = item.unique_id
            return item

    def has_etc(self, item_code: int, count: int = 1) -> bool:
        with self._lock:
            stack = self.etcs.get(item_code)
            return stack is not None and stack.count >= count

    def use_etc(self, item_code: int, count: int = 1) -> bool:
        with self._lock:
            if not self.has_etc(item_code, count):
                return False
            self.etcs[item_code].count -= count
            return True

    def add_etc(self, item: EtcItem) -> EtcItem:
        """Store a material stack, merging it into an existing one.

        When the inventory is full the stack comes back unchanged, with a
        negative position, and is not stored.
        """
        with self._lock:
            if item.position < 0:
                if not self._free_etc:
                    return item
                item.position = heapq.heappop(self._free_etc)
            existing = self.etcs.get(item.item_code)
            if existing is not None:
                existing.update_item(existing.count + item.count)
                return existing
            stored = replace(item)
            self.etcs[item.item_code] = stored
            return stored

    def has_gold(self, amount: int) -> bool:
        return self.gold >= amount

    def use_gold(self, amount: int) -> bool:
        if not self.has_gold(amount):
            return False
        self.gold -= amount
        return True

    def add_gold(self, amount: int) -> None:
        self.gold += amount

    def save(self, store: InventorySink, accounts: GoldSink) -> None:
        """Write the inventory and gold back to storage."""
        code = self.player_code
        store.delete_equips(code)
        for item in self.equips.values():
            if item.use == 0:
                store.insert_equip(code, item)
        for item in self.etcs.values():
            if item.is_new:
                if item.count > 0:
                    store.insert_etc(code, item)
            elif item.count == 0:
                store.delete_etc(code, item)
            else:
                store.update_etc(code, item)
        accounts.save_gold(code, self.gold)

    def reset_updates(self) -> None:
        self.updated_equips.clear()
        self.updated_etcs.clear()

    def add_mail_equip(self, item: EquipItem) -> bool:
        """Take an equipment item out of mail into a free slot."""
        if not self._free_equip:
            return False
        item.position = -1
        self.updated_equips.append(self.add_equip(item))
        return True

    def add_mail_etc(self, item: EtcItem) -> bool:
        """Take a material stack out of mail into a free slot."""
        if not self._free_etc:
            return False
        item.position = -1
        self.updated_etcs.append(self.add_etc(item))
        return True