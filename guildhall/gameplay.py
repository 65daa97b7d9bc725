"""In-game inventory actions: selling, equipping, loot drops and update lists."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, Iterable

from .items import EquipItem, EtcItem, Inventory
from .mail import Mailbox


@dataclass
class Character:
    """A character in play: its identity, inventory and, once loaded, mailbox."""

    player_code: int
    inventory: Inventory
    uuid: int = 0
    name: str = ""
    mailbox: Mailbox | None = None


@dataclass
class SellReply:
    """What was sold and the gold the character holds afterwards."""

    equips: list[int] = field(default_factory=list)
    etcs: list[tuple[int, int]] = field(default_factory=list)
    gold: int = 0
    result: bool = True


@dataclass
class InventoryUpdate:
    """Items that changed place in the inventory, and the current gold."""

    equips: list[EquipItem] = field(default_factory=list)
    etcs: list[EtcItem] = field(default_factory=list)
    gold: int = 0


def sell_items(
    character: Character,
    equip_ids: Iterable[int],
    etc_items: Iterable[tuple[int, int]],
    equip_price: Callable[[int], int],
    etc_price: Callable[[int], int],
) -> SellReply:
    """Sell equipment by unique id and materials by ``(item code, count)``.

    Prices are looked up by item code. Only what could be sold is listed in
    the reply; the proceeds are added to the inventory's gold.
    """
    inventory = character.inventory
    reply = SellReply()
    earned = 0

    for unique_id in equip_ids:
        item = inventory.equips.get(unique_id)
        if item is None:
            continue
        item_code = item.item_code
        if inventory.use_equip(unique_id):
            earned += equip_price(item_code)
            reply.equips.append(unique_id)

    for item_code, count in etc_items:
        if inventory.use_etc(item_code, count):
            earned += etc_price(item_code) * count
            reply.etcs.append((item_code, count))

    inventory.add_gold(earned)
    reply.gold = inventory.gold
    return reply


def update_equipment(
    character: Character, changes: Iterable[tuple[int, int]]
) -> list[EquipItem]:
    """Put items on or take them off, given ``(unique id, is_equip)`` pairs.

    Items already in the requested state are skipped. Returns the changed
    items, each followed by the item it displaced from its socket, if any.
    """
    inventory = character.inventory
    changed: list[EquipItem] = []
    for unique_id, equipped in changes:
        if inventory.is_equipped(unique_id, equipped):
            continue
        displaced = inventory.equip(unique_id, equipped)
        target = inventory.equips.get(unique_id)
        if target is None:
            continue
        changed.append(replace(target))
        if displaced.unique_id > 0:
            changed.append(replace(displaced))
    return changed


def inventory_updates(inventory: Inventory) -> InventoryUpdate:
    """Collect items placed since the last call, then clear the pending lists."""
    update = InventoryUpdate(
        equips=[replace(item) for item in inventory.updated_equips if item.position >= 0],
        etcs=[replace(item) for item in inventory.updated_etcs if item.position >= 0],
        gold=inventory.gold,
    )
    inventory.reset_updates()
    return update


def drop_items(
    character: Character,
    equips: Iterable[EquipItem],
    etcs: Iterable[EtcItem],
    gold: int,
    overflow: Callable[[int, EquipItem | EtcItem], None],
) -> InventoryUpdate:
    """Give loot to a character.

    Items that find a slot are listed in the update; items that do not are
    handed to ``overflow`` with the character's player code, to be mailed.
    """
    inventory = character.inventory
    update = InventoryUpdate()

    for drop in equips:
        item = inventory.add_equip(replace(drop))
        if item.position >= 0:
            update.equips.append(replace(item))
        else:
            overflow(character.player_code, item)

    for drop in etcs:
        item = inventory.add_etc(replace(drop))
        if item.position >= 0:
            update.etcs.append(replace(item))
        else:
            overflow(character.player_code, item)

    inventory.add_gold(gold)
    update.gold = inventory.gold
    return update