import pytest

from guildhall.items import (
    DEFAULT_SIZE,
    EquipItem,
    EtcItem,
    Inventory,
    InventoryFullError,
)


class FakeStore:
    def __init__(self, equips=(), etcs=()):
        self.equips = list(equips)
        self.etcs = list(etcs)
        self.calls = []

    def load_equips(self, player_code):
        return iter(self.equips)

    def load_etcs(self, player_code):
        return iter(self.etcs)

    def delete_equips(self, player_code):
        self.calls.append(("delete_equips", player_code))

    def insert_equip(self, player_code, item):
        self.calls.append(("insert_equip", player_code, item.item_code))

    def insert_etc(self, player_code, item):
        self.calls.append(("insert_etc", player_code, item.item_code))

    def update_etc(self, player_code, item):
        self.calls.append(("update_etc", player_code, item.item_code))

    def delete_etc(self, player_code, item):
        self.calls.append(("delete_etc", player_code, item.item_code))


class FakeAccounts:
    def __init__(self):
        self.saved = []

    def save_gold(self, player_code, gold):
        self.saved.append((player_code, gold))


def fresh(size=DEFAULT_SIZE, gold=100, store=None):
    inv = Inventory(size)
    inv.load(store or FakeStore(), 7, gold)
    return inv


def weapon(code=11):
    return EquipItem(-1, code, 1, 5, 3, 0, -1, 0)


def test_empty_equip_item():
    item = EquipItem.empty()
    assert item.is_empty()
    assert (item.unique_id, item.item_code, item.position, item.is_equip) == (-1, -1, -1, 0)


def test_equip_update_item_default():
    item = weapon()
    item.update_item()
    assert item.use == 1
    item.update_item(0)
    assert item.use == 0


def test_empty_etc_item_and_update():
    etc = EtcItem.empty()
    assert (etc.item_code, etc.item_type, etc.count, etc.position, etc.is_new) == (-1, -1, -1, -1, False)
    etc.update_item()
    assert etc.count == 1


def test_first_add_takes_lowest_slot():
    inv = fresh()
    item = inv.add_equip(weapon())
    assert item.position == 0
    assert inv.has_equip(item.unique_id)
    assert inv.equips[item.unique_id] == item


def test_ids_and_positions_are_distinct():
    inv = fresh()
    added = [inv.add_equip(weapon(i)) for i in range(5)]
    assert len({i.unique_id for i in added}) == 5
    assert len({i.position for i in added}) == 5
    assert all(0 <= i.position < DEFAULT_SIZE for i in added)


def test_full_inventory_returns_unplaced_item():
    inv = fresh(size=2)
    inv.add_equip(weapon(1))
    inv.add_equip(weapon(2))
    extra = inv.add_equip(weapon(3))
    assert extra.position < 0
    assert len(inv.equips) == 2
    assert inv.add_mail_equip(weapon(4)) is False


def test_without_load_there_are_no_slots():
    inv = Inventory()
    assert inv.add_equip(weapon()).position == -1
    assert inv.equips == {}


def test_use_equip_frees_slot():
    inv = fresh()
    first = inv.add_equip(weapon(1))
    inv.add_equip(weapon(2))
    slot = first.position
    assert inv.use_equip(first.unique_id)
    assert not inv.has_equip(first.unique_id)
    assert inv.add_equip(weapon(3)).position == slot
    assert inv.use_equip(first.unique_id) is False


def test_equip_and_swap():
    inv = fresh()
    a = inv.add_equip(weapon(1))
    b = inv.add_equip(weapon(2))
    b_slot = b.position

    displaced = inv.equip(a.unique_id, 1)
    assert displaced.is_empty()
    assert inv.is_equipped(a.unique_id, 1)
    assert inv.equips[a.unique_id].position == -1

    displaced = inv.equip(b.unique_id, 1)
    assert displaced.unique_id == a.unique_id
    assert displaced.is_equip == 0
    assert displaced.position == b_slot
    assert inv.equips[b.unique_id].position == -1
    assert inv.is_equipped(a.unique_id, 0)


def test_unequip_takes_free_slot():
    inv = fresh()
    a = inv.add_equip(weapon())
    inv.equip(a.unique_id, 1)
    result = inv.equip(a.unique_id, 0)
    assert result.is_empty()
    stored = inv.equips[a.unique_id]
    assert stored.is_equip == 0
    assert 0 <= stored.position < DEFAULT_SIZE


def test_unequip_with_no_free_slot_raises():
    inv = fresh(size=1)
    a = inv.add_equip(weapon(1))
    inv.equip(a.unique_id, 1)
    inv.add_equip(weapon(2))
    with pytest.raises(InventoryFullError):
        inv.equip(a.unique_id, 0)


def test_equip_unknown_item_returns_empty():
    inv = fresh()
    assert inv.equip(999, 1).is_empty()
    assert inv.is_equipped(999, 0) is False


def test_etc_stacks_merge_and_are_used():
    inv = fresh()
    inv.add_etc(EtcItem(5, 2, 3, -1))
    merged = inv.add_etc(EtcItem(5, 2, 4, -1))
    assert merged.count == 3 + 4
    assert inv.has_etc(5, 7)
    assert not inv.has_etc(5, 8)
    assert inv.use_etc(5, 2)
    assert inv.etcs[5].count == 7 - 2
    assert inv.use_etc(5, 100) is False
    assert inv.use_etc(6) is False


def test_gold():
    inv = fresh(gold=50)
    assert inv.has_gold(50)
    assert inv.use_gold(51) is False
    assert inv.gold == 50
    inv.add_gold(10)
    assert inv.use_gold(60)
    assert inv.gold == 0


def test_load_marks_occupied_slots():
    store = FakeStore(
        equips=[
            EquipItem(-1, 1, 1, 1, 1, 0, 0, 1),
            EquipItem(-1, 2, 1, 1, 1, 0, 2, 1),
            EquipItem(-1, 3, 2, 1, 1, 1, -1, 1),
        ],
        etcs=[EtcItem(9, 1, 4, 0)],
    )
    inv = fresh(store=store, gold=300)
    assert inv.gold == 300
    assert len(inv.equips) == 3
    assert all(item.use == 0 for item in inv.equips.values())
    assert inv.add_equip(weapon()).position == 1
    assert inv.add_etc(EtcItem(8, 1, 1, -1)).position == 1


def test_save_writes_changes():
    inv = fresh(gold=42)
    kept = inv.add_equip(weapon(1))
    used = inv.add_equip(weapon(2))
    inv.equips[used.unique_id].update_item()
    inv.add_etc(EtcItem(20, 1, 2, -1, True))
    inv.add_etc(EtcItem(21, 1, 0, -1, True))
    inv.add_etc(EtcItem(22, 1, 0, -1, False))
    inv.add_etc(EtcItem(23, 1, 5, -1, False))
    store = FakeStore()
    accounts = FakeAccounts()
    inv.save(store, accounts)
    assert store.calls[0] == ("delete_equips", 7)
    assert ("insert_equip", 7, kept.item_code) in store.calls
    assert ("insert_equip", 7, used.item_code) not in store.calls
    assert ("insert_etc", 7, 20) in store.calls
    assert not any(call[-1] == 21 for call in store.calls)
    assert ("delete_etc", 7, 22) in store.calls
    assert ("update_etc", 7, 23) in store.calls
    assert accounts.saved == [(7, 42)]


def test_mail_items_are_tracked_and_reset():
    inv = fresh()
    assert inv.add_mail_equip(EquipItem(-1, 3, 1, 1, 1, 0, 4, 0))
    assert inv.add_mail_etc(EtcItem(6, 1, 2, 4))
    assert [i.item_code for i in inv.updated_equips] == [3]
    assert [i.item_code for i in inv.updated_etcs] == [6]
    assert inv.updated_equips[0].position >= 0
    inv.reset_updates()
    assert inv.updated_equips == [] and inv.updated_etcs == []