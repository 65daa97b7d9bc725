"""SQLite storage for players' equipment and material items."""

from __future__ import annotations

import sqlite3

from .items import EquipItem, EtcItem

_SCHEMA = """
CREATE TABLE IF NOT EXISTS InventoryEquip (
    playerCode INTEGER NOT NULL,
    itemCode INTEGER NOT NULL,
    equipType INTEGER NOT NULL,
    attack INTEGER NOT NULL,
    speed INTEGER NOT NULL,
    isEquip INTEGER NOT NULL,
    position INTEGER NOT NULL
);
CREATE TABLE IF NOT EXISTS InventoryEtc (
    playerCode INTEGER NOT NULL,
    itemCode INTEGER NOT NULL,
    itemType INTEGER NOT NULL,
    itemCount INTEGER NOT NULL,
    position INTEGER NOT NULL
);
"""

_SELECT_EQUIPS = (
    "SELECT itemCode, equipType, attack, speed, isEquip, position "
    "FROM InventoryEquip WHERE playerCode = ? ORDER BY rowid"
)
_SELECT_ETCS = (
    "SELECT itemCode, itemType, itemCount, position "
    "FROM InventoryEtc WHERE playerCode = ? ORDER BY rowid"
)
_INSERT_EQUIP = (
    "INSERT INTO InventoryEquip "
    "(playerCode, itemCode, equipType, attack, speed, isEquip, position) "
    "VALUES (?, ?, ?, ?, ?, ?, ?)"
)
_DELETE_EQUIPS = "DELETE FROM InventoryEquip WHERE playerCode = ?"
_INSERT_ETC = (
    "INSERT INTO InventoryEtc (playerCode, itemCode, itemType, itemCount, position) "
    "VALUES (?, ?, ?, ?, ?)"
)
_UPDATE_ETC = (
    "UPDATE InventoryEtc SET itemCount = ?, position = ? "
    "WHERE playerCode = ? AND itemCode = ?"
)
_DELETE_ETC = "DELETE FROM InventoryEtc WHERE playerCode = ? AND itemCode = ?"


class InventoryStore:
    """Reads and writes inventory rows on an SQLite connection."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._conn = connection
        self._conn.executescript(_SCHEMA)

    def load_equips(self, player_code: int) -> list[EquipItem]:
        """Return the player's equipment, with no unique ids assigned yet."""
        rows = self._conn.execute(_SELECT_EQUIPS, (player_code,)).fetchall()
        return [
            EquipItem(-1, code, equip_type, attack, speed, is_equip, position, 0)
            for code, equip_type, attack, speed, is_equip, position in rows
        ]

    def load_etcs(self, player_code: int) -> list[EtcItem]:
        """Return the player's material stacks."""
        rows = self._conn.execute(_SELECT_ETCS, (player_code,)).fetchall()
        return [
            EtcItem(code, item_type, count, position)
            for code, item_type, count, position in rows
        ]

    def insert_equip(self, player_code: int, item: EquipItem) -> None:
        with self._conn:
            self._conn.execute(
                _INSERT_EQUIP,
                (
                    player_code,
                    item.item_code,
                    item.equip_type,
                    item.attack,
                    item.speed,
                    item.is_equip,
                    item.position,
                ),
            )

    def delete_equips(self, player_code: int) -> None:
        with self._conn:
            self._conn.execute(_DELETE_EQUIPS, (player_code,))

    def insert_etc(self, player_code: int, item: EtcItem) -> None:
        with self._conn:
            self._conn.execute(
                _INSERT_ETC,
                (player_code, item.item_code, item.item_type, item.count, item.position),
            )

    def update_etc(self, player_code: int, item: EtcItem) -> None:
        with self._conn:
            self._conn.execute(
                _UPDATE_ETC, (item.count, item.position, player_code, item.item_code)
            )

    def delete_etc(self, player_code: int, item: EtcItem) -> None:
        with self._conn:
            self._conn.execute(_DELETE_ETC, (player_code, item.item_code))