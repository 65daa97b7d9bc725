"""Mail messages and their SQLite storage."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass

from .items import EquipItem, EtcItem
from .textutil import fit_text

TITLE_SIZE = 10
MESSAGE_SIZE = 50
MAIL_LIMIT = 10
ITEM_LIMIT = 20

_SCHEMA = """
CREATE TABLE IF NOT EXISTS Mail (
    mailCode INTEGER PRIMARY KEY AUTOINCREMENT,
    playerCode INTEGER NOT NULL,
    title TEXT NOT NULL,
    message TEXT NOT NULL,
    gold INTEGER NOT NULL DEFAULT 0,
    readCheck INTEGER NOT NULL DEFAULT 0,
    socket1 INTEGER NOT NULL DEFAULT 0,
    socket1Type INTEGER NOT NULL DEFAULT 0,
    socket2 INTEGER NOT NULL DEFAULT 0,
    socket2Type INTEGER NOT NULL DEFAULT 0
);
CREATE TABLE IF NOT EXISTS MailEquipItem (
    mailCode INTEGER NOT NULL,
    playerCode INTEGER NOT NULL,
    itemCode INTEGER NOT NULL,
    equipType INTEGER NOT NULL,
    attack INTEGER NOT NULL,
    speed INTEGER NOT NULL,
    position INTEGER NOT NULL,
    isRemove INTEGER NOT NULL DEFAULT 0
);
CREATE TABLE IF NOT EXISTS MailEtcItem (
    mailCode INTEGER NOT NULL,
    playerCode INTEGER NOT NULL,
    itemCode INTEGER NOT NULL,
    itemType INTEGER NOT NULL,
    itemCount INTEGER NOT NULL,
    position INTEGER NOT NULL,
    isRemove INTEGER NOT NULL DEFAULT 0
);
CREATE TABLE IF NOT EXISTS RemoveMail (
    mailCode INTEGER NOT NULL,
    playerCode INTEGER NOT NULL,
    title TEXT NOT NULL,
    message TEXT NOT NULL,
    gold INTEGER NOT NULL,
    readCheck INTEGER NOT NULL,
    socket1 INTEGER NOT NULL,
    socket1Type INTEGER NOT NULL,
    socket2 INTEGER NOT NULL,
    socket2Type INTEGER NOT NULL
);
"""

_SELECT_MAILS = (
    "SELECT mailCode, readCheck, gold, socket1, socket1Type, socket2, socket2Type, "
    "title, message FROM Mail WHERE playerCode = ? ORDER BY mailCode LIMIT ?"
)
_SELECT_EQUIPS = (
    "SELECT mailCode, itemCode, equipType, attack, speed, position FROM MailEquipItem "
    "WHERE playerCode = ? AND isRemove = 0 ORDER BY rowid LIMIT ?"
)
_SELECT_ETCS = (
    "SELECT mailCode, itemCode, itemType, itemCount, position FROM MailEtcItem "
    "WHERE playerCode = ? AND isRemove = 0 ORDER BY rowid LIMIT ?"
)
_UPDATE_MAIL = (
    "UPDATE Mail SET gold = ?, readCheck = ?, socket1 = ?, socket2 = ? "
    "WHERE mailCode = ? AND playerCode = ?"
)
_REMOVE_EQUIPS = "UPDATE MailEquipItem SET isRemove = 1 WHERE mailCode = ? AND playerCode = ?"
_REMOVE_ETCS = "UPDATE MailEtcItem SET isRemove = 1 WHERE mailCode = ? AND playerCode = ?"
_DELETE_MAIL = "DELETE FROM Mail WHERE mailCode = ? AND playerCode = ?"
_ARCHIVE_MAIL = (
    "INSERT INTO RemoveMail (mailCode, playerCode, title, message, gold, readCheck, "
    "socket1, socket1Type, socket2, socket2Type) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)"
)
_INSERT_MAIL = (
    "INSERT INTO Mail (playerCode, title, message, gold, readCheck, socket1, "
    "socket1Type, socket2, socket2Type) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)"
)
_INSERT_EQUIP = (
    "INSERT INTO MailEquipItem (mailCode, playerCode, itemCode, equipType, attack, "
    "speed, position) VALUES (?, ?, ?, ?, ?, ?, ?)"
)
_INSERT_ETC = (
    "INSERT INTO MailEtcItem (mailCode, playerCode, itemCode, itemType, itemCount, "
    "position) VALUES (?, ?, ?, ?, ?, ?)"
)


@dataclass
class Mail:
    """A message in a player's mailbox, with gold and up to two item sockets."""

    code: int
    read: int
    gold: int
    socket1: int
    socket1_type: int
    socket2: int
    socket2_type: int
    title: str = ""
    message: str = ""

    @classmethod
    def empty(cls) -> Mail:
        """Return the placeholder mail used where no mail exists."""
        return cls(-1, -1, 0, -1, -1, -1, -1)

    @classmethod
    def first_mail(cls) -> Mail:
        """Return the welcome mail a new character receives."""
        return cls(-1, 0, 10000, 1, 1, 1, 1, "System", "캐릭터 생성을 축하합니다 !!!")


def _texts(mail: Mail) -> tuple[str, str]:
    return fit_text(mail.title, TITLE_SIZE), fit_text(mail.message, MESSAGE_SIZE)


class MailStore:
    """Reads and writes mail and mailed items on an SQLite connection."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._conn = connection
        self._conn.executescript(_SCHEMA)

    def load_mails(self, player_code: int) -> list[Mail]:
        """Return up to ten of the player's mails, oldest first."""
        rows = self._conn.execute(_SELECT_MAILS, (player_code, MAIL_LIMIT)).fetchall()
        return [Mail(*row) for row in rows]

    def load_mail_equips(self, player_code: int) -> list[tuple[int, EquipItem]]:
        """Return ``(mail code, item)`` for equipment still attached to mail."""
        rows = self._conn.execute(_SELECT_EQUIPS, (player_code, ITEM_LIMIT)).fetchall()
        return [
            (mail_code, EquipItem(-1, code, equip_type, attack, speed, 0, position, 0))
            for mail_code, code, equip_type, attack, speed, position in rows
        ]

    def load_mail_etcs(self, player_code: int) -> list[tuple[int, EtcItem]]:
        """Return ``(mail code, stack)`` for materials still attached to mail."""
        rows = self._conn.execute(_SELECT_ETCS, (player_code, ITEM_LIMIT)).fetchall()
        return [
            (mail_code, EtcItem(code, item_type, count, position))
            for mail_code, code, item_type, count, position in rows
        ]

    def update_mail(self, mail: Mail, player_code: int) -> bool:
        """Write the mail's gold, read flag and sockets back."""
        with self._conn:
            self._conn.execute(
                _UPDATE_MAIL,
                (mail.gold, mail.read, mail.socket1, mail.socket2, mail.code, player_code),
            )
        return True

    def remove_equip_items(self, mail_code: int, player_code: int) -> None:
        with self._conn:
            self._conn.execute(_REMOVE_EQUIPS, (mail_code, player_code))

    def remove_etc_items(self, mail_code: int, player_code: int) -> None:
        with self._conn:
            self._conn.execute(_REMOVE_ETCS, (mail_code, player_code))

    def remove_mail(self, mail_code: int, player_code: int) -> None:
        with self._conn:
            self._conn.execute(_DELETE_MAIL, (mail_code, player_code))

    def archive_mail(self, mail: Mail, player_code: int) -> None:
        """Keep a copy of a deleted mail."""
        title, message = _texts(mail)
        with self._conn:
            self._conn.execute(
                _ARCHIVE_MAIL,
                (
                    mail.code,
                    player_code,
                    title,
                    message,
                    mail.gold,
                    mail.read,
                    mail.socket1,
                    mail.socket1_type,
                    mail.socket2,
                    mail.socket2_type,
                ),
            )

    def insert_mail(self, mail: Mail, player_code: int) -> int:
        """Deliver ``mail`` to a player; set and return its new code."""
        title, message = _texts(mail)
        with self._conn:
            cursor = self._conn.execute(
                _INSERT_MAIL,
                (
                    player_code,
                    title,
                    message,
                    mail.gold,
                    mail.read,
                    mail.socket1,
                    mail.socket1_type,
                    mail.socket2,
                    mail.socket2_type,
                ),
            )
        mail.code = cursor.lastrowid
        return mail.code

    def insert_equip_item(self, item: EquipItem, mail_code: int, player_code: int) -> None:
        with self._conn:
            self._conn.execute(
                _INSERT_EQUIP,
                (
                    mail_code,
                    player_code,
                    item.item_code,
                    item.equip_type,
                    item.attack,
                    item.speed,
                    item.position,
                ),
            )

    def insert_etc_item(self, item: EtcItem, mail_code: int, player_code: int) -> None:
        with self._conn:
            self._conn.execute(
                _INSERT_ETC,
                (
                    mail_code,
                    player_code,
                    item.item_code,
                    item.item_type,
                    item.count,
                    item.position,
                ),
            )