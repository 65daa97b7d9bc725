"""A player's mailbox: reading, collecting attachments and deleting mail."""

from __future__ import annotations

import threading

from .items import EquipItem, EtcItem, Inventory
from .mail_db import Mail, MailStore

ITEM_SOCKETS = 2

_EQUIP = 1
_ETC = 2


class Mailbox:
    """Mail loaded for one player, with attachments keyed by (mail, socket)."""

    def __init__(self, store: MailStore, inventory: Inventory) -> None:
        self.store = store
        self.inventory = inventory
        self.mails: dict[int, Mail] = {}
        self.equips: dict[tuple[int, int], EquipItem] = {}
        self.etcs: dict[tuple[int, int], EtcItem] = {}
        self._lock = threading.RLock()

    def load(self, player_code: int) -> None:
        """Read the player's mail and attached items from the store."""
        with self._lock:
            for mail in self.store.load_mails(player_code):
                self.mails.setdefault(mail.code, mail)
            for mail_code, item in self.store.load_mail_equips(player_code):
                if mail_code > 0:
                    self.equips.setdefault((mail_code, item.position), item)
            for mail_code, item in self.store.load_mail_etcs(player_code):
                if mail_code > 0:
                    self.etcs.setdefault((mail_code, item.position), item)

    def read(self, mail_code: int, player_code: int) -> bool:
        """Mark an unread mail as read; False if missing or already read."""
        with self._lock:
            mail = self.mails.get(mail_code)
            if mail is None or mail.read != 0:
                return False
            mail.read = 1
            return self.store.update_mail(mail, player_code)

    def count_equip_items(self, mail_code: int) -> int:
        return sum((mail_code, s) in self.equips for s in range(1, ITEM_SOCKETS + 1))

    def count_etc_items(self, mail_code: int) -> int:
        return sum((mail_code, s) in self.etcs for s in range(1, ITEM_SOCKETS + 1))

    def receive(self, mail_code: int, player_code: int) -> bool:
        """Move a mail's attachments and gold into the inventory."""
        with self._lock:
            mail = self.mails.get(mail_code)
            if mail is None:
                return False
            if mail.socket1 == 1:
                self._receive_socket(mail_code, 1, mail.socket1_type)
                mail.socket1 = 0
            if mail.socket2 == 1:
                self._receive_socket(mail_code, 2, mail.socket2_type)
                mail.socket2 = 0
            self.inventory.add_gold(mail.gold)
            mail.gold = 0
            return self.store.update_mail(mail, player_code)

    def _receive_socket(self, mail_code: int, position: int, kind: int) -> None:
        if kind == _EQUIP:
            self.receive_equip(mail_code, position)
        elif kind == _ETC:
            self.receive_etc(mail_code, position)

    def receive_equip(self, mail_code: int, position: int) -> bool:
        item = self.equips.get((mail_code, position))
        return item is not None and self.inventory.add_mail_equip(item)

    def receive_etc(self, mail_code: int, position: int) -> bool:
        item = self.etcs.get((mail_code, position))
        return item is not None and self.inventory.add_mail_etc(item)

    def receive_all(self, player_code: int) -> None:
        with self._lock:
            for mail_code in list(self.mails):
                self.receive(mail_code, player_code)

    def remove(self, mail_code: int, player_code: int) -> bool:
        """Delete a mail that holds no gold and no uncollected items."""
        with self._lock:
            mail = self.mails.get(mail_code)
            if mail is None:
                return False
            if mail.gold != 0 or mail.socket1 > 0 or mail.socket2 > 0:
                return False
            self.remove_equip_items(mail_code)
            self.remove_etc_items(mail_code)
            self.store.remove_mail(mail_code, player_code)
            del self.mails[mail_code]
            return True

    def remove_equip_items(self, mail_code: int) -> None:
        for position in range(1, ITEM_SOCKETS + 1):
            self.equips.pop((mail_code, position), None)

    def remove_etc_items(self, mail_code: int) -> None:
        for position in range(1, ITEM_SOCKETS + 1):
            self.etcs.pop((mail_code, position), None)

    def remove_all(self, player_code: int) -> None:
        with self._lock:
            for mail_code in list(self.mails):
                self.remove(mail_code, player_code)

    def send(self, mail: Mail, player_code: int) -> None:
        """Deliver ``mail`` to another player; ``mail.code`` is set."""
        self.store.insert_mail(mail, player_code)

    def send_equip(self, mail: Mail, player_code: int, item: EquipItem) -> None:
        self.store.insert_equip_item(item, mail.code, player_code)

    def send_etc(self, mail: Mail, player_code: int, item: EtcItem) -> None:
        self.store.insert_etc_item(item, mail.code, player_code)

    def reload(self, player_code: int) -> None:
        """Drop everything loaded and read it again from the store."""
        with self._lock:
            self.mails.clear()
            self.equips.clear()
            self.etcs.clear()
            self.load(player_code)