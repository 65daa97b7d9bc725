import sqlite3

import pytest

from guildhall.accounts_db import Player
from guildhall.gameplay import Character
from guildhall.items import EquipItem, Inventory
from guildhall.mail import Mailbox
from guildhall.mail_actions import (
    MailSendReply,
    mail_snapshot,
    send_mail,
    update_all_mail,
    update_mail,
)
from guildhall.mail_db import Mail, MailStore
from guildhall.user_access import UserAccess

PLAYER = 7


class EmptySource:
    def load_equips(self, player_code):
        return []

    def load_etcs(self, player_code):
        return []


def make_inventory(gold=0):
    inventory = Inventory()
    inventory.load(EmptySource(), PLAYER, gold)
    return inventory


@pytest.fixture
def store():
    return MailStore(sqlite3.connect(":memory:"))


def deliver(store, gold=500):
    mail = Mail(-1, 0, gold, 1, 1, 0, 0, "System", "hi")
    code = store.insert_mail(mail, PLAYER)
    store.insert_equip_item(EquipItem(-1, 11, 1, 5, 3, 0, 1, 0), code, PLAYER)
    return code


def make_character(store, gold=0):
    inventory = make_inventory(gold)
    mailbox = Mailbox(store, inventory)
    mailbox.load(PLAYER)
    return Character(PLAYER, inventory, mailbox=mailbox)


def test_snapshot_lists_mail_and_attachment(store):
    code = deliver(store)
    character = make_character(store)
    snapshot = mail_snapshot(character.mailbox)
    assert [m.code for m in snapshot.mails] == [code]
    assert snapshot.mails[0].title == "System"
    assert [(c, s, i.item_code) for c, s, i in snapshot.equips] == [(code, 1, 11)]
    assert snapshot.etcs == []


def test_receive_moves_gold_and_item(store):
    code = deliver(store, gold=500)
    character = make_character(store, gold=100)
    echo, update = update_mail(character, 2, code, PLAYER)
    assert echo.code == code
    assert echo.gold == 0
    assert echo.socket1 == 0
    assert character.inventory.gold == 600
    assert [i.item_code for i in update.equips] == [11]
    assert update.equips[0].position == 0
    assert character.inventory.updated_equips == []


def test_remove_fails_while_gold_remains(store):
    code = deliver(store)
    character = make_character(store)
    echo, update = update_mail(character, 3, code, PLAYER)
    assert echo.code == -1
    assert update is None
    assert code in character.mailbox.mails


def test_remove_after_receive(store):
    code = deliver(store)
    character = make_character(store)
    update_mail(character, 2, code, PLAYER)
    echo, _ = update_mail(character, 3, code, PLAYER)
    assert echo.code == code
    assert code not in character.mailbox.mails
    assert store.load_mails(PLAYER) == []


def test_missing_mailbox_is_an_error():
    character = Character(PLAYER, make_inventory())
    with pytest.raises(ValueError):
        update_mail(character, 2, 1, PLAYER)


def test_update_all_receive_then_remove(store):
    deliver(store, gold=200)
    deliver(store, gold=300)
    character = make_character(store)
    snapshot = update_all_mail(character, 2, PLAYER)
    assert character.inventory.gold == 500
    assert all(m.gold == 0 for m in snapshot.mails)
    assert len(snapshot.inventory.equips) == 2
    snapshot = update_all_mail(character, 3, PLAYER)
    assert snapshot.mails == []
    assert snapshot.inventory is None


def test_update_all_refresh_picks_up_new_mail(store):
    character = make_character(store)
    assert mail_snapshot(character.mailbox).mails == []
    code = deliver(store)
    snapshot = update_all_mail(character, 1, PLAYER)
    assert [m.code for m in snapshot.mails] == [code]


def make_access():
    access = UserAccess()
    access.add_player(Player(42, "bob", 1, 3))
    return access


def test_send_mail_with_item(store):
    character = make_character(store, gold=500)
    owned = character.inventory.add_equip(EquipItem(-1, 11, 1, 5, 3, 0, -1, 0))
    outgoing = EquipItem(owned.unique_id, 11, 1, 5, 3, 0, 1, 0)
    mail = Mail(-1, 0, 100, 1, 1, 0, 0, "bob", "gift")
    reply = send_mail(character, mail, [outgoing], make_access())
    assert reply.result == 1
    assert reply.removed == [owned.unique_id]
    assert reply.gold == 400
    assert not character.inventory.has_equip(owned.unique_id)
    sent = store.load_mail_equips(42)
    assert [(c, i.item_code, i.position) for c, i in sent] == [(mail.code, 11, 1)]
    assert [m.title for m in store.load_mails(42)] == ["bob"]


def test_send_mail_skips_unmarked_socket(store):
    character = make_character(store, gold=500)
    owned = character.inventory.add_equip(EquipItem(-1, 11, 1, 5, 3, 0, -1, 0))
    outgoing = EquipItem(owned.unique_id, 11, 1, 5, 3, 0, 2, 0)
    mail = Mail(-1, 0, 0, 1, 1, 0, 0, "bob", "gift")
    reply = send_mail(character, mail, [outgoing], make_access())
    assert reply.result == 1
    assert reply.removed == []
    assert character.inventory.has_equip(owned.unique_id)
    assert store.load_mail_equips(42) == []


def test_send_mail_unknown_recipient(store):
    character = make_character(store, gold=500)
    mail = Mail(-1, 0, 100, 0, 0, 0, 0, "nobody", "hi")
    reply = send_mail(character, mail, [], make_access())
    assert reply == MailSendReply(-1)
    assert character.inventory.gold == 500
    assert store.load_mails(42) == []


def test_send_mail_not_enough_gold(store):
    character = make_character(store, gold=50)
    mail = Mail(-1, 0, 100, 0, 0, 0, 0, "bob", "hi")
    reply = send_mail(character, mail, [], make_access())
    assert reply.result == -1
    assert character.inventory.gold == 50
    assert store.load_mails(42) == []