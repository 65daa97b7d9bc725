"""Mailbox actions a client asks for: listing, collecting, deleting and sending mail."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable

from .gameplay import Character, InventoryUpdate, inventory_updates
from .items import EquipItem, EtcItem
from .mail import Mailbox
from .mail_db import TITLE_SIZE, Mail
from .textutil import fit_text
from .user_access import UserAccess

REFRESH = 1
RECEIVE = 2
REMOVE = 3

SEND_OK = 1
SEND_FAILED = -1


@dataclass
class MailSendReply:
    """Outcome of sending mail: removed equipment ids and remaining gold."""

    result: int
    removed: list[int] = field(default_factory=list)
    gold: int = 0


@dataclass
class MailSnapshot:
    """The mailbox contents; attachments are ``(mail code, socket, item)``."""

    kind: int = 0
    mails: list[Mail] = field(default_factory=list)
    equips: list[tuple[int, int, EquipItem]] = field(default_factory=list)
    etcs: list[tuple[int, int, EtcItem]] = field(default_factory=list)
    inventory: InventoryUpdate | None = None


def _mailbox(character: Character) -> Mailbox:
    if character.mailbox is None:
        raise ValueError("character has no mailbox loaded")
    return character.mailbox


def mail_snapshot(mailbox: Mailbox) -> MailSnapshot:
    """Copy out every mail and attachment currently in ``mailbox``."""
    return MailSnapshot(
        mails=[replace(mail) for mail in mailbox.mails.values()],
        equips=[(code, socket, replace(item)) for (code, socket), item in mailbox.equips.items()],
        etcs=[(code, socket, replace(item)) for (code, socket), item in mailbox.etcs.items()],
    )


def update_mail(
    character: Character, kind: int, mail_code: int, player_code: int
) -> tuple[Mail, InventoryUpdate | None]:
    """Collect (``kind`` 2) or delete (``kind`` 3) one mail.

    Returns the mail as the client should now see it and, when items were
    collected, the inventory changes. A failed delete answers with code -1.
    """
    mailbox = _mailbox(character)
    echo = Mail.empty()
    echo.code = mail_code
    update: InventoryUpdate | None = None

    if kind == RECEIVE:
        if mailbox.receive(mail_code, player_code):
            mail = mailbox.mails.get(mail_code)
            if mail is not None:
                echo = replace(mail)
            update = inventory_updates(character.inventory)
    elif kind == REMOVE:
        echo.code = mail_code if mailbox.remove(mail_code, player_code) else -1
    return echo, update


def update_all_mail(character: Character, kind: int, player_code: int) -> MailSnapshot:
    """Refresh (1), collect everything (2) or delete everything (3), then list."""
    mailbox = _mailbox(character)
    update: InventoryUpdate | None = None
    if kind == REFRESH:
        mailbox.reload(player_code)
    elif kind == RECEIVE:
        mailbox.receive_all(player_code)
        update = inventory_updates(character.inventory)
    elif kind == REMOVE:
        mailbox.remove_all(player_code)
    snapshot = mail_snapshot(mailbox)
    snapshot.inventory = update
    return snapshot


def send_mail(
    character: Character,
    mail: Mail,
    equips: Iterable[EquipItem],
    access: UserAccess,
) -> MailSendReply:
    """Send ``mail`` to the character named by its title.

    Each equipment item goes in the socket given by its position (1 or 2)
    when that socket is marked on the mail, and leaves the sender's
    inventory. The mail's gold is taken from the sender.
    """
    mailbox = _mailbox(character)
    inventory = character.inventory
    recipient = fit_text(mail.title, TITLE_SIZE)

    if not access.has_player_name(recipient) or not inventory.has_gold(mail.gold):
        return MailSendReply(SEND_FAILED)

    target = access.player_names[recipient]
    mailbox.send(mail, target)
    reply = MailSendReply(SEND_OK)
    for item in equips:
        in_socket = (item.position == 1 and mail.socket1 == 1) or (
            item.position == 2 and mail.socket2 == 1
        )
        if not in_socket:
            continue
        mailed = EquipItem(
            -1, item.item_code, item.equip_type, item.attack, item.speed, 0, item.position, 0
        )
        mailbox.send_equip(mail, target, mailed)
        inventory.use_equip(item.unique_id)
        reply.removed.append(item.unique_id)

    inventory.use_gold(mail.gold)
    reply.gold = inventory.gold
    return reply