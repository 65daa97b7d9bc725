# guildhall

The server-side game logic of an online role-playing game, as a plain Python
library. It keeps track of:

- **accounts and characters**: login, account creation, switching the current
  character and weapon, buying characters and weapons, and the gold and
  experience saved per character;
- **inventories**: a fixed number of slots for equipment and for stackable
  items, with equip and unequip, selling, loot drops and gold;
- **mail**: mailboxes whose letters carry gold and up to two item sockets, with
  reading, collecting, deleting, reloading and sending to other players;
- **who is online**: the known accounts and characters, and which of them have
  a live session (sessions are held by weak reference).

Storage is SQLite through the standard `sqlite3` module; each store creates the
tables it needs. The package needs only the standard library.

## Modules

| Module | What it holds |
| --- | --- |
| `guildhall.items` | `EquipItem`, `EtcItem`, the slot-based `Inventory` and `InventoryFullError` |
| `guildhall.catalog` | `Skill`, `SkillType`, `SkillBook`, `Weapon`, `WeaponBook` |
| `guildhall.user_access` | `UserAccess`: known accounts and characters, and their online sessions |
| `guildhall.accounts_db` | `create_tables`, `AccountStore`, `UserStore`, `Account`, `PlayerRecord`, `User`, `Player` |
| `guildhall.inventory_db` | `InventoryStore`: saved equipment and stackable items |
| `guildhall.mail_db` | `Mail` and `MailStore` |
| `guildhall.mail` | `Mailbox`: a player's letters and the items attached to them |
| `guildhall.session` | `GameSession`: login, account update and the shop, with `LoginResult` and reply classes |
| `guildhall.gameplay` | `Character`, `sell_items`, `update_equipment`, `drop_items`, `inventory_updates` |
| `guildhall.mail_actions` | `update_mail`, `update_all_mail`, `send_mail`, `mail_snapshot` |
| `guildhall.textutil` | `TickCounter`, `parse_json`, `json_field`, `fit_text` |

## A short tour

Set up storage and log in. An unknown login id creates the account (with
10000 cash); logging in again then succeeds:

```python
import sqlite3

from guildhall.accounts_db import AccountStore
from guildhall.session import GameSession
from guildhall.user_access import UserAccess

connection = sqlite3.connect(":memory:")
accounts = AccountStore(connection)
replies = []
session = GameSession(accounts, UserAccess(), replies.append)

password = "password"
session.login("alice", password).result   # LoginResult.CREATED
reply = session.login("alice", password)
reply.result                              # LoginResult.SUCCESS
reply.cash                                # 10000
```

Every reply a session produces is both returned and passed to the `send`
callable it was given.

An inventory has a fixed number of slots, and its gold can only be spent when
there is enough of it:

```python
from guildhall.items import Inventory

inventory = Inventory(20)
inventory.add_gold(500)
inventory.use_gold(200)    # True
inventory.has_gold(400)    # False, only 300 left
```

Slots become free once `Inventory.load` has run against an `InventoryStore`
(or any object with `load_equips` and `load_etcs`); `Inventory.save` writes the
items back and saves the gold through an `AccountStore`.

A `TickCounter` counts up and wraps around at its limit:

```python
from guildhall.textutil import TickCounter

counter = TickCounter(3)
counter.add(1)   # 1
counter.add(1)   # 2
counter.add(1)   # 0
```

## What it does not do

This is game logic only. There is no network server, no wire protocol or
packet handling, no command to run, and no rooms, movement, combat or
monsters: an application wires `GameSession`, `Character` and the mail
actions to its own transport and world.

## Running the tests

The tests use pytest, which the `test` extra installs.