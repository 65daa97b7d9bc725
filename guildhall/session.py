"""A client's game session: login, account settings and shop purchases."""

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable

from .accounts_db import NAME_SIZE, Account, AccountStore, DuplicateAccountError, Player, User
from .textutil import fit_text
from .user_access import UserAccess

log = logging.getLogger(__name__)

STARTING_CASH = 10000

BUY_OK = 1
BUY_NOT_ENOUGH_CASH = 0
BUY_ALREADY_OWNED = -1

_WEAPON_SLOTS = (1, 2, 3)

_session_ids = itertools.count(1)
_session_ids_lock = threading.Lock()


def _next_session_id() -> int:
    with _session_ids_lock:
        return next(_session_ids) % 0x10000


class NotLoggedInError(Exception):
    """Raised when an account action is made before a successful login."""


class LoginResult(IntEnum):
    WRONG_PASSWORD = 0
    SUCCESS = 1
    CREATED = 2
    ALREADY_CONNECTED = 3
    CREATE_FAILED = 4


@dataclass
class CharacterSummary:
    """A character as shown on the account screens."""

    code: int
    uuid: int
    lv: int
    name: str


@dataclass
class LoginReply:
    result: LoginResult
    character_type: int = 0
    weapon_type: int = 0
    cash: int = 0
    weapons: list[int] = field(default_factory=list)
    characters: list[CharacterSummary] = field(default_factory=list)


@dataclass
class AccountReply:
    character_type: int
    weapon_type: int
    cash: int
    character: CharacterSummary | None = None
    exp: int = 0


@dataclass
class BuyReply:
    result: int
    cash: int = 0
    character_type: int = 0
    weapon_type: int = 0
    weapons: list[int] = field(default_factory=list)
    characters: list[CharacterSummary] = field(default_factory=list)


def _weapon_list(account: Account) -> list[int]:
    return [account.weapon_one, account.weapon_two, account.weapon_three]


def _owns_weapon(account: Account, weapon_type: int) -> bool:
    return (
        weapon_type in _WEAPON_SLOTS
        and _weapon_list(account)[weapon_type - 1] == 1
    )


class GameSession:
    """One connected client. Every reply is returned and passed to ``send``."""

    def __init__(
        self,
        accounts: AccountStore,
        access: UserAccess,
        send: Callable[[Any], None],
    ) -> None:
        self.accounts = accounts
        self.access = access
        self.send = send
        self.session_id = _next_session_id()
        self.account_code = -1
        self.job_code = -1
        self.weapon_code = -1
        self.log_id = ""
        self.room_id = -1
        self.on_character_created: Callable[[int], None] | None = None

    def _reply(self, reply: Any) -> Any:
        self.send(reply)
        return reply

    def _characters(self, account_code: int) -> list[CharacterSummary]:
        return [
            CharacterSummary(record.job_code, self.session_id, record.lv, record.name)
            for record in self.accounts.players(account_code)
        ]

    def _account(self) -> Account:
        account = self.accounts.get_account(self.account_code)
        if account is None:
            raise NotLoggedInError("session has no account")
        return account

    def login(self, login_id: str, password: str) -> LoginReply:
        """Log in, or create the account when the login id is unknown."""
        account = self.accounts.find_account(login_id)
        if account is None:
            try:
                code = self.accounts.create_account(login_id, password, STARTING_CASH)
            except DuplicateAccountError:
                log.info("Create Failed Account ID: %s", login_id)
                return self._reply(LoginReply(LoginResult.CREATE_FAILED))
            log.info("Create Account ID: %s", login_id)
            self.access.add_user(User(code, fit_text(login_id, NAME_SIZE)))
            return self._reply(LoginReply(LoginResult.CREATED))

        if account.password != fit_text(password, NAME_SIZE):
            return self._reply(LoginReply(LoginResult.WRONG_PASSWORD))

        self.account_code = account.account_code
        if not self.access.access_user(account.account_code, self):
            log.info("Already connected to this Account : %s", account.account_code)
            return self._reply(LoginReply(LoginResult.ALREADY_CONNECTED))

        self.job_code = account.character_type
        self.weapon_code = account.weapon_type
        self.log_id += login_id
        log.info("Login Access ID: %s", login_id)
        return self._reply(
            LoginReply(
                LoginResult.SUCCESS,
                character_type=account.character_type,
                weapon_type=account.weapon_type,
                cash=account.cash,
                weapons=_weapon_list(account),
                characters=self._characters(account.account_code),
            )
        )

    def update_account(self, character_type: int, weapon_type: int, use_cash: int) -> AccountReply:
        """Switch character and weapon where owned, and spend cash if there is enough."""
        account = self._account()
        reply = AccountReply(account.character_type, account.weapon_type, account.cash)

        if account.character_type != character_type:
            for record in self.accounts.players(account.account_code, character_type):
                if record.job_code == character_type:
                    account.character_type = record.job_code
                    reply.character = CharacterSummary(
                        record.job_code, self.session_id, record.lv, record.name
                    )
                    reply.exp = record.exp

        if account.weapon_type != weapon_type and _owns_weapon(account, weapon_type):
            account.weapon_type = weapon_type

        if account.cash >= use_cash:
            account.cash -= use_cash

        reply.character_type = account.character_type
        reply.weapon_type = account.weapon_type
        reply.cash = account.cash
        self.job_code = account.character_type
        self.weapon_code = account.weapon_type
        self.accounts.update_account(account)
        return self._reply(reply)

    def buy_character(self, character_type: int, name: str, use_cash: int) -> BuyReply:
        """Create a character of a job the account does not have yet."""
        account = self._account()
        if account.cash < use_cash:
            return self._reply(BuyReply(BUY_NOT_ENOUGH_CASH, cash=account.cash))

        reply = BuyReply(BUY_OK)
        if self.accounts.players(account.account_code, character_type):
            reply.result = BUY_ALREADY_OWNED
        else:
            code = self.accounts.insert_character(account.account_code, character_type, name)
            account.cash -= use_cash
            self.accounts.update_account(account)
            self.access.add_player(
                Player(code, fit_text(name, NAME_SIZE), character_type, account.account_code)
            )
            if self.on_character_created is not None:
                self.on_character_created(code)

        if reply.result > 0:
            reply.characters = self._characters(account.account_code)
        reply.cash = account.cash
        return self._reply(reply)

    def buy_weapon(self, weapon_type: int, use_cash: int) -> BuyReply:
        """Unlock one of the three weapons."""
        account = self._account()
        if account.cash < use_cash:
            return self._reply(BuyReply(BUY_NOT_ENOUGH_CASH, cash=account.cash))

        reply = BuyReply(BUY_OK)
        if weapon_type in _WEAPON_SLOTS and not _owns_weapon(account, weapon_type):
            if weapon_type == 1:
                account.weapon_one = 1
            elif weapon_type == 2:
                account.weapon_two = 1
            else:
                account.weapon_three = 1
        else:
            reply.result = BUY_ALREADY_OWNED

        if reply.result > 0:
            account.cash -= use_cash
            self.accounts.update_account(account)
            reply.character_type = account.character_type
            reply.weapon_type = account.weapon_type
            reply.weapons = _weapon_list(account)
            reply.characters = self._characters(account.account_code)
        reply.cash = account.cash
        return self._reply(reply)