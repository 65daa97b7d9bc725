"""SQLite storage for accounts and the characters that belong to them."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass

from .textutil import fit_text

NAME_SIZE = 10

_SCHEMA = """
CREATE TABLE IF NOT EXISTS Account (
    accountCode INTEGER PRIMARY KEY AUTOINCREMENT,
    id TEXT NOT NULL UNIQUE,
    pwd TEXT NOT NULL,
    cash INTEGER NOT NULL DEFAULT 0,
    curPlayerType INTEGER NOT NULL DEFAULT 0,
    curWeaponType INTEGER NOT NULL DEFAULT 0,
    weaponOne INTEGER NOT NULL DEFAULT 0,
    weaponTwo INTEGER NOT NULL DEFAULT 0,
    weaponThr INTEGER NOT NULL DEFAULT 0
);
CREATE TABLE IF NOT EXISTS Player (
    playerCode INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    jobCode INTEGER NOT NULL,
    mapCode INTEGER NOT NULL,
    accountCode INTEGER NOT NULL,
    gold INTEGER NOT NULL DEFAULT 0,
    lv INTEGER NOT NULL DEFAULT 1,
    exp INTEGER NOT NULL DEFAULT 0
);
"""

_ACCOUNT_COLUMNS = (
    "accountCode, id, pwd, cash, curPlayerType, curWeaponType, "
    "weaponOne, weaponTwo, weaponThr"
)
_PLAYER_COLUMNS = "playerCode, name, jobCode, mapCode, gold, lv, exp"


class DuplicateAccountError(Exception):
    """Raised when an account with the same login id already exists."""


@dataclass
class Account:
    """An account row: login, cash and the unlocked weapons."""

    account_code: int
    login_id: str
    password: str
    cash: int
    character_type: int = 0
    weapon_type: int = 0
    weapon_one: int = 0
    weapon_two: int = 0
    weapon_three: int = 0


@dataclass
class PlayerRecord:
    """A character row as the account screens see it."""

    player_code: int
    name: str
    job_code: int
    map_code: int
    gold: int
    lv: int
    exp: int


@dataclass
class User:
    """An account as the online registry knows it."""

    account_code: int = -1
    login_id: str = ""


@dataclass
class Player:
    """A character as the online registry knows it."""

    player_code: int = -1
    name: str = ""
    job_code: int = 0
    account_code: int = -1


def create_tables(connection: sqlite3.Connection) -> None:
    """Create the account and character tables if they are missing."""
    connection.executescript(_SCHEMA)


def _name(text: str) -> str:
    return fit_text(text, NAME_SIZE)


class AccountStore:
    """Account and character queries used by a game session."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._conn = connection
        create_tables(connection)

    def _account(self, where: str, value: object) -> Account | None:
        row = self._conn.execute(
            f"SELECT {_ACCOUNT_COLUMNS} FROM Account WHERE {where} = ?", (value,)
        ).fetchone()
        return Account(*row) if row else None

    def find_account(self, login_id: str) -> Account | None:
        """Return the account with this login id, or None."""
        return self._account("id", _name(login_id))

    def create_account(self, login_id: str, password: str, cash: int) -> int:
        """Create an account and return its code."""
        try:
            with self._conn:
                cursor = self._conn.execute(
                    "INSERT INTO Account (id, pwd, cash) VALUES (?, ?, ?)",
                    (_name(login_id), _name(password), cash),
                )
        except sqlite3.IntegrityError as exc:
            raise DuplicateAccountError(login_id) from exc
        return cursor.lastrowid

    def get_account(self, account_code: int) -> Account | None:
        return self._account("accountCode", account_code)

    def update_account(self, account: Account) -> bool:
        """Write cash, current selections and unlocked weapons back."""
        with self._conn:
            cursor = self._conn.execute(
                "UPDATE Account SET cash = ?, curPlayerType = ?, curWeaponType = ?, "
                "weaponOne = ?, weaponTwo = ?, weaponThr = ? WHERE accountCode = ?",
                (
                    account.cash,
                    account.character_type,
                    account.weapon_type,
                    account.weapon_one,
                    account.weapon_two,
                    account.weapon_three,
                    account.account_code,
                ),
            )
        return cursor.rowcount > 0

    def players(self, account_code: int, job_code: int | None = None) -> list[PlayerRecord]:
        """Return the account's characters, optionally of one job only."""
        query = f"SELECT {_PLAYER_COLUMNS} FROM Player WHERE accountCode = ?"
        params: tuple = (account_code,)
        if job_code is not None:
            query += " AND jobCode = ?"
            params += (job_code,)
        rows = self._conn.execute(query + " ORDER BY playerCode", params).fetchall()
        return [PlayerRecord(*row) for row in rows]

    def insert_character(self, account_code: int, job_code: int, name: str) -> int:
        """Create a character on map 1 at level 1 with no gold; return its code."""
        with self._conn:
            cursor = self._conn.execute(
                "INSERT INTO Player (name, jobCode, mapCode, accountCode, gold, lv) "
                "VALUES (?, ?, 1, ?, 0, 1)",
                (_name(name), job_code, account_code),
            )
        return cursor.lastrowid

    def save_gold(self, player_code: int, gold: int) -> None:
        with self._conn:
            self._conn.execute(
                "UPDATE Player SET gold = ? WHERE playerCode = ?", (gold, player_code)
            )

    def update_exp(self, player_code: int, exp: int, lv: int) -> bool:
        with self._conn:
            cursor = self._conn.execute(
                "UPDATE Player SET lv = ?, exp = ? WHERE playerCode = ?",
                (lv, exp, player_code),
            )
        return cursor.rowcount > 0


class UserStore:
    """Lists every account and character for the online registry."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._conn = connection
        create_tables(connection)

    def users(self) -> list[User]:
        rows = self._conn.execute(
            "SELECT accountCode, id FROM Account ORDER BY accountCode"
        ).fetchall()
        return [User(code, login_id) for code, login_id in rows]

    def players(self) -> list[Player]:
        rows = self._conn.execute(
            "SELECT playerCode, name, jobCode, accountCode FROM Player ORDER BY playerCode"
        ).fetchall()
        return [Player(*row) for row in rows]