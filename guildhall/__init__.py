"""Game-server core for an online role-playing game: accounts, inventories and mail."""

__version__ = "0.1.0"