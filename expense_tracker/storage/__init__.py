"""Persistence backends for users and expenses."""

from expense_tracker.storage.base import Storage, generate_id
from expense_tracker.storage.json_file import JsonFileStorage
from expense_tracker.storage.sql import SqlStorage

__all__ = ["JsonFileStorage", "SqlStorage", "Storage", "generate_id"]
