"""Service layer – account profile and password updates.

Accounts are kept in memory; persistence and sign-in belong to the upstream
auth layer, which hands us a user id.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import os
import threading
from dataclasses import dataclass

from src.oncosight.config import SETTINGS_UPDATED
from src.oncosight.schemas.settings import SettingsRequest, SettingsResult

logger = logging.getLogger(__name__)

_HASH_ITERATIONS = 100_000


def hash_password(password: str, *, salt: bytes | None = None) -> str:
    """Return ``salt$digest`` (both hex) for *password*."""
    salt = salt or os.urandom(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt, _HASH_ITERATIONS)
    return f"{salt.hex()}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    salt_hex, _, digest_hex = stored.partition("$")
    if not digest_hex:
        return False
    candidate = hash_password(password, salt=bytes.fromhex(salt_hex))
    return hmac.compare_digest(candidate, stored)


@dataclass
class Account:
    id: str
    name: str | None
    email: str | None
    password_hash: str | None = None
    is_oauth: bool = False


class AccountStore:
    """Thread-safe in-memory account registry."""

    def __init__(self) -> None:
        self._accounts: dict[str, Account] = {}
        self._lock = threading.Lock()

    def add(self, account: Account) -> Account:
        with self._lock:
            self._accounts[account.id] = account
        return account

    def get(self, user_id: str) -> Account | None:
        return self._accounts.get(user_id)

    def get_by_email(self, email: str) -> Account | None:
        email = email.lower()
        for account in self._accounts.values():
            if account.email and account.email.lower() == email:
                return account
        return None

    def clear(self) -> None:
        with self._lock:
            self._accounts.clear()

    def update_settings(self, user_id: str, request: SettingsRequest) -> SettingsResult:
        """Apply a validated settings change for *user_id*."""
        with self._lock:
            account = self._accounts.get(user_id)
            if account is None:
                return SettingsResult(error="Unauthorized")

            email = request.email
            password = request.password
            new_password = request.new_password

            # OAuth users manage these with their provider
            if account.is_oauth:
                email = password = new_password = None

            if email and email != account.email:
                existing = self.get_by_email(email)
                if existing is not None and existing.id != account.id:
                    return SettingsResult(error="Email already in use!")

            if password and new_password:
                if account.password_hash is None or not verify_password(
                    password, account.password_hash,
                ):
                    return SettingsResult(error="Incorrect password!")
                account.password_hash = hash_password(new_password)

            if email:
                account.email = email
            if request.name is not None:
                account.name = request.name

        logger.info("Settings updated for user %s", user_id)
        return SettingsResult(success=SETTINGS_UPDATED)


# Global store instance
account_store = AccountStore()
