from __future__ import annotations

import logging

from ..common.validators import optional_text, require_non_empty, require_pin
from ..core.constants import TABLE_SETTINGS
from ..core.exceptions import AuthenticationError, ConflictError, StoreError
from ..state.app_state import TimeClockState
from ..store.model import Identity, gt
from ..store.repository import RecordStore

logger = logging.getLogger(__name__)


class AdminService:
    """Use cases around the admin gate: first-run setup, PIN login, PIN change."""

    def __init__(self, store: RecordStore, state: TimeClockState):
        self._store = store
        self._state = state

    def setup(self, *, email: str, password: str, pin: str) -> Identity:
        if not self._state.needs_setup:
            raise ConflictError("Het systeem is al ingesteld")

        email = require_non_empty(email, "Email")
        password = require_non_empty(password, "Wachtwoord")
        pin = require_pin(pin)

        identity = self._create_or_resume_identity(email, password)
        try:
            self._store.insert(TABLE_SETTINGS, [{"pin_code": pin, "admin_user_id": identity.id}])
        except StoreError:
            logger.exception("Saving settings for %s failed; identity kept for a retry", identity.email)
            raise
        logger.info("Initial setup completed for %s", identity.email)

        self._state.load()
        return identity

    def _create_or_resume_identity(self, email: str, password: str) -> Identity:
        """Create the admin identity, or reuse it when an earlier setup stopped after creating it."""

        try:
            return self._store.create_identity(email, password)
        except StoreError as create_error:
            try:
                identity = self._store.verify_credentials(email, password)
            except (AuthenticationError, StoreError):
                raise create_error from None
            logger.warning("Resuming interrupted setup for %s", identity.email)
            return identity

    def login(self, pin: str) -> None:
        if not self._state.verify_pin(pin or ""):
            raise AuthenticationError("Onjuiste pincode")

    def change_pin(self, *, email: str, password: str, new_pin: str) -> None:
        """Re-authenticate with the admin account, then replace the PIN."""

        email = optional_text(email, "Email")
        password = optional_text(password, "Wachtwoord")
        if not email or not password or not optional_text(new_pin, "Pincode"):
            raise AuthenticationError("Vul alle velden in")
        new_pin = require_pin(new_pin)

        self._store.verify_credentials(email, password)
        try:
            self._store.update(TABLE_SETTINGS, {"pin_code": new_pin}, [gt("id", 0)])
        except StoreError:
            logger.exception("Saving the new PIN failed")
            raise StoreError("Fout bij opslaan pincode", table=TABLE_SETTINGS, operation="update") from None

        self._state.set_pin(new_pin)
