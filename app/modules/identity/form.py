"""
Per-session state of a profile create/edit or signup form.

The form keeps display_name and username in sync with the first/last name
until the user edits either of them directly, and runs debounced availability
checks for username and email. Views render from `snapshot()`; they never
write derived values themselves.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from app.modules.identity.availability import (
    AvailabilityCheck,
    DEFAULT_DEBOUNCE_SECONDS,
    Lookup,
    email_precondition,
    username_precondition,
)
from app.modules.identity.deriver import (
    DerivedIdentity,
    derive_display_name,
    derive_username,
    resolve_identity,
)


@dataclass
class FieldEditState:
    manually_edited: bool = False

    @property
    def mode(self) -> str:
        return "manual" if self.manually_edited else "auto"

    def mark_manual(self) -> None:
        # One-way for the lifetime of the session
        self.manually_edited = True


class IdentityForm:
    def __init__(
        self,
        username_lookup: Lookup,
        email_lookup: Lookup,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self._on_change = on_change
        self.username_check = AvailabilityCheck(
            "username", username_lookup, username_precondition, debounce_seconds, on_change
        )
        self.email_check = AvailabilityCheck(
            "email", email_lookup, email_precondition, debounce_seconds, on_change
        )
        self._load(None)

    def open(self, record: Optional[Dict[str, Any]] = None) -> None:
        """Start a fresh session for a new record (None) or an existing one."""
        self.username_check.reset()
        self.email_check.reset()
        self._load(record)
        self._notify()

    def _load(self, record: Optional[Dict[str, Any]]) -> None:
        record = record or {}
        self.record_id: Optional[int] = record.get("id")
        self.first_name: str = record.get("first_name") or ""
        self.last_name: str = record.get("last_name") or ""
        self.display_name: str = record.get("display_name") or ""
        self.username: str = record.get("username") or ""
        self.email: str = record.get("email") or ""
        self.display_name_state = FieldEditState()
        self.username_state = FieldEditState()

    def change_name(self, first_name: Optional[str] = None, last_name: Optional[str] = None) -> None:
        if first_name is not None:
            self.first_name = first_name
        if last_name is not None:
            self.last_name = last_name
        if not self.display_name_state.manually_edited:
            self.display_name = derive_display_name(self.first_name, self.last_name)
        if not self.username_state.manually_edited:
            self.username = derive_username(self.first_name, self.last_name)
            self.username_check.request(self.username, self.record_id)
        self._notify()

    def edit_display_name(self, value: Optional[str]) -> None:
        self.display_name_state.mark_manual()
        self.display_name = value or ""
        self._notify()

    def edit_username(self, value: Optional[str]) -> None:
        self.username_state.mark_manual()
        self.username = value or ""
        self.username_check.request(self.username, self.record_id)
        self._notify()

    def change_email(self, value: Optional[str]) -> None:
        self.email = value or ""
        self.email_check.request(self.email, self.record_id)
        self._notify()

    def resolve(self) -> DerivedIdentity:
        """Values to submit; empty derived fields are derived one last time."""
        return resolve_identity(self.first_name, self.last_name, self.display_name, self.username)

    async def wait_idle(self) -> None:
        await self.username_check.wait_idle()
        await self.email_check.wait_idle()

    def close(self) -> None:
        self.username_check.close()
        self.email_check.close()
        self._on_change = None

    def snapshot(self) -> Dict[str, Any]:
        return {
            "record_id": self.record_id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "display_name": {"value": self.display_name, "mode": self.display_name_state.mode},
            "username": {"value": self.username, "mode": self.username_state.mode},
            "availability": {
                "username": self.username_check.to_dict(),
                "email": self.email_check.to_dict(),
            },
        }

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()
