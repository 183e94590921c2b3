"""
Display name and username derivation from a person's first and last name.

Both functions are total: empty input produces an empty string, never an error.
"""
import re
from typing import NamedTuple, Optional

_WHITESPACE = re.compile(r"\s+")


class DerivedIdentity(NamedTuple):
    display_name: str
    username: str


def derive_display_name(first_name: Optional[str], last_name: Optional[str]) -> str:
    """"jane", "doe" -> "Jane D". The rest of the first name is lowercased."""
    first_name = first_name or ""
    last_name = last_name or ""
    if not first_name:
        return ""
    cased_first = first_name[0].upper() + first_name[1:].lower()
    if last_name:
        return f"{cased_first} {last_name[0].upper()}"
    return cased_first


def derive_username(first_name: Optional[str], last_name: Optional[str]) -> str:
    """"Mary Ann", "Smith" -> "maryanns"."""
    first_name = first_name or ""
    last_name = last_name or ""
    if not first_name:
        return ""
    first = _WHITESPACE.sub("", first_name.lower())
    last_initial = last_name[0].lower() if last_name else ""
    return f"{first}{last_initial}"


def derive_identity(first_name: Optional[str], last_name: Optional[str]) -> DerivedIdentity:
    return DerivedIdentity(
        display_name=derive_display_name(first_name, last_name),
        username=derive_username(first_name, last_name),
    )


def resolve_identity(
    first_name: Optional[str],
    last_name: Optional[str],
    display_name: Optional[str] = None,
    username: Optional[str] = None,
) -> DerivedIdentity:
    """Keep submitted values, deriving only the ones left empty."""
    return DerivedIdentity(
        display_name=display_name or derive_display_name(first_name, last_name),
        username=username or derive_username(first_name, last_name),
    )
