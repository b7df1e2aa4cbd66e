"""Static dealer and showroom catalog.

The catalog is read-only configuration: it feeds the dealer/showroom
dropdowns in the UI and the ``/api/catalog`` endpoint.  The record store does
not enforce it; a record stores whatever dealer and showroom the client
selected.
"""

from __future__ import annotations

DEALER_SHOWROOMS: dict[str, list[str]] = {
    "마이스터모터스": ["강남대치", "구로천왕", "인천"],
    "클라쎄오토": ["일산", "수원", "용산", "동대문", "구리", "해운대", "동래"],
    "아우토플라츠": ["송파", "판교", "분당", "안양", "원주", "대전", "천안"],
    "지오하우스": ["전주", "광주", "순천"],
    "지엔비": ["대구", "창원"],
}

DEFAULT_DEALER = "마이스터모터스"


def list_dealers() -> list[str]:
    """Return dealer names in catalog order."""
    return list(DEALER_SHOWROOMS)


def showrooms_for(dealer: str | None) -> list[str]:
    """Return the showrooms of *dealer*, or an empty list for an unknown dealer."""
    if not dealer:
        return []
    return list(DEALER_SHOWROOMS.get(dealer, []))


def default_showroom(dealer: str | None) -> str | None:
    """Return the showroom preselected when *dealer* is chosen.

    Selecting a dealer resets the showroom to that dealer's first entry.
    """
    showrooms = showrooms_for(dealer)
    return showrooms[0] if showrooms else None


def is_valid_showroom(dealer: str | None, showroom: str | None) -> bool:
    """Check whether *showroom* belongs to *dealer*."""
    return bool(showroom) and showroom in showrooms_for(dealer)
