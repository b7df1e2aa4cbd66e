"""Unit tests for the dealer/showroom catalog."""

from photostudio.core.catalog import (
    DEALER_SHOWROOMS,
    DEFAULT_DEALER,
    default_showroom,
    is_valid_showroom,
    list_dealers,
    showrooms_for,
)


class TestCatalogContents:
    """The catalog is the fixed dealer table."""

    def test_five_dealers_in_order(self):
        assert list_dealers() == ["마이스터모터스", "클라쎄오토", "아우토플라츠", "지오하우스", "지엔비"]

    def test_default_dealer_is_first(self):
        assert DEFAULT_DEALER == list_dealers()[0]

    def test_every_dealer_has_showrooms(self):
        for dealer, showrooms in DEALER_SHOWROOMS.items():
            assert showrooms, dealer

    def test_known_showrooms(self):
        assert showrooms_for("마이스터모터스") == ["강남대치", "구로천왕", "인천"]
        assert showrooms_for("지엔비") == ["대구", "창원"]


class TestShowroomLookup:
    """Tests for showrooms_for() and default_showroom()."""

    def test_unknown_dealer_has_no_showrooms(self):
        assert showrooms_for("없는딜러") == []
        assert showrooms_for(None) == []

    def test_showrooms_for_returns_copy(self):
        """Callers can't mutate the catalog through the returned list."""
        showrooms_for("지엔비").append("서울")
        assert showrooms_for("지엔비") == ["대구", "창원"]

    def test_default_showroom_is_first_entry(self):
        assert default_showroom("클라쎄오토") == "일산"

    def test_default_showroom_for_unknown_dealer(self):
        assert default_showroom("없는딜러") is None


class TestIsValidShowroom:
    """Tests for is_valid_showroom()."""

    def test_matching_pair(self):
        assert is_valid_showroom("지오하우스", "순천")

    def test_showroom_of_another_dealer(self):
        assert not is_valid_showroom("지오하우스", "대구")

    def test_missing_showroom(self):
        assert not is_valid_showroom("지오하우스", None)
        assert not is_valid_showroom("지오하우스", "")
