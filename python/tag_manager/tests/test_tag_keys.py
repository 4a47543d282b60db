"""Tests for tag_keys.py lookups."""

import pytest

from tag_manager.models import TagType
from tag_manager.tag_keys import PROP_KEYS, key_of, tag_type_of


DEFINED_TYPES = [t for t in TagType if t != TagType.UNDEFINED]


class TestKeyOf:
    """Tests for key_of."""

    def test_year_maps_to_date(self):
        """YEAR is stored under the date key."""
        assert key_of(TagType.YEAR) == "date"

    def test_every_defined_type_has_a_key(self):
        """Should cover every tag type except UNDEFINED."""
        assert set(PROP_KEYS) == set(DEFINED_TYPES)

    def test_keys_are_unique(self):
        """Table must be one-to-one."""
        assert len(set(PROP_KEYS.values())) == len(PROP_KEYS)

    def test_undefined_has_no_key(self):
        with pytest.raises(KeyError):
            key_of(TagType.UNDEFINED)


class TestTagTypeOf:
    """Tests for tag_type_of."""

    @pytest.mark.parametrize("tag_type", DEFINED_TYPES)
    def test_round_trip(self, tag_type):
        """Looking up a type's key should give the type back."""
        assert tag_type_of(key_of(tag_type)) == tag_type

    def test_unknown_key(self):
        assert tag_type_of("NOT_A_REAL_KEY") == TagType.UNDEFINED

    def test_is_case_sensitive(self):
        """Only exact matches count."""
        assert tag_type_of("ARTIST") == TagType.UNDEFINED
        assert tag_type_of("artist") == TagType.ARTIST

    def test_empty_key(self):
        assert tag_type_of("") == TagType.UNDEFINED
