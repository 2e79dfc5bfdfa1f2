# tests/unit/test_coerce.py
from src.fpl_cache.coerce import as_bool, as_float, as_int, as_mapping, as_str, pick


class TestPick:
    def test_first_non_null_wins(self):
        assert pick({"a": None, "b": 2, "c": 3}, "a", "b", "c") == 2

    def test_default_when_all_missing(self):
        assert pick({}, "a", "b", default=7) == 7

    def test_falsy_values_are_kept(self):
        assert pick({"a": 0, "b": 5}, "a", "b") == 0


class TestNumbers:
    def test_numeric_strings(self):
        assert as_int("12") == 12
        assert as_float("4.5") == 4.5

    def test_int_truncates_floats(self):
        assert as_int(7.9) == 7
        assert as_int("7.9") == 7

    def test_garbage_uses_default(self):
        assert as_int("abc") == 0
        assert as_int(None, None) is None
        assert as_float(float("inf")) == 0.0
        assert as_float([1], None) is None


class TestStringsAndBools:
    def test_as_str(self):
        assert as_str(5) == "5"
        assert as_str(None) == ""
        assert as_str(None, None) is None

    def test_as_bool(self):
        assert as_bool("true") is True
        assert as_bool("No") is False
        assert as_bool(1) is True
        assert as_bool(0.0) is False
        assert as_bool(None) is False
        assert as_bool("maybe", None) is None

    def test_as_mapping(self):
        assert as_mapping({"a": 1}) == {"a": 1}
        assert as_mapping([1]) is None
