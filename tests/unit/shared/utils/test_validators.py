import pytest

from rental_escrow.shared.utils import to_uint


class TestToUint:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (0, 0),
            (42, 42),
            ("500000000000000000", 500000000000000000),
            (" 7 ", 7),
            (str(2**256 - 1), 2**256 - 1),
        ],
    )
    def test_valid_values(self, value, expected):
        assert to_uint(value) == expected

    @pytest.mark.parametrize("value", [-1, "-1", "1.5", "", "abc", 1.0, None, True])
    def test_invalid_values(self, value):
        with pytest.raises(ValueError):
            to_uint(value)
