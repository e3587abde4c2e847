import pytest

from rental_escrow.shared.domain import Timestamp


class TestTimestamp:
    def test_seconds_since(self):
        assert Timestamp(1_000).seconds_since(Timestamp(400)) == 600

    def test_seconds_since_later_time_is_zero(self):
        assert Timestamp(400).seconds_since(Timestamp(1_000)) == 0

    def test_plus_seconds(self):
        assert Timestamp(100).plus_seconds(60) == Timestamp(160)

    def test_negative_timestamp_raises_error(self):
        with pytest.raises(ValueError, match="Timestamp cannot be negative"):
            Timestamp(-1)
