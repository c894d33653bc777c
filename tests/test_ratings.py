# tests/test_ratings.py
import math
import pytest
import numpy as np

from qres.core.ratings import validate_rating, compute_rpn
from qres.core.exceptions import InvalidRatingError


class TestValidateRating:
    """Test the rating predicate."""

    @pytest.mark.parametrize("value", [1, 5, 10, 7.0, np.int64(3)])
    def test_valid_ratings(self, value):
        assert validate_rating(value) is True

    @pytest.mark.parametrize("value", [0, 11, -3, 5.5, True, False, "5", None, math.nan, math.inf])
    def test_invalid_ratings(self, value):
        assert validate_rating(value) is False

    @pytest.mark.parametrize("value, expected", [
        (np.int64(3), True),
        (np.int64(0), False),
        (np.float64(7.0), True),
        (np.float64(12.0), False),
    ])
    def test_numpy_values_return_plain_bool(self, value, expected):
        result = validate_rating(value)
        assert type(result) is bool
        assert result is expected

    def test_custom_bounds(self):
        """Bounds are inclusive and can be overridden."""
        assert validate_rating(0, min_value=0, max_value=5) is True
        assert validate_rating(6, min_value=0, max_value=5) is False


class TestComputeRpn:
    """Test the validated RPN product."""

    def test_rpn_is_product(self):
        assert compute_rpn(5, 4, 3) == 60

    def test_rpn_range_endpoints(self):
        assert compute_rpn(1, 1, 1) == 1
        assert compute_rpn(10, 10, 10) == 1000

    def test_integral_floats_give_int(self):
        rpn = compute_rpn(2.0, 3, 4)
        assert rpn == 24
        assert isinstance(rpn, int)

    def test_all_ratings_in_cube(self):
        """rpn == s*o*d and stays within 1-1000 for every valid triple."""
        for s in range(1, 11):
            for o in range(1, 11):
                for d in range(1, 11):
                    rpn = compute_rpn(s, o, d)
                    assert rpn == s * o * d
                    assert 1 <= rpn <= 1000

    @pytest.mark.parametrize("ratings, field", [
        ((0, 5, 5), "severity"),
        ((5, 11, 5), "occurrence"),
        ((5, 5, 2.5), "detection"),
    ])
    def test_invalid_rating_raises(self, ratings, field):
        with pytest.raises(InvalidRatingError, match=field):
            compute_rpn(*ratings)

    def test_invalid_rating_is_value_error(self):
        """Callers catching ValueError also catch rating errors."""
        with pytest.raises(ValueError):
            compute_rpn(5, 5, 0)
