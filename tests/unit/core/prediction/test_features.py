import math
import unittest

from core.prediction import FEATURE_COUNT, build_feature_vector, pad_features
from tests.mocks.business_mocks import CURRENT_YEAR, make_business


class TestPadFeatures(unittest.TestCase):

    def test_pads_short_input(self):
        self.assertEqual(pad_features([1, 2.5]), [1.0, 2.5] + [0.0] * 8)

    def test_truncates_long_input(self):
        result = pad_features(list(range(15)))
        self.assertEqual(len(result), FEATURE_COUNT)
        self.assertEqual(result[-1], 9.0)

    def test_drops_non_numeric(self):
        result = pad_features([1, "x", None, True, 3.0])
        self.assertEqual(result[:3], [1.0, 3.0, 0.0])

    def test_coerces_numeric_strings(self):
        self.assertEqual(pad_features(["4.5", 12])[:3], [4.5, 12.0, 0.0])
        self.assertEqual(pad_features(["4.5", 12, "3"])[:3], [4.5, 12.0, 3.0])

    def test_drops_nan_and_infinity(self):
        result = pad_features([float("nan"), 1, float("inf"), "NaN", 2])
        self.assertEqual(result[:3], [1.0, 2.0, 0.0])
        self.assertTrue(all(math.isfinite(x) for x in result))

    def test_empty(self):
        self.assertEqual(pad_features([]), [0.0] * FEATURE_COUNT)


class TestBuildFeatureVector(unittest.TestCase):

    def test_full_business(self):
        business = make_business(
            rating=4.5, review_count=12, founded_year=CURRENT_YEAR - 6,
            employees_count=50, verified=True
        )

        features = build_feature_vector(business, current_year=CURRENT_YEAR)

        self.assertEqual(features[:5], [4.5, 12.0, 6.0, 0.5, 1.0])
        self.assertEqual(features[5:], [0.0] * 5)

    def test_missing_values_are_zero(self):
        business = make_business(
            rating=None, review_count=None, founded_year=None,
            employees_count=None, verified=False
        )

        self.assertEqual(build_feature_vector(business, current_year=CURRENT_YEAR), [0.0] * FEATURE_COUNT)

    def test_future_founding_year_is_clamped(self):
        business = make_business(founded_year=CURRENT_YEAR + 3)
        self.assertEqual(build_feature_vector(business, current_year=CURRENT_YEAR)[2], 0.0)


if __name__ == '__main__':
    unittest.main()
