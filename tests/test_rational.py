import math
import unittest
from fractions import Fraction

import numpy as np

from ratio import (
    VERSION,
    Ratio,
    as_ratio_array,
    parse,
    rationalize,
    reduce,
    zeros,
    zeros_like,
)


class ConstructionTests(unittest.TestCase):
    def test_defaults(self):
        self.assertEqual(Ratio().to_string(), "0/1")
        self.assertEqual(Ratio().to_array(), [0, 1])
        self.assertEqual(Ratio(5).to_array(), [5, 1])

    def test_sign_moves_to_numerator(self):
        value = Ratio(36, -36)
        self.assertEqual(value.to_array(), [-36, 36])
        self.assertEqual(value.reduce().to_array(), [-1, 1])
        self.assertEqual(reduce(value), [-1, 1])
        self.assertEqual(Ratio(-1, -2).to_array(), [1, 2])

    def test_textual_formats(self):
        self.assertEqual(Ratio("22/7").to_array(), [22, 7])
        self.assertEqual(Ratio("3 1/7").to_array(), [22, 7])
        self.assertEqual(Ratio(0.125).to_array(), [125, 1000])
        self.assertEqual(Ratio("1.1e-30").to_array(), [11, 10**31])
        self.assertEqual(Ratio(Ratio(1, 2)).to_array(), [1, 2])
        self.assertEqual(Ratio(Fraction(3, 4)).to_array(), [3, 4])

    def test_second_operand_divides_first(self):
        self.assertEqual(parse("1/2", "1/3").to_string(), "3/2")
        self.assertEqual(Ratio("1/2", "1/3").to_string(), "3/2")

    def test_parse_pairs(self):
        for a in (-5, 3, 12):
            for b in (-4, 7):
                with self.subTest(a=a, b=b):
                    sign = -1 if (a < 0) != (b < 0) else 1
                    self.assertEqual(parse(a, b).to_array(), [sign * abs(a), abs(b)])

    def test_always_reduce(self):
        value = Ratio(10, 20, True)
        self.assertEqual(value.to_array(), [1, 2])
        self.assertTrue(value.always_reduce)
        self.assertEqual(value.add(Ratio(1, 2)).to_array(), [1, 1])
        self.assertEqual(Ratio(2, 4, True).multiply(Ratio(2, 1)).to_array(), [1, 1])

    def test_unparseable_input(self):
        value = Ratio("abc")
        self.assertTrue(math.isnan(value.numerator))
        self.assertEqual(value.denominator, 1)
        self.assertTrue(math.isnan(value.add(Ratio(1, 2)).numerator))

    def test_round_trip_through_text(self):
        values = [Ratio(22, 7), Ratio(-1, 2), Ratio(6, 4), Ratio(0, 5), Ratio(20, 30).descale(3)]
        for value in values:
            with self.subTest(value=value):
                self.assertTrue(Ratio(value.to_string()).deep_equals(value))

    def test_version(self):
        self.assertEqual(VERSION, "0.3.5")
        self.assertEqual(Ratio.VERSION, VERSION)


class CloneTests(unittest.TestCase):
    def test_clone_overrides(self):
        value = Ratio(2, 4)
        self.assertTrue(value.clone().deep_equals(value))
        self.assertEqual(value.clone(3).to_string(), "3/4")
        self.assertEqual(value.clone(None, -4).to_string(), "-2/4")
        self.assertEqual(value.clone(always_reduce=True).to_array(), [1, 2])

    def test_separator_is_kept(self):
        value = Ratio(8, 2, separator=":")
        self.assertEqual(value.to_string(), "8:2")
        self.assertEqual(value.negate().to_string(), "-8:2")

    def test_separator_assignment(self):
        value = Ratio(8, 2)
        value.separator = ":"
        self.assertEqual(value.to_string(), "8:2")
        with self.assertRaises(ValueError):
            value.separator = "::"
        with self.assertRaises(ValueError):
            Ratio(1, 2, separator="")


class ReduceTests(unittest.TestCase):
    def test_examples(self):
        self.assertEqual(reduce("9/12"), [3, 4])
        self.assertEqual(reduce("10/4"), [5, 2])
        self.assertEqual(reduce(1, 3), [1, 3])
        self.assertEqual(reduce(22, 70), [11, 35])
        self.assertEqual(Ratio(10, 2).reduce().to_string(), "5/1")

    def test_repeating_decimal_is_rebuilt(self):
        self.assertEqual(reduce(0.3333333333333333), [1, 3])
        self.assertEqual(reduce(22 / 7), [22, 7])

    def test_idempotent(self):
        for pair in [(9, 12), (10, 4), (22, 70), (-36, 36), (1, 3), (2, 3)]:
            with self.subTest(pair=pair):
                once = reduce(*pair)
                self.assertEqual(reduce(*once), once)

    def test_scientific_notation(self):
        value = parse("22e31", "70e30").reduce()
        self.assertTrue(value.deep_equals(parse(22, 7)))
        self.assertEqual(value.to_locale_string(), "3 1/7")
        self.assertEqual(Ratio("22e31/70e30").reduce().to_array(), [22, 7])

    def test_reduction_is_logged(self):
        with self.assertLogs("ratio.rational", level="DEBUG"):
            reduce(1, 3)


class ArithmeticTests(unittest.TestCase):
    def test_add(self):
        self.assertEqual(Ratio(1, 3).add(Ratio(1, 2)).to_string(), "5/6")
        self.assertEqual(Ratio(1, 3).add("1/2").to_string(), "5/6")
        self.assertEqual(Ratio(1, 5).add(Ratio(2, 5)).to_string(), "3/5")
        self.assertEqual(Ratio(1, 4).add(Ratio(1, 6)).to_string(), "5/12")

    def test_subtract(self):
        self.assertEqual(Ratio(2, 3).subtract(Ratio(1, 7)).to_string(), "11/21")
        operand = Ratio(1, 7)
        Ratio(2, 3).subtract(operand)
        self.assertEqual(operand.to_string(), "1/7")

    def test_multiply_and_divide(self):
        self.assertEqual(Ratio(2, 5).multiply(Ratio(1, 2)).to_string(), "2/10")
        self.assertEqual(Ratio(1, 2).divide(Ratio(3, 4)).to_string(), "4/6")
        self.assertEqual(Ratio(1, 2).divide(0).to_string(), "1/0")
        self.assertEqual(Ratio(1, 2).divide(0).to_locale_string(), "Infinity")

    def test_pow(self):
        self.assertEqual(Ratio(2, 4).pow(4).to_string(), "16/256")
        self.assertEqual(Ratio(1, 4).pow("1/2").to_string(), "1/2")

    def test_scale_and_descale(self):
        self.assertEqual(Ratio(1, 10).scale(10).to_string(), "10/100")
        self.assertEqual(Ratio(10, 4).descale(2).to_string(), "5/2")
        self.assertEqual(Ratio(20, 30).descale(3).to_string(), "6.666666666666667/10")

    def test_unary_operations(self):
        self.assertEqual(Ratio(3, 10).mod().to_string(), "3/1")
        self.assertEqual(Ratio(-7, 3).mod().to_string(), "-1/1")
        self.assertEqual(Ratio(1, 2).negate().to_string(), "-1/2")
        self.assertEqual(Ratio(-3, 2).abs().to_string(), "3/2")
        self.assertEqual(Ratio(1, 2).reciprocal().to_string(), "2/1")
        self.assertEqual(Ratio(-1, 2).reciprocal().to_string(), "-2/1")

    def test_operations_return_new_instances(self):
        value = Ratio(1, 2)
        value.add(Ratio(1, 3))
        value.negate()
        self.assertEqual(value.to_string(), "1/2")


class QueryTests(unittest.TestCase):
    def test_equals_and_deep_equals(self):
        half = Ratio(1, 2)
        self.assertTrue(half.equals(half))
        self.assertTrue(half.equals(Ratio(2, 4)))
        self.assertTrue(Ratio(2, 4).equals(half))
        self.assertTrue(half.equals(0.5))
        self.assertTrue(half.equals("2/4"))
        self.assertFalse(half.deep_equals(Ratio(2, 4)))
        self.assertFalse(half.deep_equals("1/2"))
        self.assertTrue(half.deep_equals(Ratio(1, 2)))

    def test_is_proper(self):
        self.assertFalse(Ratio(12, 3).is_proper())
        self.assertTrue(Ratio(1, 3).is_proper())
        self.assertTrue(Ratio(-1, 3).is_proper())

    def test_find_x(self):
        self.assertTrue(Ratio(1, 4).find_x("x/20").equals(5))
        self.assertTrue(Ratio(1, 4).find_x("20/x").equals(80))
        self.assertIsNone(Ratio(1, 4).find_x("1/2/3"))
        self.assertIsNone(Ratio(1, 4).find_x("x"))

    def test_approximate_to(self):
        value = Ratio(27, 100)
        self.assertEqual(value.approximate_to(3).to_string(), "1/3")
        self.assertEqual(value.approximate_to("3").to_string(), "1/3")
        self.assertTrue(value.approximate_to("abc").deep_equals(value))

    def test_to_quantity_of(self):
        self.assertEqual(Ratio(1, 2).to_quantity_of(2, 3, 4).to_string(), "1/2")
        self.assertEqual(Ratio(1, 3).to_quantity_of(2, 4, 10).to_string(), "3/10")
        self.assertEqual(Ratio(1, 3).to_quantity_of(3, 2).to_string(), "1/3")
        empty = Ratio(1, 2).to_quantity_of()
        self.assertTrue(math.isnan(empty.numerator))
        self.assertEqual(empty.denominator, 1)


class FormattingTests(unittest.TestCase):
    def test_to_string_is_never_reduced(self):
        self.assertEqual(Ratio(8, 2).to_string(), "8/2")
        self.assertEqual(str(Ratio(2, 4)), "2/4")
        self.assertEqual(repr(Ratio(2, 4)), "Ratio(2, 4)")

    def test_to_locale_string(self):
        self.assertEqual(Ratio(22, 7).to_locale_string(), "3 1/7")
        self.assertEqual(Ratio(1, 10).to_locale_string(), "1/10")
        self.assertEqual(Ratio(0, 0).to_locale_string(), "NaN")
        self.assertEqual(Ratio(8, 2).to_locale_string(), "4")

    def test_clean_format(self):
        value = Ratio(20, 30).descale(3)
        self.assertEqual(value.clean_format().to_string(), "6666666666666667/10000000000000000")
        noisy = Ratio().clone(1.1000000000000003e-30, 1)
        self.assertEqual(noisy.clean_format().to_string(), "1.1e-30/1")
        self.assertTrue(Ratio(1, 2).clean_format().deep_equals(Ratio(1, 2)))

    def test_formatting_support(self):
        value = Ratio(3, 2)
        self.assertEqual(f"{value}", "3/2")
        self.assertEqual(f"{value:.2f}", "1.50")
        self.assertEqual(f"{value:.2e}", f"{float(value):.2e}")
        self.assertEqual(f"{value:r}", "3/2")
        self.assertEqual(f"{Ratio(22, 7):L}", "3 1/7")


class OperatorTests(unittest.TestCase):
    def test_arithmetic_operations(self):
        a = Ratio(1, 3)
        b = Ratio(1, 6)
        self.assertEqual(a + b, Ratio(1, 2))
        self.assertEqual(a - b, Ratio(1, 6))
        self.assertEqual(a * b, Ratio(1, 18))
        self.assertEqual(a / b, Ratio(2))

    def test_mixed_operands(self):
        half = Ratio(1, 2)
        self.assertEqual((half + 1).to_string(), "3/2")
        self.assertEqual((1 + half).to_string(), "3/2")
        self.assertEqual(1 - Ratio(1, 4), Ratio(3, 4))
        self.assertEqual(1 / Ratio(1, 4), 4)
        self.assertEqual(Ratio(2, 3) ** 2, Ratio(4, 9))
        self.assertEqual(-half, Ratio(-1, 2))
        self.assertEqual(abs(Ratio(-1, 2)), half)
        with self.assertRaises(TypeError):
            _ = half + "1/2"

    def test_comparisons(self):
        self.assertLess(Ratio(1, 3), Ratio(1, 2))
        self.assertLessEqual(Ratio(1, 2), 0.5)
        self.assertGreater(Ratio(3, 2), 1)
        self.assertEqual(sorted([Ratio(3, 4), Ratio(1, 4), Ratio(1, 2)]), [Ratio(1, 4), Ratio(1, 2), Ratio(3, 4)])
        self.assertEqual(Ratio(1, 2), Fraction(1, 2))
        self.assertNotEqual(Ratio(1, 2), "1/2")
        self.assertNotEqual(Ratio(0, 0), Ratio(0, 0))

    def test_hash_matches_value_equality(self):
        self.assertEqual(hash(Ratio(1, 2)), hash(Ratio(2, 4)))
        self.assertEqual(hash(Ratio(1, 2)), hash(Fraction(1, 2)))
        self.assertEqual(len({Ratio(1, 2), Ratio(2, 4), Ratio(3, 6)}), 1)

    def test_numeric_protocol(self):
        self.assertEqual(float(Ratio(1, 4)), 0.25)
        self.assertEqual(int(Ratio(-7, 2)), -3)
        self.assertFalse(Ratio(0, 5))
        self.assertEqual(Ratio(3, 4).as_fraction(), Fraction(3, 4))
        self.assertIs(rationalize(Ratio(1, 2)).__class__, Ratio)


class NumpyInteropTests(unittest.TestCase):
    def test_numpy_array_operations_with_scalar(self):
        vector = np.array([0.25, 0.5, 0.75])
        result = Ratio(1, 4) + vector
        self.assertEqual(result.dtype, object)
        self.assertTrue(all(isinstance(item, Ratio) for item in result))
        np.testing.assert_allclose([float(item) for item in result], [0.5, 0.75, 1.0])

    def test_numpy_array_operations_with_object_array(self):
        vector = np.array([Ratio(1, 2), Ratio(1, 3)], dtype=object)
        result = vector + Ratio(1, 6)
        np.testing.assert_allclose([float(item) for item in result], [2 / 3, 1 / 2])

    def test_numpy_ufunc_support(self):
        vector = np.array([Ratio(1, 2), Ratio(3, 4)], dtype=object)
        result = np.add(vector, Ratio(1, 4))
        np.testing.assert_allclose([float(item) for item in result], [0.75, 1.0])

    def test_numpy_power(self):
        vector = np.array([Ratio(2, 3), Ratio(4, 5)], dtype=object)
        result = np.power(vector, 2)
        np.testing.assert_allclose([float(item) for item in result], [4 / 9, 16 / 25])

    def test_ratio_array_helpers(self):
        arr = zeros(4)
        self.assertEqual(arr.shape, (4,))
        self.assertTrue(all(isinstance(item, Ratio) for item in arr))
        with self.assertRaises(ValueError):
            zeros(-1)

        arr_from_list = as_ratio_array([Ratio(1, 2), 0.25, "3/4"])
        self.assertEqual(arr_from_list.shape, (3,))
        self.assertTrue(all(isinstance(item, Ratio) for item in arr_from_list))
        np.testing.assert_allclose([float(item) for item in arr_from_list], [0.5, 0.25, 0.75])

        arr_like = zeros_like(np.zeros((2, 3)))
        self.assertEqual(arr_like.shape, (2, 3))
        self.assertTrue(all(float(item) == 0.0 for item in arr_like.flat))

    def test_ratio_array_always_reduce(self):
        arr = as_ratio_array([Ratio(2, 4), "6/8"], always_reduce=True)
        self.assertEqual([item.to_array() for item in arr], [[1, 2], [3, 4]])


if __name__ == "__main__":  # pragma: no cover - direct execution helper
    unittest.main()
