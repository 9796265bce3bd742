import unittest

from ratio import gcd, get_prime_factors


class GcdTests(unittest.TestCase):
    def test_examples(self):
        self.assertEqual(gcd(20, 12), 4)
        self.assertEqual(gcd(-4, 6), 2)
        self.assertEqual(gcd(1.5, 2), 0.5)

    def test_symmetric_and_divides_both(self):
        pairs = [(20, 12), (7, 13), (-36, 36), (1071, 462), (10**18, 6), (-9, -12)]
        for a, b in pairs:
            with self.subTest(a=a, b=b):
                factor = gcd(a, b)
                self.assertEqual(factor, gcd(b, a))
                self.assertGreater(factor, 0)
                self.assertEqual(a % factor, 0)
                self.assertEqual(b % factor, 0)

    def test_degenerate_operands_give_one(self):
        for a, b in [(0, 5), (5, 0), (0, 0), (float("nan"), 3), ("abc", 3), (float("inf"), 3)]:
            with self.subTest(a=a, b=b):
                self.assertEqual(gcd(a, b), 1)


class PrimeFactorTests(unittest.TestCase):
    def test_factorisation(self):
        self.assertEqual(get_prime_factors(20), [2, 2, 5])
        self.assertEqual(get_prime_factors(360), [2, 2, 2, 3, 3, 5])
        self.assertEqual(get_prime_factors(49), [7, 7])
        self.assertEqual(get_prime_factors(97), [97])
        self.assertEqual(get_prime_factors(20.7), [2, 2, 5])

    def test_no_factors(self):
        for value in (1, 0, -5, float("inf"), float("nan"), "abc"):
            with self.subTest(value=value):
                self.assertEqual(get_prime_factors(value), [])


if __name__ == "__main__":  # pragma: no cover - direct execution helper
    unittest.main()
