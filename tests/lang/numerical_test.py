import unittest

from arp.lang.numerical import divide, is_number, normalize, remainder, to_number


class NumericalTestCase(unittest.TestCase):

    def test_is_number(self):
        should_fail = [True, False, "1", None, ""]
        for case in should_fail:
            self.assertFalse(is_number(case), case)

        should_pass = [0, 3, -2, 0.5, 4.0]
        for case in should_pass:
            self.assertTrue(is_number(case), case)

    def test_to_number(self):
        cases = {"0": 0, "42": 42, "007": 7}
        for case, result in cases.items():
            self.assertEqual(result, to_number(case), case)

    def test_normalize(self):
        self.assertIsInstance(normalize(2.0), int)
        self.assertEqual(2.5, normalize(2.5))
        self.assertEqual(7, normalize(7))

    def test_divide(self):
        self.assertEqual(2, divide(10, 5))
        self.assertIsInstance(divide(10, 5), int)
        self.assertEqual(2.5, divide(5, 2))
        self.assertEqual(20000000000000000001, divide(20000000000000000001, 1))
        self.assertEqual(int("3" * 400), divide(int("9" * 400), 3))
        self.assertIsInstance(divide(int("9" * 400), 3), int)

    def test_remainder(self):
        cases = {(10, 3): 1, (-10, 3): -1, (10, -3): 1, (-10, -3): -1, (9, 3): 0, (7.5, 2): 1.5}
        for (dividend, divisor), result in cases.items():
            self.assertEqual(result, remainder(dividend, divisor), (dividend, divisor))


if __name__ == '__main__':
    unittest.main()
