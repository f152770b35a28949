import unittest

import helpers  # noqa: F401

from utils.pure import markdown_table, money, plural


class PureTestCase(unittest.TestCase):
    def test_money(self):
        self.assertEqual(money(0), "$0.00")
        self.assertEqual(money(1299.99), "$1,299.99")
        self.assertEqual(money(9.999), "$10.00")
        self.assertEqual(money(-40), "-$40.00")

    def test_plural(self):
        self.assertEqual(plural(1, "item"), "1 item")
        self.assertEqual(plural(0, "item"), "0 items")
        self.assertEqual(plural(3, "order"), "3 orders")

    def test_markdown_table(self):
        md = markdown_table(["A", "B"], [[1, "x|y"]], ["l", "r"])
        self.assertEqual(
            md.splitlines(),
            ["| A | B |", "| :--- | ---: |", "| 1 | x\\|y |"],
        )

    def test_markdown_table_defaults_and_empty(self):
        md = markdown_table(["Only"], [])
        self.assertEqual(md.splitlines(), ["| Only |", "| :--- |"])

    def test_markdown_table_align_mismatch(self):
        with self.assertRaises(ValueError):
            markdown_table(["A", "B"], [], ["l"])
