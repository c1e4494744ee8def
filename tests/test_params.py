from __future__ import annotations

import unittest
from decimal import Decimal
from enum import IntEnum

from simple_orm import BoundParams, ParamType, bind_params, classify
from simple_orm.core.params import coerce


class _Level(IntEnum):
    LOW = 1
    HIGH = 2


class ClassifyTests(unittest.TestCase):
    def test_first_match_wins(self) -> None:
        cases = [
            (0, ParamType.INTEGER),
            (-42, ParamType.INTEGER),
            (_Level.HIGH, ParamType.INTEGER),
            (1.5, ParamType.FLOAT),
            (float("inf"), ParamType.FLOAT),
            ("30", ParamType.TEXT),
            (b"\x00\x01", ParamType.TEXT),
            (Decimal("1.10"), ParamType.TEXT),
            (None, ParamType.TEXT),
            (True, ParamType.TEXT),
            (False, ParamType.TEXT),
            ([1, 2], ParamType.TEXT),
        ]
        for value, expected in cases:
            with self.subTest(value=value):
                self.assertIs(classify(value), expected)

    def test_tags_match_bind_letters(self) -> None:
        self.assertEqual(ParamType.INTEGER.tag, "i")
        self.assertEqual(ParamType.FLOAT.tag, "d")
        self.assertEqual(ParamType.TEXT.tag, "s")


class CoerceTests(unittest.TestCase):
    def test_text_coercion(self) -> None:
        self.assertEqual(coerce(Decimal("2.50"), ParamType.TEXT), "2.50")
        self.assertEqual(coerce(True, ParamType.TEXT), "1")
        self.assertEqual(coerce(False, ParamType.TEXT), "0")
        self.assertIsNone(coerce(None, ParamType.TEXT))
        self.assertEqual(coerce(b"raw", ParamType.TEXT), b"raw")

    def test_numeric_coercion(self) -> None:
        value = coerce(_Level.LOW, ParamType.INTEGER)
        self.assertIs(type(value), int)
        self.assertEqual(value, 1)
        self.assertEqual(coerce(3, ParamType.FLOAT), 3.0)


class BindParamsTests(unittest.TestCase):
    def test_empty_or_missing_params_skip_binding(self) -> None:
        self.assertIsNone(bind_params([]))
        self.assertIsNone(bind_params(()))
        self.assertIsNone(bind_params(None))

    def test_types_and_values_stay_aligned(self) -> None:
        bound = bind_params(["a@x.com", 30, 1.25, None, False])
        self.assertIsNotNone(bound)
        if bound is None:
            self.fail("Expected bound params.")
        self.assertEqual(bound.types, "sidss")
        self.assertEqual(bound.values, ("a@x.com", 30, 1.25, None, "0"))
        self.assertEqual(len(bound.types), len(bound.values))
        self.assertEqual(len(bound), 5)
        self.assertEqual(
            bound.param_types,
            (
                ParamType.TEXT,
                ParamType.INTEGER,
                ParamType.FLOAT,
                ParamType.TEXT,
                ParamType.TEXT,
            ),
        )

    def test_lengths_equal_for_many_shapes(self) -> None:
        samples = [[1], [1, "x"], [None] * 7, [0.1, 2, "3", b"4", True]]
        for params in samples:
            with self.subTest(params=params):
                bound = bind_params(params)
                self.assertIsNotNone(bound)
                if bound is None:
                    self.fail("Expected bound params.")
                self.assertEqual(len(bound.types), len(params))
                self.assertEqual(len(bound.values), len(params))

    def test_string_is_not_a_parameter_list(self) -> None:
        with self.assertRaises(TypeError):
            bind_params("abc")
        with self.assertRaises(TypeError):
            bind_params(b"abc")

    def test_unordered_collections_are_rejected(self) -> None:
        for params in ({"email": "a@x.com"}, {"a@x.com", 30}, {}, set(), 7):
            with self.subTest(params=params):
                with self.assertRaises(TypeError):
                    bind_params(params)

    def test_mismatched_bound_params_rejected(self) -> None:
        with self.assertRaises(ValueError):
            BoundParams(types="ii", values=(1,))


if __name__ == "__main__":
    unittest.main()
