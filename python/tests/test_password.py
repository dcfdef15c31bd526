"""
Tests for password generation and password precedence.
"""

import os
import random
import sys
import unittest
from unittest.mock import Mock

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from zip_ops import (
    PASSWORD_ALPHABET,
    PasswordGenerator,
    PasswordSource,
    UsageError,
    resolve_password,
)


class TestPasswordGenerator(unittest.TestCase):
    def test_alphabet_has_seventy_distinct_characters(self):
        self.assertEqual(len(PASSWORD_ALPHABET), 70)
        self.assertEqual(len(set(PASSWORD_ALPHABET)), 70)

    def test_generates_requested_length(self):
        password = PasswordGenerator().generate(12)
        self.assertEqual(len(password), 12)
        self.assertTrue(set(password) <= set(PASSWORD_ALPHABET))

    def test_single_character_password(self):
        self.assertEqual(len(PasswordGenerator().generate(1)), 1)

    def test_zero_length_is_rejected(self):
        with self.assertRaises(UsageError):
            PasswordGenerator().generate(0)

    def test_negative_length_is_rejected(self):
        with self.assertRaises(UsageError):
            PasswordGenerator().generate(-5)

    def test_non_integer_length_is_rejected(self):
        with self.assertRaises(UsageError):
            PasswordGenerator().generate("12")
        with self.assertRaises(UsageError):
            PasswordGenerator().generate(True)

    def test_seeded_source_is_reproducible(self):
        first = PasswordGenerator(rng=random.Random(42)).generate(16)
        second = PasswordGenerator(rng=random.Random(42)).generate(16)
        self.assertEqual(first, second)

    def test_draws_with_replacement(self):
        password = PasswordGenerator(alphabet="ab").generate(50)
        self.assertEqual(len(password), 50)
        self.assertTrue(set(password) <= {"a", "b"})


class TestResolvePassword(unittest.TestCase):
    def test_explicit_password_wins_over_length(self):
        generator = Mock(spec=PasswordGenerator)
        decision = resolve_password("secret", 12, generator)
        self.assertEqual(decision.source, PasswordSource.EXPLICIT)
        self.assertEqual(decision.password, "secret")
        self.assertFalse(decision.generated)
        generator.generate.assert_not_called()

    def test_length_generates_password(self):
        decision = resolve_password(None, 12)
        self.assertEqual(decision.source, PasswordSource.GENERATED)
        self.assertTrue(decision.generated)
        self.assertEqual(len(decision.password), 12)

    def test_no_options_means_no_encryption(self):
        decision = resolve_password()
        self.assertEqual(decision.source, PasswordSource.NONE)
        self.assertIsNone(decision.password)
        self.assertFalse(decision.encrypted)

    def test_invalid_length_is_rejected(self):
        with self.assertRaises(UsageError):
            resolve_password(None, 0)

    def test_empty_explicit_password_is_rejected(self):
        with self.assertRaises(UsageError):
            resolve_password("")

    def test_repr_hides_password(self):
        decision = resolve_password("hunter2")
        self.assertNotIn("hunter2", repr(decision))

    def test_decision_is_immutable(self):
        decision = resolve_password("secret")
        with self.assertRaises(AttributeError):
            decision.password = "other"


if __name__ == "__main__":
    unittest.main()
