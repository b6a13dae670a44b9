"""
Tests for the internal helpers (Unset, coalesce, rename, mirror).

This module verifies:
- Singleton identity, falsy semantics and finality of the Unset sentinel.
- PEP 604 union support used by isinstance checks (str | Unset).
- coalesce only replacing Unset.
- rename in both call forms.
- mirror returning copies of container values.
"""
import unittest
from unittest import TestCase

from backdrop.utils import *


class UnsetTest(TestCase):
    """Test suite for the Unset sentinel."""

    def testSingleton(self) -> None:
        self.assertIs(UnsetType(), Unset)
        self.assertIs(UnsetType(), UnsetType())

    def testFalsy(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertEqual(repr(Unset), "Unset")

    def testUnion(self) -> None:
        self.assertIsInstance("name", str | Unset)
        self.assertIsInstance(Unset, str | Unset)
        self.assertNotIsInstance(3, str | Unset)

    def testFinal(self) -> None:
        with self.assertRaises(TypeError):
            class Subtype(UnsetType):  # NOQA: F-841
                pass


class HelpersTest(TestCase):
    """Test suite for coalesce, rename and mirror."""

    def testCoalesce(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 5), 0)

    def testRenameDirect(self) -> None:
        def function():
            pass

        self.assertIs(rename(function, "renamed"), function)
        self.assertEqual(function.__name__, "renamed")
        self.assertEqual(function.__qualname__, "renamed")

    def testRenameDecorator(self) -> None:
        @rename("renamed")
        def function():
            pass

        self.assertEqual(function.__name__, "renamed")

    def testRenameRejectsBadArguments(self) -> None:
        with self.assertRaises(TypeError):
            rename(1, "name")
        with self.assertRaises(TypeError):
            rename()

    def testMirrorCopiesContainers(self) -> None:
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = ["a", "b"]

        holder = Holder()
        holder.items.append("c")
        self.assertEqual(holder.items, ["a", "b"])

    def testMirrorIsReadOnly(self) -> None:
        class Holder:
            name = mirror("name")
            _name = "value"

        with self.assertRaises(AttributeError):
            Holder().name = "other"


if __name__ == "__main__":
    unittest.main()
