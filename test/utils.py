"""
Tests for the shared utilities.

This module verifies:
- The Unset sentinel (singleton identity, falsiness, copying, finality, unions).
- coalesce, rename and mirror helpers.
- camelize keys and ordinal labels.
"""
import copy
import pickle
import unittest
from types import MappingProxyType
from unittest import TestCase

from acclimate.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `UnsetType` singleton.
    """

    def testSingleton(self) -> None:
        """
        The constructor returns the exported instance on every call.
        """
        self.assertIs(UnsetType(), Unset)
        self.assertIs(UnsetType(), UnsetType())

    def testFalsy(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testCopyPreservesIdentity(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy([Unset])[0], Unset)

    def testUnionInIsinstance(self) -> None:
        """
        `str | Unset` can be used directly in isinstance checks.
        """
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertTrue(isinstance("x", str | Unset))
        self.assertFalse(isinstance(1, str | Unset))

    def testPickleKeepsIdentity(self) -> None:
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFinalClass(self) -> None:
        """
        The class is final: attempts to subclass must fail with TypeError.
        """
        with self.assertRaises(TypeError):
            type("unset", (UnsetType,), {})


class HelpersTest(TestCase):
    """
    Test suite for coalesce, rename and mirror.
    """

    def testCoalesce(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIs(coalesce(False, True), False)
        self.assertIsNone(coalesce(None, "fallback"))

    def testRename(self) -> None:
        @rename("other")
        def function():
            pass

        self.assertEqual(function.__name__, "other")
        self.assertEqual(function.__qualname__, "other")

    def testRenameRejectsBadArguments(self) -> None:
        with self.assertRaises(TypeError):
            rename(42)
        with self.assertRaises(TypeError):
            rename("name")("not callable")

    def testMirrorFreezesContainers(self) -> None:
        class Record:
            items = mirror("items")
            table = mirror("table")
            label = mirror("label")

            def __init__(self):
                self._items = ["a"]
                self._table = {"k": "v"}
                self._label = "text"

        record = Record()
        self.assertEqual(record.items, ("a",))
        self.assertIsInstance(record.table, MappingProxyType)
        self.assertEqual(record.label, "text")
        with self.assertRaises(AttributeError):
            record.items = ()


class NamingTest(TestCase):
    """
    Test suite for camelize and ordinal.
    """

    def testCamelize(self) -> None:
        self.assertEqual(camelize("--dry-run"), "dryRun")
        self.assertEqual(camelize("service"), "service")
        self.assertEqual(camelize("max_retries"), "maxRetries")
        self.assertEqual(camelize("--API-key"), "apiKey")
        self.assertEqual(camelize("isEnabled"), "isEnabled")
        self.assertEqual(camelize("--HTTPPort"), "httpPort")
        self.assertEqual(camelize("--userID"), "userId")
        self.assertEqual(camelize("--api-URL"), "apiUrl")
        self.assertEqual(camelize("--retry2-count"), "retry2Count")

    def testOrdinal(self) -> None:
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(10), "tenth")
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(23), "23rd")
        self.assertEqual(ordinal(112), "112th")
        self.assertEqual(ordinal(101), "101st")


if __name__ == '__main__':
    unittest.main()
