"""
Utils module tests (name sanitizing, sentinel, verbatim lines).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from rich.console import Console

from sequent.utils import Unset, UnsetType, Verbatim, nullify, sanitize


class TestSanitize(TestCase):

    def testAlphanumericPreserved(self):
        self.assertEqual(sanitize("Version2"), "Version2")

    def testSeparatorReplacesEverythingElse(self):
        self.assertEqual(sanitize("add_two_values"), "add-two-values")
        self.assertEqual(sanitize("must pass!"), "must-pass-")
        self.assertEqual(sanitize("a.b/c"), "a-b-c")

    def testNonAsciiLettersReplaced(self):
        self.assertEqual(sanitize("café"), "caf-")

    def testLengthPreserved(self):
        for name in ("x", "__init__", "a  b", "ünï"):
            with self.subTest(name=name):
                self.assertEqual(len(sanitize(name)), len(name))

    def testEmpty(self):
        self.assertEqual(sanitize(""), "")

    def testIdempotent(self):
        for name in ("add_two_values", "must pass!", "ok", "--", "ünï"):
            with self.subTest(name=name):
                self.assertEqual(sanitize(sanitize(name)), sanitize(name))

    def testNonStringRejected(self):
        with self.assertRaises(TypeError):
            sanitize(42)


class TestUnset(TestCase):

    def testSingletonAndFalsy(self):
        self.assertIs(UnsetType(), Unset)
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testNullify(self):
        self.assertEqual(nullify(Unset, "fallback"), "fallback")
        self.assertIsNone(nullify(Unset))
        self.assertEqual(nullify(0, "fallback"), 0)

    def testFinal(self):
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})


class TestVerbatim(TestCase):

    def setUp(self) -> None:
        self.console = Console(color_system=None, force_terminal=False, width=20)

    def render(self, line):
        with self.console.capture() as capture:
            self.console.print(line, soft_wrap=True)
        return capture.get()

    def testPlainJoinsParts(self):
        self.assertEqual(Verbatim("help", ("   Print help.", "bold")).plain, "help   Print help.")

    def testTabsAreNotExpanded(self):
        self.assertEqual(self.render(Verbatim("a\tb")), "a\tb\n")

    def testLongLineIsNotWrapped(self):
        self.assertEqual(self.render(Verbatim("x" * 50)), "x" * 50 + "\n")

    def testMarkupIsNotInterpreted(self):
        self.assertEqual(self.render(Verbatim("[bold]x[/]")), "[bold]x[/]\n")

    def testStylesDroppedWithoutColors(self):
        self.assertEqual(self.render(Verbatim(("label", "bold red"), ": ", "token")), "label: token\n")


if __name__ == "__main__":
    unittest.main()
