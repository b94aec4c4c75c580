"""
Registry module behavioral tests (registration, lookup, decorators, default registry).

Scope
- Validate sanitized registration, last-registration-wins, and `longest` tracking.
- Validate the @command decorator defaults (name from __name__, doc from docstring).
- Validate argument validation and the builtin commands every registry starts with.
- Validate the module-level shortcuts bound to the process-wide default registry.

Conventions
- Test method names follow CamelCase per project convention.
- Each test builds its own Registry; the process-wide default one is only
  touched by the shortcut tests, under names no other test uses.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from sequent import Descriptor, Registry, command, default_registry, lookup, register


def succeed(params):
    return True


def fail(params):
    return False


class TestRegistration(TestCase):

    def setUp(self) -> None:
        self.registry = Registry()

    def testBuiltinsPresent(self):
        self.assertEqual([descriptor.name for descriptor in self.registry], ["version", "help"])
        self.assertEqual(self.registry["version"].doc, "Print version.")
        self.assertEqual(self.registry["help"].doc, "Print help.")

    def testWithoutBuiltins(self):
        self.assertEqual(len(Registry(builtins=False)), 0)

    def testRegisterSanitizesName(self):
        descriptor = self.registry.register("add_two_values", succeed, 2, "Add.")
        self.assertEqual(descriptor.name, "add-two-values")
        self.assertIs(self.registry.lookup("add-two-values"), descriptor)
        self.assertIsNone(self.registry.lookup("add_two_values"))

    def testDescriptorFields(self):
        descriptor = self.registry.register("must_pass", fail, 0, "Must pass.", halt_on_fail=True)
        self.assertEqual(descriptor, Descriptor("must-pass", fail, "Must pass.", 0, True))
        self.assertTrue(descriptor.halt_on_fail)
        self.assertEqual(descriptor.arity, 0)
        self.assertIs(descriptor.handler, fail)

    def testDescriptorIsReadOnly(self):
        descriptor = self.registry.register("ping", succeed)
        with self.assertRaises(AttributeError):
            descriptor.arity = 3

    def testDescriptorCallRunsHandler(self):
        self.assertTrue(self.registry.register("ping", succeed)(None))
        self.assertFalse(self.registry.register("pong", fail)(None))

    def testLastRegistrationWins(self):
        self.registry.register("ping", succeed, 0, "first")
        with self.assertLogs("sequent.registry", level="WARNING"):
            second = self.registry.register("ping", fail, 1, "second")
        self.assertIs(self.registry.lookup("ping"), second)
        self.assertEqual(self.registry["ping"].doc, "second")
        self.assertEqual(len(self.registry), 3)

    def testCollidingRawNamesShareKey(self):
        self.registry.register("do_it", succeed)
        self.registry.register("do.it", fail)
        self.assertIs(self.registry["do-it"].handler, fail)

    def testOverwriteKeepsPosition(self):
        self.registry.register("alpha", succeed)
        self.registry.register("beta", succeed)
        self.registry.register("alpha", fail)
        self.assertEqual([descriptor.name for descriptor in self.registry], ["version", "help", "alpha", "beta"])

    def testLookupMissing(self):
        self.assertIsNone(self.registry.lookup("frobnicate"))
        self.assertNotIn("frobnicate", self.registry)
        with self.assertRaises(KeyError):
            self.registry["frobnicate"]  # NOQA: B-018

    def testLongestTracksPadding(self):
        self.assertEqual(self.registry.longest, len("version") + 3)
        self.registry.register("add_two_values", succeed, 2)
        self.assertEqual(self.registry.longest, len("add-two-values") + 3)
        self.registry.register("x", succeed)
        self.assertEqual(self.registry.longest, len("add-two-values") + 3)

    def testInfoDefaultsAndInit(self):
        self.assertEqual(self.registry.info, ("", "", len("version") + 3))
        self.registry.init("calc", "1.2.3")
        self.assertEqual(self.registry.app_name, "calc")
        self.assertEqual(self.registry.version, "1.2.3")


class TestRegistrationErrors(TestCase):

    def setUp(self) -> None:
        self.registry = Registry()

    def testNameMustBeString(self):
        with self.assertRaises(TypeError):
            self.registry.register(42, succeed)

    def testNameMustBeNonEmpty(self):
        with self.assertRaises(ValueError):
            self.registry.register("", succeed)

    def testHandlerMustBeCallable(self):
        with self.assertRaises(TypeError):
            self.registry.register("ping", "not callable")

    def testArityMustBeNonNegativeInteger(self):
        with self.assertRaises(TypeError):
            self.registry.register("ping", succeed, "2")
        with self.assertRaises(TypeError):
            self.registry.register("ping", succeed, True)
        with self.assertRaises(ValueError):
            self.registry.register("ping", succeed, -1)

    def testDocMustBeString(self):
        with self.assertRaises(TypeError):
            self.registry.register("ping", succeed, 0, None)

    def testInitRejectsNonStrings(self):
        with self.assertRaises(TypeError):
            self.registry.init("calc", 1)


class TestCommandDecorator(TestCase):

    def setUp(self) -> None:
        self.registry = Registry()

    def testDecoratorDefaults(self):
        @self.registry.command(arity=2)
        def add_two_values(params):
            """Add two integers.

            Prints the sum on the console.
            """
            return True

        descriptor = self.registry["add-two-values"]
        self.assertIs(descriptor.handler, add_two_values)
        self.assertEqual(descriptor.arity, 2)
        self.assertEqual(descriptor.doc, "Add two integers.")
        self.assertFalse(descriptor.halt_on_fail)

    def testBareDecorator(self):
        @self.registry.command
        def ping(params):
            return True

        self.assertEqual(self.registry["ping"].doc, "")
        self.assertEqual(self.registry["ping"].arity, 0)

    def testExplicitMetadata(self):
        self.registry.command(fail, name="must_pass", doc="Must pass.", halt_on_fail=True)
        descriptor = self.registry["must-pass"]
        self.assertEqual(descriptor.doc, "Must pass.")
        self.assertTrue(descriptor.halt_on_fail)

    def testDecoratedFunctionUnchanged(self):
        decorated = self.registry.command(succeed)
        self.assertIs(decorated, succeed)

    def testNonCallableRejected(self):
        with self.assertRaises(TypeError):
            self.registry.command("ping")


class TestDefaultRegistry(TestCase):

    def testCreatedOnce(self):
        self.assertIs(default_registry(), default_registry())
        self.assertIn("help", default_registry())

    def testShortcutsTargetDefaultRegistry(self):
        register("shortcut_register", succeed, 1, "Registered.")

        @command(doc="Decorated.")
        def shortcut_command(params):
            return True

        self.assertEqual(lookup("shortcut-register").arity, 1)
        self.assertIs(default_registry()["shortcut-command"].handler, shortcut_command)


if __name__ == "__main__":
    unittest.main()
