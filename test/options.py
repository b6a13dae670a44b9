"""
Option model behavioral tests (identity rules, variants, introspection).

Scope
- Validate construction checks: at least one flag, single non-numeric short
  flag, non-empty non-numeric long flag, help message type.
- Validate each variant's set_value success condition and stored value, and
  that a rejected span leaves the value untouched.
- Validate was_set derivation, flag descriptions, matching and repr.
- Validate that the variant set is closed.

Conventions
- Test method names follow CamelCase per project convention.
- Options are exercised directly, without a CommandLine.
"""
import enum
import unittest
from unittest import TestCase, mock

from backdrop.options import *


class Mode(enum.Enum):
    FAST = "fast"
    SAFE = "safe"


class TestIdentity(TestCase):
    """Behavioral tests for flag identity and metadata."""

    def testRequiresAtLeastOneFlag(self):
        with self.assertRaises(TypeError):
            BoolOption()
        with self.assertRaises(TypeError):
            BoolOption(help_message="nothing to match")

    def testShortFlagMustBeSingleCharacter(self):
        with self.assertRaises(ValueError):
            BoolOption(short_flag="ab")
        with self.assertRaises(ValueError):
            BoolOption(short_flag="")

    def testShortFlagCannotBeAttacher(self):
        with self.assertRaises(ValueError):
            StringOption(short_flag="=")

    def testShortFlagCannotBeNumeric(self):
        with self.assertRaises(ValueError):
            BoolOption(short_flag="5")

    def testLongFlagRules(self):
        for flag in ("", "5", "12", "-verbose", "name=value"):
            with self.subTest(flag=flag):
                with self.assertRaises(ValueError):
                    StringOption(long_flag=flag)

    def testFlagsMustBeStrings(self):
        with self.assertRaises(TypeError):
            IntOption(short_flag=1)
        with self.assertRaises(TypeError):
            IntOption(long_flag=b"int")

    def testErrorMessageNamesVariant(self):
        with self.assertRaisesRegex(ValueError, "^multi-string-option short flag"):
            MultiStringOption(short_flag="xy")

    def testHelpMessageMustBeString(self):
        with self.assertRaises(TypeError):
            BoolOption(short_flag="h", help_message=3)

    def testDefaults(self):
        option = StringOption(long_flag="name")
        self.assertIsNone(option.short_flag)
        self.assertEqual(option.long_flag, "name")
        self.assertFalse(option.required)
        self.assertEqual(option.help_message, "")

    def testRequiredIsBool(self):
        self.assertIs(StringOption(long_flag="name", required=1).required, True)

    def testIdentityIsReadOnly(self):
        option = BoolOption(short_flag="v")
        with self.assertRaises(AttributeError):
            option.short_flag = "w"
        with self.assertRaises(AttributeError):
            option.value = True

    def testFlagDescription(self):
        self.assertEqual(BoolOption(short_flag="s", long_flag="long").flag_description, "-s, --long")
        self.assertEqual(BoolOption(long_flag="long").flag_description, "--long")
        self.assertEqual(BoolOption(short_flag="s").flag_description, "-s")

    def testFlagMatchIsCaseSensitive(self):
        option = BoolOption(short_flag="v", long_flag="verbose")
        self.assertTrue(option.flag_match("v"))
        self.assertTrue(option.flag_match("verbose"))
        self.assertFalse(option.flag_match("V"))
        self.assertFalse(option.flag_match("Verbose"))
        self.assertFalse(option.flag_match("verb"))

    def testRepr(self):
        self.assertEqual(
            repr(IntOption(short_flag="i")),
            "int-option(short_flag='i', long_flag=None, required=False, help_message='', value=None)",
        )

    def testRichRepr(self):
        self.assertEqual(
            dict(BoolOption(short_flag="b").__rich_repr__()),
            {"short_flag": "b", "long_flag": None, "required": False, "help_message": "", "value": False},
        )


class TestVariants(TestCase):
    """Behavioral tests for the value-holding variants."""

    def testBool(self):
        option = BoolOption(short_flag="b")
        self.assertFalse(option.was_set)
        self.assertIs(option.value, False)
        self.assertTrue(option.set_value(["ignored"]))
        self.assertIs(option.value, True)
        self.assertTrue(option.was_set)

    def testCounter(self):
        option = CounterOption(short_flag="v")
        self.assertFalse(option.was_set)
        for _ in range(3):
            self.assertTrue(option.set_value([]))
        self.assertEqual(option.value, 3)
        self.assertTrue(option.was_set)

    def testInt(self):
        option = IntOption(short_flag="i")
        self.assertFalse(option.set_value([]))
        self.assertFalse(option.set_value(["abc"]))
        self.assertIsNone(option.value)
        self.assertFalse(option.was_set)
        self.assertTrue(option.set_value(["-5", "ignored"]))
        self.assertEqual(option.value, -5)
        self.assertTrue(option.was_set)

    def testIntRejectionKeepsValue(self):
        option = IntOption(short_flag="i")
        option.set_value(["42"])
        self.assertFalse(option.set_value(["4.2"]))
        self.assertEqual(option.value, 42)

    def testDouble(self):
        option = DoubleOption(long_flag="ratio")
        with mock.patch("backdrop.strings.decimal_point", return_value="."):
            self.assertFalse(option.set_value([]))
            self.assertFalse(option.set_value(["1e3"]))
            self.assertTrue(option.set_value(["-1.5"]))
        self.assertEqual(option.value, -1.5)
        self.assertTrue(option.was_set)

    def testString(self):
        option = StringOption(short_flag="s")
        self.assertFalse(option.set_value([]))
        self.assertFalse(option.was_set)
        self.assertTrue(option.set_value(["first", "second"]))
        self.assertEqual(option.value, "first")

    def testEmptyStringIsSet(self):
        option = StringOption(short_flag="s")
        self.assertTrue(option.set_value([""]))
        self.assertTrue(option.was_set)

    def testMultiStringReplaces(self):
        option = MultiStringOption(short_flag="m")
        self.assertFalse(option.set_value([]))
        self.assertTrue(option.set_value(["a", "b"]))
        self.assertEqual(option.value, ["a", "b"])
        self.assertTrue(option.set_value(["c"]))
        self.assertEqual(option.value, ["c"])

    def testMultiStringValueIsCopy(self):
        option = MultiStringOption(short_flag="m")
        values = ["a"]
        option.set_value(values)
        values.append("b")
        option.value.append("c")
        self.assertEqual(option.value, ["a"])

    def testEnumByValue(self):
        option = EnumOption(Mode, short_flag="m")
        self.assertIs(option.type, Mode)
        self.assertFalse(option.set_value([]))
        self.assertFalse(option.set_value(["FAST"]))
        self.assertFalse(option.was_set)
        self.assertTrue(option.set_value(["safe"]))
        self.assertIs(option.value, Mode.SAFE)

    def testEnumRequiresEnumType(self):
        with self.assertRaises(TypeError):
            EnumOption(str, short_flag="m")

    def testEnumRequiresFlag(self):
        with self.assertRaises(TypeError):
            EnumOption(Mode)

    def testVariantsAreSealed(self):
        for variant in (BoolOption, CounterOption, IntOption, DoubleOption, StringOption, MultiStringOption, EnumOption):
            with self.subTest(variant=variant.__name__):
                with self.assertRaises(TypeError):
                    type("Derived", (variant,), {})

    def testBaseIsAbstract(self):
        with self.assertRaises(TypeError):
            Option(short_flag="o")

    def testBaseMethodsRequireOverride(self):
        class Custom(Option):
            pass

        option = Custom(short_flag="o")
        with self.assertRaises(NotImplementedError):
            option.set_value([])
        with self.assertRaises(NotImplementedError):
            option.was_set


if __name__ == "__main__":
    unittest.main()
