"""
Usage rendering tests (layout, alignment, error preamble, styling).

Scope
- Validate the label column width (longest "  <flag description>:").
- Validate the exact plain layout of format_usage with and without an error.
- Validate print_usage destinations and the __main__.__prog__ override.
- Validate that styling is applied only when colorful is enabled.

Conventions
- Test method names follow CamelCase per project convention.
"""
import io
import sys
import unittest
from unittest import TestCase, mock

from rich.console import Console

from backdrop import *
from backdrop.usage import label_width, render_usage


def options():
    return [
        StringOption(short_flag="e", long_flag="envFile", help_message="Custom EnvFile to use."),
        BoolOption(long_flag="help", help_message="Prints this message."),
        IntOption(short_flag="n", required=True, help_message="Build number."),
    ]


EXPECTED = (
    "Usage: prog [options]\n"
    "  -e, --envFile:\n"
    "      Custom EnvFile to use.\n"
    "  --help:       \n"
    "      Prints this message.\n"
    "  -n:           \n"
    "      Build number.\n"
)


class TestUsage(TestCase):
    """Behavioral tests for the usage message."""

    def setUp(self):
        self.cli = CommandLine("prog")
        self.cli.add_options(options())

    def testLabelWidth(self):
        self.assertEqual(label_width(self.cli.options), len("  -e, --envFile:"))
        self.assertEqual(label_width([]), 0)

    def testFormatUsage(self):
        self.assertEqual(self.cli.format_usage(), EXPECTED)

    def testFormatUsageWithError(self):
        error = InvalidArgumentError("--bogus")
        self.assertEqual(self.cli.format_usage(error), "Invalid argument: --bogus\n\n" + EXPECTED)

    def testFormatUsageWithoutOptions(self):
        self.assertEqual(CommandLine("prog").format_usage(), "Usage: prog [options]\n")

    def testPrintUsageToStream(self):
        stream = io.StringIO()
        self.cli.print_usage(file=stream)
        self.assertEqual(
            [line.rstrip() for line in stream.getvalue().splitlines()],
            [line.rstrip() for line in EXPECTED.splitlines()],
        )

    def testPrintUsageToConsole(self):
        console = Console(file=io.StringIO(), width=20)
        self.cli.print_usage(MissingRequiredOptionsError(self.cli.options[2:]), file=console)
        lines = console.file.getvalue().splitlines()
        self.assertEqual(lines[0], "Missing required options: ['-n']")
        self.assertEqual(lines[1], "")
        self.assertEqual(lines[2], "Usage: prog [options]")
        self.assertEqual(lines[4], "      Custom EnvFile to use.")

    def testPrintUsageDefaultsToStandardError(self):
        stream = io.StringIO()
        with mock.patch.object(sys, "stderr", stream):
            self.cli.print_usage()
        self.assertIn("Usage: prog [options]", stream.getvalue())

    def testProgramOverride(self):
        with mock.patch.object(sys.modules["__main__"], "__prog__", "tool", create=True):
            self.assertTrue(self.cli.format_usage().startswith("Usage: tool [options]\n"))

    def testStylesOnlyWhenColorful(self):
        self.assertEqual(render_usage("prog", options()).spans, [])
        self.assertNotEqual(render_usage("prog", options(), colorful=True).spans, [])

    def testStyleOverride(self):
        with mock.patch.object(sys.modules["__main__"], "__styles__", {"program-name": "bold red"}, create=True):
            text = render_usage("prog", options(), colorful=True)
        styles = {str(span.style) for span in text.spans}
        self.assertIn("bold red", styles)


if __name__ == "__main__":
    unittest.main()
