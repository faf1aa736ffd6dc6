from inspect import cleandoc
import unittest

from smflib.plumbing.common import command, CommandError, Result, State

from .plumbing import (collect_all, collect_pair, collect_unchanged, default, success,
                       success_value, unchanged)


class TestResult(unittest.TestCase):

    maxDiff = None

    def test_state_default(self):
        self.assertEqual(default().state, State.unchanged)

    def test_state_unchanged(self):
        self.assertEqual(unchanged().state, State.unchanged)

    def test_state_success(self):
        self.assertEqual(success().state, State.success)

    def test_state_parts_unchanged(self):
        self.assertEqual(collect_unchanged().state, State.unchanged)

    def test_state_parts_success(self):
        self.assertEqual(collect_pair().state, State.success)

    def test_state_parts_value(self):
        self.assertEqual(collect_all().state, State.success)

    def test_value_unset(self):
        with self.assertRaises(ValueError):
            success().value

    def test_value_unset_collect(self):
        with self.assertRaises(ValueError):
            collect_pair().value

    def test_value_set(self):
        self.assertEqual(success_value("test").value, "test")

    def test_caller_inspect(self):
        self.assertEqual(default().caller, "tests.plumbing:default")

    def test_caller_custom(self):
        self.assertEqual(Result(caller=default).caller, "tests.plumbing:default")

    def test_truthy_unchanged(self):
        self.assertFalse(unchanged())

    def test_truthy_success(self):
        self.assertTrue(success())

    def test_collect(self):
        result = collect_pair()
        self.assertEqual(result.parts[0].caller, "tests.plumbing:unchanged")
        self.assertEqual(result.parts[1].caller, "tests.plumbing:success")

    def test_str(self):
        self.assertEqual(str(collect_all()), cleandoc("""
        tests.plumbing:collect_all: success 'test'
            tests.plumbing:unchanged: unchanged
            tests.plumbing:success: success
            tests.plumbing:success_value: success 'test'
        """))


class TestCommand(unittest.TestCase):

    def test_args(self):
        self.assertEqual(command(["echo", "left", "right"], output=True).stdout, b"left right\n")

    def test_input(self):
        self.assertEqual(command(["cat"], input_="input", output=True).stdout, b"input")

    def test_no_output(self):
        self.assertIsNone(command(["true"]).stdout)

    def test_exit_status(self):
        with self.assertRaises(CommandError) as ctx:
            command(["sh", "-c", "echo broken >&2; exit 3"])
        self.assertEqual(ctx.exception.returncode, 3)
        self.assertEqual(ctx.exception.stderr, "broken\n")
        self.assertIn("returned exit status 3: broken", str(ctx.exception))

    def test_missing_binary(self):
        with self.assertRaises(CommandError) as ctx:
            command(["/nonexistent/svccfg", "listprop"])
        self.assertIsNone(ctx.exception.returncode)
        self.assertIn("could not be run", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
