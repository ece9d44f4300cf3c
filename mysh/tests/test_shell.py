"""Tests for the dispatch cycle, the read loop and the entry point."""

import contextlib
import io
import os
import tempfile
import unittest

from mysh.core.config_loader import Config
from mysh.logger import Logger
from mysh.main import main
from mysh.shell.resolver import ExecutableResolver
from mysh.shell.shell import Shell
from mysh.tests.helpers import captured_fd, run_in_child, system_binary


HAVE_TOOLS = all(system_binary(name) for name in ("echo", "cat", "ls"))


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self._cwd = os.getcwd()
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = os.path.realpath(self._tmp.name)
        os.chdir(self.dir)
        self.shell = Shell(config=Config(), interactive=False, environ={'HOME': self.dir})

    def tearDown(self):
        os.chdir(self._cwd)
        self._tmp.cleanup()

    def execute(self, line):
        stdout, stderr = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stderr):
            status = self.shell.execute_line(line)
        return status, stdout.getvalue(), stderr.getvalue()

    def read(self, name):
        with open(os.path.join(self.dir, name)) as f:
            return f.read()


class TestExecuteLine(ShellTestCase):

    def test_empty_line_is_noop(self):
        status, out, err = self.execute("   \n")

        self.assertEqual(status, 0)
        self.assertEqual((out, err), ("", ""))

    def test_parse_error_reported(self):
        status, _, err = self.execute("cat <")

        self.assertEqual(status, 2)
        self.assertEqual(err, "Error: Missing input file\n")

    def test_command_not_found(self):
        status, _, err = self.execute("no-such-command-here arg")

        self.assertEqual(status, 127)
        self.assertEqual(err, "no-such-command-here: command not found\n")
        self.assertEqual(self.shell.last_status, 127)

    def test_builtin_runs_in_process(self):
        os.mkdir(os.path.join(self.dir, "sub"))

        status, _, _ = self.execute("cd sub")

        self.assertEqual(status, 0)
        self.assertEqual(os.getcwd(), os.path.join(self.dir, "sub"))

        self.execute("cd")
        self.assertEqual(os.getcwd(), self.dir)

    def test_builtin_arity_error(self):
        status, _, err = self.execute("cd a b")

        self.assertEqual(status, 1)
        self.assertIn("cd: too many arguments", err)

    def test_builtin_output_redirection(self):
        self.execute("pwd > where.txt")

        self.assertEqual(self.read("where.txt"), self.dir + "\n")

    def test_exit_terminates(self):
        status, output = run_in_child(lambda: self.shell.execute_line("exit bye"))

        self.assertTrue(os.WIFEXITED(status))
        self.assertEqual(os.WEXITSTATUS(status), 0)
        self.assertEqual(output, "bye\nExiting my shell.\n")

    @unittest.skipUnless(HAVE_TOOLS, "echo, cat and ls are required")
    def test_redirected_command(self):
        status, _, _ = self.execute("echo hi > t.txt")

        self.assertEqual(status, 0)
        self.assertEqual(self.read("t.txt"), "hi\n")

    @unittest.skipUnless(HAVE_TOOLS, "echo, cat and ls are required")
    def test_pipeline(self):
        with captured_fd(1) as out:
            status = self.shell.execute_line("echo hi | cat")

        self.assertEqual(status, 0)
        self.assertEqual(out.data, "hi\n")

    @unittest.skipUnless(HAVE_TOOLS, "echo, cat and ls are required")
    def test_pipeline_returns_last_stage_status(self):
        with contextlib.redirect_stderr(io.StringIO()):
            status = self.shell.execute_line("echo hi | no-such-command-here")

        self.assertEqual(status, 127)

        with captured_fd(1):
            status = self.shell.execute_line("no-such-command-here | echo ok")
        self.assertEqual(status, 0)

    @unittest.skipUnless(HAVE_TOOLS, "echo, cat and ls are required")
    def test_wildcards_expanded_before_running(self):
        for name in ("a.txt", "b.txt", "c.md"):
            open(os.path.join(self.dir, name), 'w').close()

        self.execute("ls *.txt > listing.txt")

        self.assertEqual(sorted(self.read("listing.txt").split()), ["a.txt", "b.txt"])

    @unittest.skipUnless(HAVE_TOOLS, "echo, cat and ls are required")
    def test_wildcard_without_match(self):
        status, _, err = self.execute("echo *.nothing > out.txt")

        self.assertEqual(status, 0)
        self.assertIn("No matches for wildcard: *.nothing", err)
        self.assertEqual(self.read("out.txt"), "\n")

    def test_only_unmatched_wildcards(self):
        status, _, err = self.execute("*.nothing")

        self.assertEqual(status, 0)
        self.assertIn("No matches for wildcard", err)

    @unittest.skipUnless(HAVE_TOOLS, "echo, cat and ls are required")
    def test_emptied_first_stage_still_runs_second(self):
        status, _, err = self.execute("*.nothing | echo x > out.txt")

        self.assertEqual(status, 0)
        self.assertEqual(self.read("out.txt"), "x\n")
        self.assertIn("No matches for wildcard: *.nothing", err)
        self.assertNotIn(": command not found", err)

    @unittest.skipUnless(HAVE_TOOLS, "echo, cat and ls are required")
    def test_emptied_second_stage_has_no_blank_diagnostic(self):
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr), captured_fd(1) as out:
            status = self.shell.execute_line("echo hi | *.nothing")

        self.assertEqual(status, 127)
        self.assertEqual(out.data, "")
        self.assertIn("No matches for wildcard: *.nothing", stderr.getvalue())
        self.assertNotIn(": command not found", stderr.getvalue())

    def test_both_stages_emptied(self):
        status, _, err = self.execute("*.nothing | *.none")

        self.assertEqual(status, 0)
        self.assertIn("No matches for wildcard: *.none", err)

    def test_builtin_inside_pipeline_is_external(self):
        shell = Shell(
            config=Config(),
            interactive=False,
            resolver=ExecutableResolver([os.path.join(self.dir, "empty")])
        )
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr), captured_fd(1):
            status = shell.execute_line("pwd | pwd")

        self.assertEqual(status, 127)
        self.assertIn("pwd: command not found", stderr.getvalue())


class TestReadLoop(ShellTestCase):

    def test_non_interactive_prints_no_prompt(self):
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            status = self.shell.run(io.StringIO("pwd\n\ncd a b\n"))

        self.assertEqual(stdout.getvalue(), self.dir + "\n")
        self.assertEqual(status, 1)

    def test_interactive_banner_and_prompt(self):
        shell = Shell(config=Config(), interactive=True)
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            shell.run(io.StringIO("pwd\n"))

        self.assertEqual(
            stdout.getvalue(),
            f"Welcome to MyShell!\nmysh> {self.dir}\nmysh> Goodbye!\n"
        )

    def test_run_script(self):
        script = os.path.join(self.dir, "script.mysh")
        with open(script, 'w') as f:
            f.write("cd /\npwd > {}\n".format(os.path.join(self.dir, "out.txt")))

        with contextlib.redirect_stdout(io.StringIO()):
            status = self.shell.run_script(script)

        self.assertEqual(status, 0)
        self.assertEqual(self.read("out.txt"), "/\n")


class TestMain(ShellTestCase):

    def tearDown(self):
        Logger.reset()
        super().tearDown()

    def test_usage(self):
        with contextlib.redirect_stderr(io.StringIO()) as err:
            self.assertEqual(main(["a", "b"]), 2)
        self.assertIn("usage", err.getvalue())

    def test_missing_script(self):
        with contextlib.redirect_stderr(io.StringIO()) as err:
            self.assertEqual(main([os.path.join(self.dir, "nope")]), 1)
        self.assertIn("Error opening script file", err.getvalue())

    def test_script_argument(self):
        script = os.path.join(self.dir, "script.mysh")
        with open(script, 'w') as f:
            f.write("pwd > {}\n".format(os.path.join(self.dir, "out.txt")))

        self.assertEqual(main([script]), 0)
        self.assertEqual(self.read("out.txt"), self.dir + "\n")


if __name__ == '__main__':
    unittest.main()
