"""
Integration test for CLI command invocation.

This test validates that the installed `mason` script can be invoked and
responds correctly.
"""

import os
import subprocess
import unittest

import pytest

COMMAND = "mason"


@pytest.mark.integration
class TestCLIIntegration(unittest.TestCase):
    """CLI integration test class."""

    def test_cli_help_invocation(self) -> None:
        """Test command line interface help flag."""
        rtn = os.system(f"{COMMAND} --help")
        self.assertEqual(0, rtn)

    def test_cli_without_target_fails(self) -> None:
        """Test a build with no triple exits 1 with the reason on stderr."""
        env = {k: v for k, v in os.environ.items() if k not in ("TARGET", "OUT_DIR")}
        result = subprocess.run([COMMAND], capture_output=True, text=True, env=env)

        self.assertEqual(1, result.returncode)
        self.assertIn("Missing target triple", result.stderr)
        self.assertEqual("", result.stdout)


if __name__ == "__main__":
    unittest.main()
