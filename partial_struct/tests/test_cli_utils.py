#!/usr/bin/env python3

import pytest

from partial_struct.cli_utils import reconstruct_command_line


def get_click_command():
    """Helper to get Click command for testing"""
    try:
        from partial_struct.partial_struct import partial_struct

        return partial_struct
    except ImportError:
        return None


class TestCliUtils:
    """Test cases for CLI utilities"""

    def test_reconstruct_command_line_without_context(self):
        """Without an active Click context only the program name is returned"""
        click_cmd = get_click_command()
        if not click_cmd:
            pytest.skip("Click command not available")

        result = reconstruct_command_line(click_cmd)
        assert result == "partial_struct"

    def test_reconstruct_command_line_with_context(self, tmp_path):
        """Arguments come first, options equal to their default are left out"""
        click_cmd = get_click_command()
        if not click_cmd:
            pytest.skip("Click command not available")

        record = tmp_path / "user.json"
        record.write_text("{}")
        params = {
            "name": "Member",
            "config": None,
            "source_module": None,
            "force": True,
            "format_code": False,
            "verbose": False,
            "path": str(record),
            "output": "out.py",
        }
        with click_cmd.make_context("partial_struct", [str(record), "out.py"]) as ctx:
            ctx.params = params
            result = reconstruct_command_line(click_cmd)

        assert result == "partial_struct user.json out.py --name Member --force"


if __name__ == "__main__":
    pytest.main([__file__])
