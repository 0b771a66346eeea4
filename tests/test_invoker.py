import asyncio
import json
import os

import pytest

from luatool_lsp.errors import ToolExecutionError
from luatool_lsp.invoker import ToolResult, run_tool


def test_stdin_is_fed_and_stdout_collected(fake_tool):
    tool = fake_tool(transform="data.upper()")
    result = asyncio.run(run_tool(tool, [], "local x = 1\n"))
    assert result == ToolResult(exit_code=0, stdout="LOCAL X = 1\n")


@pytest.mark.parametrize("code", [0, 1, 3])
def test_exit_code_is_reported(fake_tool, code):
    tool = fake_tool(stdout="out", exit_code=code)
    result = asyncio.run(run_tool(tool, [], ""))
    assert result.exit_code == code
    assert result.stdout == "out"


def test_args_and_cwd_are_passed(fake_tool, tmp_path):
    rec = tmp_path / "rec.json"
    workdir = tmp_path / "work"
    workdir.mkdir()
    tool = fake_tool(record=rec)
    asyncio.run(run_tool(tool, ["--no-summary", "-"], "abc", cwd=workdir))
    seen = json.loads(rec.read_text())
    assert seen["argv"] == ["--no-summary", "-"]
    assert os.path.realpath(seen["cwd"]) == os.path.realpath(str(workdir))
    assert seen["stdin"] == "abc"


def test_missing_executable_raises(tmp_path):
    with pytest.raises(ToolExecutionError):
        asyncio.run(run_tool(str(tmp_path / "no-such-tool"), [], ""))
