import os
import stat
import sys

import pytest

# Every external tool in the test-suite is a tiny Python script standing in
# for selene or stylua. The script optionally records its argv and cwd (one
# JSON document) so tests can assert on the invocation.

_TOOL_TEMPLATE = """#!{python}
import json, os, sys
data = sys.stdin.read()
record = {record!r}
if record:
    with open(record, "w", encoding="utf-8") as fh:
        json.dump({{"argv": sys.argv[1:], "cwd": os.getcwd(), "stdin": data}}, fh)
{body}
sys.exit({exit_code})
"""


@pytest.fixture
def fake_tool(tmp_path):
    counter = {"n": 0}

    def _make(stdout="", exit_code=0, echo=False, transform=None, record=None):
        counter["n"] += 1
        path = tmp_path / f"tool{counter['n']}"
        if echo:
            body = "sys.stdout.write(data)"
        elif transform is not None:
            body = f"sys.stdout.write({transform})"
        else:
            body = f"sys.stdout.write({stdout!r})"
        path.write_text(
            _TOOL_TEMPLATE.format(
                python=sys.executable,
                record=str(record) if record else "",
                body=body,
                exit_code=exit_code,
            ),
            encoding="utf-8",
        )
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return str(path)

    return _make


@pytest.fixture
def not_executable(tmp_path):
    path = tmp_path / "plain.txt"
    path.write_text("not a tool", encoding="utf-8")
    os.chmod(path, 0o644)
    return str(path)
