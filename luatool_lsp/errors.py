from typing import Optional


class LuaToolError(Exception):
    """ Base class for all bridge errors"""
    pass

class ToolExecutionError(LuaToolError):
    """ Raised when a tool cannot be spawned or exits with an unexpected code"""

    def __init__(self, message: str, exit_code: Optional[int] = None, output: str = ""):
        super().__init__(message)
        self.exit_code = exit_code
        self.output = output

class MalformedOutputError(LuaToolError):
    """ Raised when a tool's output is not in the expected format"""
