from typing import Optional


class IamError(Exception):
    """Exception type used by the shell for unusable programs or token files."""
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(f"{path}: {message}" if path else message)
        self.message = message
        self.path = path


class ExitSignal(Exception):
    """Internal exception to stop a run when an EXIT statement executes."""
    def __init__(self, line: int = 0):
        super().__init__('exit')
        self.line = line
