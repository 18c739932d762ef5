import shutil
import sys
from typing import Optional, TextIO


def log_title(message: str, stream: Optional[TextIO] = None) -> None:
    """
    Render a highlighted title line padded with '=' to the terminal width.
    """
    stream = stream or sys.stdout
    terminal_width = shutil.get_terminal_size((80, 20)).columns
    message = f" {message.strip()} "
    padding = max(0, terminal_width - len(message))
    prefix = "=" * (padding // 2)
    suffix = "=" * (padding - len(prefix))
    stream.write(f"{prefix}{message}{suffix}\n")
