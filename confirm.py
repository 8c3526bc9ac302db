import io
import select
from typing import Optional, TextIO

YES_ANSWERS = {"Yes", "yes", "y", "Y", "YES"}
NO_ANSWERS = {"No", "no", "n", "N", "NO"}


def capacity_message(predicted_free_gib: float, total_gib: float, file_count: int) -> str:
    return (
        f"Disk capacity will be {predicted_free_gib:.2f}/{total_gib:.2f}(GB)"
        f"(file num: {file_count}). Do you continue? [Y/N]"
    )


def _wait_readable(stream: TextIO, timeout: float) -> bool:
    """Return False if nothing arrives on stream within timeout seconds."""
    try:
        fd = stream.fileno()
    except (AttributeError, io.UnsupportedOperation):
        # In-memory streams are always ready
        return True
    ready, _, _ = select.select([fd], [], [], timeout)
    return bool(ready)


def read_answer(stream: TextIO, timeout: Optional[float] = None) -> Optional[str]:
    """
    Read exactly one line from stream.

    Returns:
        str: the line without its line terminator, or None on end of input or timeout
    """
    if timeout is not None and not _wait_readable(stream, timeout):
        return None
    line = stream.readline()
    if not line:
        return None
    return line.rstrip("\r\n")


def confirm(message: str, stream: TextIO, out: TextIO, timeout: Optional[float] = None) -> bool:
    """
    Show message and ask for a yes/no answer.

    Only a recognised yes answer proceeds. A no answer, anything unrecognised,
    end of input and a timeout all decline.
    """
    out.write(f"{message} >")
    out.flush()
    answer = read_answer(stream, timeout)
    if answer in YES_ANSWERS:
        return True
    if answer and answer not in NO_ANSWERS:
        print(f"Unrecognised answer '{answer}', treating it as no.", file=out)
    return False
