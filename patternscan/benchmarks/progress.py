import sys
from typing import TextIO

BAR_WIDTH = 70


def display_progress(done: int, total: int, stream: TextIO = sys.stdout, width: int = BAR_WIDTH) -> None:
    """
    Redraw a bold `[=====>    ] NN%` bar on the current console line.

    Args:
        done (int): Runs completed so far.
        total (int): Total runs planned; non-positive totals draw a full bar.
        stream (TextIO): Where to draw. Defaults to stdout.
        width (int): Number of cells inside the brackets.
    """
    progress = min(done / total, 1.0) if total > 0 else 1.0
    filled = int(width * progress)

    cells = []
    for i in range(width):
        if i < filled:
            cells.append("=")
        elif i == filled:
            cells.append(">")
        else:
            cells.append(" ")
    stream.write(f"\033[1m[{''.join(cells)}] {int(progress * 100.0)}%\r\033[0m")
    stream.flush()
