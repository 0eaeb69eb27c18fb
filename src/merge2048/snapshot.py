"""
Text forms of a board.

`board_to_text` and `describe_state` are the read-only snapshot handed to
a move advisor. `format_board` is the terminal rendering.
"""

from merge2048.game import DIRECTIONS, Grid
from merge2048.terminal import to_values

DEFAULT_DELIMITER = " | "


def board_to_text(board: Grid, delimiter: str = DEFAULT_DELIMITER) -> str:
    return "\n".join(
        delimiter.join(str(v) for v in row) for row in to_values(board).tolist()
    )


def describe_state(
    board: Grid,
    score: int,
    delimiter: str = DEFAULT_DELIMITER,
) -> str:
    return f"Score: {score}\nBoard:\n{board_to_text(board, delimiter)}"


def format_board(board: Grid) -> str:
    fmt = "| {:4s} | {:4s} | {:4s} | {:4s} |"

    lines = []
    for row in to_values(board).tolist():
        items = [f"{v:<4d}" if v else "" for v in row]
        lines.append(fmt.format(*items))
    return "\n".join(lines)


def parse_direction(text: str) -> str:
    """
    Map an answer like "up" or " LEFT " to a direction constant.
    """
    direction = text.strip().upper()
    if direction not in DIRECTIONS:
        raise ValueError(
            f"Invalid direction: {text!r}. Must be one of {', '.join(DIRECTIONS)}"
        )
    return direction
