from beancount_tui.data_types import CursorMove


class TextField:
    """Editable text buffer with a cursor.

    The buffer is a list of lines and the cursor a ``(row, col)`` pair where
    ``col`` may sit one past the end of the line. Single line fields drop any
    newline they are given.
    """

    def __init__(
        self, text: str = "", label: str | None = None, single_line: bool = True
    ):
        self.label = label
        self.single_line = single_line
        self.lines: list[str] = [""]
        self.cursor_row: int = 0
        self.cursor_col: int = 0
        self.set_text(text)

    def __repr__(self) -> str:
        return f"TextField(label={self.label!r}, text={self.text!r})"

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def cursor(self) -> tuple[int, int]:
        return self.cursor_row, self.cursor_col

    def set_text(self, text: str):
        if self.single_line:
            text = text.replace("\r", "").replace("\n", " ")
        self.lines = text.split("\n")
        # cursor goes to the end of the content
        self.cursor_row = len(self.lines) - 1
        self.cursor_col = len(self.lines[-1])

    def _clamp_cursor(self):
        self.cursor_row = max(0, min(self.cursor_row, len(self.lines) - 1))
        self.cursor_col = max(0, min(self.cursor_col, len(self.lines[self.cursor_row])))

    def insert(self, value: str):
        if self.single_line:
            value = value.replace("\r", "").replace("\n", "")
        if not value:
            return
        line = self.lines[self.cursor_row]
        head, tail = line[: self.cursor_col], line[self.cursor_col :]
        parts = value.split("\n")
        if len(parts) == 1:
            self.lines[self.cursor_row] = head + value + tail
            self.cursor_col += len(value)
            return
        new_lines = [head + parts[0], *parts[1:-1], parts[-1] + tail]
        self.lines[self.cursor_row : self.cursor_row + 1] = new_lines
        self.cursor_row += len(parts) - 1
        self.cursor_col = len(parts[-1])

    def delete_backward(self) -> bool:
        if self.cursor_col > 0:
            line = self.lines[self.cursor_row]
            self.lines[self.cursor_row] = (
                line[: self.cursor_col - 1] + line[self.cursor_col :]
            )
            self.cursor_col -= 1
            return True
        if self.cursor_row == 0:
            return False
        # join with the previous line
        previous = self.lines[self.cursor_row - 1]
        self.lines[self.cursor_row - 1] = previous + self.lines[self.cursor_row]
        del self.lines[self.cursor_row]
        self.cursor_row -= 1
        self.cursor_col = len(previous)
        return True

    def delete_forward(self) -> bool:
        line = self.lines[self.cursor_row]
        if self.cursor_col < len(line):
            self.lines[self.cursor_row] = (
                line[: self.cursor_col] + line[self.cursor_col + 1 :]
            )
            return True
        if self.cursor_row == len(self.lines) - 1:
            return False
        self.lines[self.cursor_row] = line + self.lines[self.cursor_row + 1]
        del self.lines[self.cursor_row + 1]
        return True

    def move_cursor(self, move: CursorMove):
        if move == CursorMove.FORWARD:
            if self.cursor_col < len(self.lines[self.cursor_row]):
                self.cursor_col += 1
            elif self.cursor_row < len(self.lines) - 1:
                self.cursor_row += 1
                self.cursor_col = 0
        elif move == CursorMove.BACK:
            if self.cursor_col > 0:
                self.cursor_col -= 1
            elif self.cursor_row > 0:
                self.cursor_row -= 1
                self.cursor_col = len(self.lines[self.cursor_row])
        elif move == CursorMove.UP:
            self.cursor_row -= 1
        elif move == CursorMove.DOWN:
            self.cursor_row += 1
        elif move == CursorMove.HEAD:
            self.cursor_col = 0
        elif move == CursorMove.END:
            self.cursor_col = len(self.lines[self.cursor_row])
        elif move == CursorMove.TOP:
            self.cursor_row = 0
            self.cursor_col = 0
        elif move == CursorMove.BOTTOM:
            self.cursor_row = len(self.lines) - 1
            self.cursor_col = len(self.lines[-1])
        else:
            raise ValueError(f"Unexpected cursor move {move}")
        self._clamp_cursor()
