"""Single-buffer text editor with a character cursor."""


class TextEditor:
    """Mutable text plus a cursor measured in characters.

    Python ``str`` indexes by code point, so every offset here is a character
    offset and a multi-byte character is never split.
    """

    def __init__(self, text: str = ""):
        self.text = text
        self.cursor = len(text)

    def __len__(self) -> int:
        return len(self.text)

    def _clamp(self) -> None:
        self.cursor = max(0, min(self.cursor, len(self.text)))

    def load(self, text: str) -> None:
        self.text = text
        self.cursor = len(text)

    def clear(self) -> None:
        self.text = ""
        self.cursor = 0

    def move_left(self) -> None:
        self.cursor = max(0, self.cursor - 1)

    def move_right(self) -> None:
        self.cursor = min(len(self.text), self.cursor + 1)

    def insert(self, char: str) -> None:
        if len(char) != 1:
            raise ValueError(f"insert expects a single character, got {char!r}")
        self._clamp()
        self.text = self.text[: self.cursor] + char + self.text[self.cursor :]
        self.cursor += 1

    def delete_before_cursor(self) -> None:
        self._clamp()
        if self.cursor == 0:
            return
        drop = self.cursor - 1
        self.text = "".join(ch for pos, ch in enumerate(self.text) if pos != drop)
        self.cursor = drop


__all__ = ["TextEditor"]
