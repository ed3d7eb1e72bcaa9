"""Character to UTF-8 byte offset mapping for error reports."""

from __future__ import annotations

from typing import Final


class UTF8PositionMapper:
    """Maps character offsets in a document to UTF-8 byte offsets.

    Error positions are tracked as character offsets while callers that
    hold the encoded document need byte offsets. Rather than storing a
    byte offset for every character, the mapper records one checkpoint
    every ``checkpoint_interval`` characters and walks forward from the
    nearest one.
    """

    def __init__(self, text: str, checkpoint_interval: int = 256) -> None:
        """Initialize position mapper with checkpoint system.

        Args:
            text: The document the offsets refer to
            checkpoint_interval: Characters between checkpoints
        """
        if checkpoint_interval < 1:
            raise ValueError("checkpoint_interval must be positive")

        self.text: Final = text
        self.checkpoint_interval: Final = checkpoint_interval
        self.is_ascii_only: Final = text.isascii()
        # checkpoints[n] is the byte offset of character n * interval
        self.checkpoints: list[int] = []

        if not self.is_ascii_only:
            self._build_checkpoints()

    def _build_checkpoints(self) -> None:
        byte_pos = 0
        for char_pos, char in enumerate(self.text):
            if char_pos % self.checkpoint_interval == 0:
                self.checkpoints.append(byte_pos)
            byte_pos += len(char.encode("utf-8"))

    def char_to_byte(self, char_pos: int) -> int:
        """Convert character position to byte position.

        Positions past the end of the text (the end-of-input offset) map
        to the encoded length.

        Args:
            char_pos: Character position in the document

        Returns:
            Byte position in UTF-8 encoded text
        """
        if self.is_ascii_only:
            return char_pos

        char_pos = max(0, min(char_pos, len(self.text)))
        slot = min(
            char_pos // self.checkpoint_interval, len(self.checkpoints) - 1
        )
        byte_pos = self.checkpoints[slot]
        for char in self.text[slot * self.checkpoint_interval : char_pos]:
            byte_pos += len(char.encode("utf-8"))

        return byte_pos
