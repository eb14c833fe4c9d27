"""Abstract base formatter and output container.

WHY: Every output format consumes the same cue list but produces
different file content. This base class enforces a consistent interface
so the CLI, converter and API layers can work with any formatter generically.

HOW: BaseFormatter is an ABC with three requirements: ``name``,
``extension`` and a ``render()`` method; ``format()`` wraps the
rendered text with its suffix and MIME type. FormatterOutput is a plain
dataclass that bundles a file suffix with its content and MIME type.

RULES:
- Subclasses MUST implement ``name``, ``extension`` and ``render()``
- ``format()`` is a pure text producer; writing to disk is the caller's job
- ``suffix`` starts with a dot, e.g. ``".srt"``
- The caller is responsible for prepending the source filename stem
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from subtitle_converter.core.ir import Cue


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix appended to the source stem,
                e.g. ``".ass"`` → ``"interview.ass"``.
        content: The complete file content.
        media_type: MIME type for the content, e.g. ``"application/x-subrip"``.
    """

    suffix: str
    content: str
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all subtitle formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement name, extension and render()
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    media_type = "text/plain"

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'SubRip (SRT)'."""

    @property
    @abstractmethod
    def extension(self) -> str:
        """File extension without the dot, e.g. 'srt'."""

    @property
    def suffix(self) -> str:
        return ".{}".format(self.extension)

    @abstractmethod
    def render(self, cues: Sequence[Cue]) -> str:
        """Serialize the cues into the complete file text."""

    def format(self, cues: Sequence[Cue]) -> FormatterOutput:
        """Convert the cue list into one output file.

        Args:
            cues: Parsed cues in document order.

        Returns:
            FormatterOutput with this formatter's suffix and MIME type.
        """
        return FormatterOutput(
            suffix=self.suffix,
            content=self.render(cues),
            media_type=self.media_type,
        )
