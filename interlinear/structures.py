"""Core data structures for the Interlinear formatter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .errors import FormatFailureKind


@dataclass(frozen=True)
class TokenPair:
    """A source token and the target token aligned with it."""

    source: str
    target: str

    @property
    def source_cell(self) -> str:
        return f"[{self.source}] "

    @property
    def target_cell(self) -> str:
        return f"[{self.target}] "


@dataclass
class Segment:
    """A run of token pairs rendered as one two-row block."""

    pairs: List[TokenPair] = field(default_factory=list)

    def source_row(self) -> str:
        return "".join(pair.source_cell for pair in self.pairs)

    def target_row(self) -> str:
        return "".join(pair.target_cell for pair in self.pairs)

    def render(self, source_marker: str, target_marker: str) -> str:
        return (
            f"{source_marker} {self.source_row().strip()}\n"
            f"{target_marker} {self.target_row().strip()}"
        )


@dataclass
class FormattedBlock:
    """Ordered segments sharing the markers of the original rows."""

    source_marker: str
    target_marker: str
    segments: List[Segment] = field(default_factory=list)

    def render(self) -> str:
        """Join the segments, separated by a blank line."""

        rendered = [
            segment.render(self.source_marker, self.target_marker)
            for segment in self.segments
        ]
        return "\n\n".join(rendered).strip()

    @property
    def pairs(self) -> List[TokenPair]:
        return [pair for segment in self.segments for pair in segment.pairs]


@dataclass(frozen=True)
class FormatResult:
    """Outcome of a formatting attempt.

    Either ``ok`` with the reflowed text and its block, or a fallback carrying
    the original text verbatim together with the reason it was not formatted.
    """

    text: str
    block: Optional[FormattedBlock] = None
    reason: Optional[FormatFailureKind] = None
    detail: Optional[str] = None

    @classmethod
    def success(cls, block: FormattedBlock) -> "FormatResult":
        return cls(text=block.render(), block=block)

    @classmethod
    def fallback(
        cls,
        original: str,
        reason: FormatFailureKind,
        detail: Optional[str] = None,
    ) -> "FormatResult":
        return cls(text=original, reason=reason, detail=detail)

    @property
    def ok(self) -> bool:
        return self.reason is None
