"""Command-line arguments for a single identify/convert invocation."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field


@dataclass
class ArgumentSet:
    """Ordered command-line tokens plus source/destination metadata.

    Tokens are kept as literal command-line text in insertion order, so they
    stay introspectable through :meth:`find`. Source and destination paths
    are stored raw and only escaped when the command line is built.

    Parameters
    ----------
    tokens : list[str]
        Arguments placed between (or before) the file paths.
    source_path : str
        Local path of the input image, empty if unset.
    destination_path : str
        Local path of the output image, empty if unset.
    source_frames : str | None
        Frame selector appended to the source path, e.g. ``"[0]"``.
    destination_format : str
        Output format, written as ``"<format>:<destination>"`` by the
        ``convert`` grammar.
    """

    tokens: list[str] = field(default_factory=list)
    source_path: str = ""
    destination_path: str = ""
    source_frames: str | None = None
    destination_format: str = ""

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(self.tokens)

    def add(self, token: str) -> ArgumentSet:
        """Append a token."""
        self.tokens.append(token)
        return self

    def extend(self, tokens: Iterable[str]) -> ArgumentSet:
        """Append several tokens, keeping their order."""
        self.tokens.extend(tokens)
        return self

    def prepend(self, token: str) -> ArgumentSet:
        """Insert a token in front of all others."""
        self.tokens.insert(0, token)
        return self

    def find(self, prefix: str) -> int | None:
        """Return the index of the first token starting with ``prefix``."""
        for index, token in enumerate(self.tokens):
            if token.startswith(prefix):
                return index
        return None

    def remove(self, index: int) -> ArgumentSet:
        """Remove the token at ``index``; missing indexes are ignored."""
        if 0 <= index < len(self.tokens):
            del self.tokens[index]
        return self

    def reset(self) -> ArgumentSet:
        """Drop all tokens, keeping path and format metadata."""
        self.tokens.clear()
        return self

    def count(self) -> int:
        return len(self.tokens)

    def copy(self) -> ArgumentSet:
        """Return an independent copy (tokens list included)."""
        return ArgumentSet(
            tokens=list(self.tokens),
            source_path=self.source_path,
            destination_path=self.destination_path,
            source_frames=self.source_frames,
            destination_format=self.destination_format,
        )

    def source_with_frames(self) -> str:
        """Source path with the frame selector appended, before escaping."""
        if not self.source_path:
            return ""
        return self.source_path + (self.source_frames or "")
