# side_channel_store.py
"""
Read‑then‑clear access to the named text sources of a drain cycle.

The store knows *which* source to read; a ``TextSource`` knows *how*.
Clearing writes the ``"0"`` marker back, which is what the drivers expect
when the metrics have been consumed.
"""

from pathlib import Path
from typing import Dict, Mapping, Protocol, Union

from app_logger import log_debug, logger
from errors import SourceClearError, SourceReadError
from models import CLEARED_MARKER, SideChannelSnapshot, SourceId


class TextSource(Protocol):
    def read(self) -> str: ...

    def clear(self) -> None: ...


class SysfsTextSource:
    """A text source backed by one (sysfs) file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def read(self) -> str:
        return self.path.read_text(encoding="utf-8", errors="replace")

    def clear(self) -> None:
        self.path.write_text(CLEARED_MARKER, encoding="utf-8")

    def __repr__(self) -> str:
        return f"SysfsTextSource({str(self.path)!r})"


class SideChannelStore:
    """
    Parameters
    ----------
    sources : Mapping[SourceId, TextSource]
        Every source the drain may read.  A source missing from the mapping
        is treated as absent.
    """

    def __init__(self, sources: Mapping[SourceId, TextSource]):
        self.sources: Dict[SourceId, TextSource] = dict(sources)

    @classmethod
    def from_paths(cls, paths: Mapping[SourceId, Union[str, Path]]) -> "SideChannelStore":
        return cls({sid: SysfsTextSource(p) for sid, p in paths.items()})

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------
    def read(self, source: SourceId) -> str:
        src = self.sources.get(source)
        if src is None:
            raise SourceReadError(f"no {source.value} source configured")
        try:
            return src.read()
        except OSError as exc:
            raise SourceReadError(f"Unable to read {src!r} - {exc}") from exc

    def clear(self, source: SourceId) -> None:
        src = self.sources[source]
        try:
            src.clear()
        except OSError as exc:
            raise SourceClearError(f"Couldn't clear {src!r} - {exc}") from exc

    # ------------------------------------------------------------------
    # Read + clear
    # ------------------------------------------------------------------
    def consume(self, source: SourceId) -> SideChannelSnapshot:
        """
        Read *source* and clear it.  A failed read yields an absent
        snapshot; a failed clear is logged and the text is still used.
        """
        try:
            text = self.read(source)
        except SourceReadError as exc:
            log_debug("%s: treated as absent (%s)", source.value, exc)
            return SideChannelSnapshot.absent(source)

        try:
            self.clear(source)
        except SourceClearError as exc:
            logger.error("%s", exc)

        stripped = text.strip()
        if not stripped or stripped == CLEARED_MARKER:
            return SideChannelSnapshot.absent(source)
        return SideChannelSnapshot(source=source, text=text, present=True)
