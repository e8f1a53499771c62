"""Virtual documents: content computed when read, writes discarded."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from loguru import logger

from notegrep.config import RESULT_PAGE_VIRTUAL
from notegrep.errors import MalformedSessionError

NO_RESULTS_TEXT = "Did not produce any results"
BAD_SESSION_TEXT = (
    f'Could not call grep implementation, make sure to only open "{RESULT_PAGE_VIRTUAL}" '
    "using notegrep commands"
)


@dataclass(frozen=True)
class FileMeta:
    """Metadata reported for a virtual document."""

    name: str
    content_type: str = "text/markdown"
    # -1 when unknown until the content is rendered
    size: int = -1
    created: int = 0
    last_modified: int = 0
    perm: str = "ro"


@dataclass(frozen=True)
class VirtualFile:
    """Rendered content of a virtual document."""

    data: bytes
    meta: FileMeta

    @property
    def text(self) -> str:
        return self.data.decode("utf-8")


@runtime_checkable
class VirtualDocument(Protocol):
    """Capability of a document whose content is computed on read."""

    def read(self) -> VirtualFile: ...

    def write(self, data: bytes) -> FileMeta: ...

    def stat(self) -> FileMeta: ...


class ReportDocument:
    """The live search report, re-rendered on every read."""

    def __init__(self, name: str, render: Callable[[], str | None]) -> None:
        self.name = name
        self._render = render

    def read(self) -> VirtualFile:
        text = NO_RESULTS_TEXT
        try:
            rendered = self._render()
        except MalformedSessionError as e:
            logger.warning("Cannot render {!r}: {}", self.name, e)
            text = BAD_SESSION_TEXT
        else:
            if rendered:
                text = rendered
        data = text.encode("utf-8")
        return VirtualFile(data=data, meta=FileMeta(name=self.name, size=len(data)))

    def write(self, data: bytes) -> FileMeta:
        # Never actually written
        logger.debug("Discarding {} byte write to {!r}", len(data), self.name)
        return self.stat()

    def stat(self) -> FileMeta:
        return FileMeta(name=self.name)


class VirtualDocumentRegistry:
    """Map well-known names to virtual documents."""

    def __init__(self) -> None:
        self._documents: dict[str, VirtualDocument] = {}

    def register(self, name: str, document: VirtualDocument) -> None:
        if name in self._documents:
            msg = f"Virtual document {name!r} already registered"
            raise ValueError(msg)
        self._documents[name] = document

    def get(self, name: str) -> VirtualDocument | None:
        return self._documents.get(name)

    def names(self) -> list[str]:
        return sorted(self._documents)
