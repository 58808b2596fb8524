"""Classification of export sources."""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

URL_PREFIXES = ("http://", "https://")


class SourceKind(str, Enum):
    """How a source string is loaded into the page."""

    REMOTE_URL = "remote_url"
    LOCAL_FILE = "local_file"
    INLINE_HTML = "inline_html"


@dataclass(frozen=True)
class ClassifiedSource:
    """A source string together with its kind."""

    kind: SourceKind
    value: str

    @property
    def url(self) -> str:
        """URL to navigate to. Local files become absolute ``file://`` URIs."""
        if self.kind is SourceKind.REMOTE_URL:
            return self.value
        if self.kind is SourceKind.LOCAL_FILE:
            return Path(self.value).resolve().as_uri()
        raise ValueError("Inline HTML has no URL")


def classify_source(source: str) -> ClassifiedSource:
    """
    Classify ``source`` as a remote URL, an existing local path, or inline HTML.

    Never raises: anything that is not a URL or an existing path is treated as markup.
    """
    if source.startswith(URL_PREFIXES):
        return ClassifiedSource(SourceKind.REMOTE_URL, source)

    # os.path.exists swallows ENAMETOOLONG and embedded NUL errors
    if os.path.exists(source):
        return ClassifiedSource(SourceKind.LOCAL_FILE, source)

    return ClassifiedSource(SourceKind.INLINE_HTML, source)
