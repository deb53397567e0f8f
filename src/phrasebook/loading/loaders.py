"""Resource loading infrastructure for Translator.

Provides the protocol for markup document loaders, source-string
addressing, and loaders for the search path, file URLs and http(s) URLs.

Components:
    parse_source - Classify a source string (search path or URL)
    ResourceLoader - Protocol for loading markup documents (structural typing)
    SearchPathResourceLoader - Relative names resolved against root directories
    URLResourceLoader - file:// from disk, http(s):// through httpx
    DefaultResourceLoader - Dispatches on parse_source() to the two above

Source addressing:
    cp://l10n/app.xml          -> search path, name "l10n/app.xml"
    l10n/app.xml               -> search path, name "l10n/app.xml"
    file:///srv/l10n/app.xml   -> URL
    https://cdn.example/app.xml -> URL

Python 3.13+.
"""

from __future__ import annotations

import logging
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol
from urllib.parse import urlsplit
from urllib.request import url2pathname

import httpx

from phrasebook.catalog.types import Source
from phrasebook.constants import SEARCH_PATH_SCHEME, DEFAULT_FETCH_TIMEOUT, MAX_SOURCE_SIZE
from phrasebook.diagnostics import Diagnostic, DiagnosticCode, SourceError
from phrasebook.enums import SourceKind

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Addressing
    "parse_source",
    # Protocol
    "ResourceLoader",
    # Concrete loaders
    "SearchPathResourceLoader",
    "URLResourceLoader",
    "DefaultResourceLoader",
]

logger = logging.getLogger(__name__)

_SEARCH_PATH_SOURCE = re.compile(rf"{SEARCH_PATH_SCHEME}://(?P<name>.*)", re.DOTALL)
_URL_SOURCE = re.compile(r"[a-zA-Z][a-zA-Z0-9+.-]*://.*", re.DOTALL)


def parse_source(source: Source) -> tuple[SourceKind, str]:
    """Classify a source string.

    Args:
        source: Source string as given to Translator or in <include>

    Returns:
        (SourceKind.SEARCH_PATH, name) for cp:// and scheme-less sources,
        (SourceKind.URL, source) for any other scheme://... source

    Raises:
        SourceError: If the source addresses nothing (empty name)

    Example:
        >>> parse_source("cp://l10n/app.xml")
        (<SourceKind.SEARCH_PATH: 'search_path'>, 'l10n/app.xml')
        >>> parse_source("l10n/app.xml")
        (<SourceKind.SEARCH_PATH: 'search_path'>, 'l10n/app.xml')
        >>> parse_source("https://example.com/app.xml")
        (<SourceKind.URL: 'url'>, 'https://example.com/app.xml')
    """
    if match := _SEARCH_PATH_SOURCE.fullmatch(source):
        kind, target = SourceKind.SEARCH_PATH, match["name"]
    elif _URL_SOURCE.fullmatch(source):
        kind, target = SourceKind.URL, source
    else:
        kind, target = SourceKind.SEARCH_PATH, source

    if not target:
        diagnostic = Diagnostic(
            code=DiagnosticCode.BAD_SOURCE,
            message=f"Bad source path: {source!r}",
            hint="Use cp://<name>, a relative name, or an absolute URL",
        )
        raise SourceError(diagnostic)
    return kind, target


def _too_large(source: Source, size: int, max_size: int) -> SourceError:
    diagnostic = Diagnostic(
        code=DiagnosticCode.SOURCE_TOO_LARGE,
        message=f"Document is {size} bytes, limit is {max_size}",
        source=source,
    )
    return SourceError(diagnostic)


def _read_file(source: Source, path: Path, max_size: int) -> bytes:
    """Read a document from disk, enforcing the size limit."""
    try:
        size = path.stat().st_size
        if size > max_size:
            raise _too_large(source, size, max_size)
        return path.read_bytes()
    except FileNotFoundError as e:
        diagnostic = Diagnostic(
            code=DiagnosticCode.SOURCE_NOT_FOUND,
            message=f"File {str(path)!r} does not exist",
            source=source,
        )
        raise SourceError(diagnostic) from e
    except OSError as e:
        diagnostic = Diagnostic(
            code=DiagnosticCode.SOURCE_UNREADABLE,
            message=f"Can't read {str(path)!r}: {e}",
            source=source,
        )
        raise SourceError(diagnostic) from e


class ResourceLoader(Protocol):
    """Protocol for loading markup documents by source string.

    Implementations must provide a load() method returning the raw bytes
    of the document; the XML parser handles the declared encoding.

    This is a Protocol (structural typing) rather than ABC to allow
    maximum flexibility for users implementing custom loaders.

    Example:
        >>> class DictLoader:
        ...     def __init__(self, documents: dict[str, bytes]) -> None:
        ...         self.documents = documents
        ...     def load(self, source: str) -> bytes:
        ...         return self.documents[source]
        ...     def describe_path(self, source: str) -> str:
        ...         return f"memory:{source}"
        ...
        >>> translator = Translator("main.xml", DictLoader({"main.xml": b"<translator/>"}))
    """

    def load(self, source: Source) -> bytes:
        """Load the document addressed by source.

        Args:
            source: Source string (e.g., 'cp://l10n/app.xml')

        Returns:
            Raw document bytes

        Raises:
            SourceError: If the document cannot be addressed or read
        """

    def describe_path(self, source: Source) -> str:
        """Return human-readable location for diagnostics.

        Default implementation returns the source string unchanged.

        Args:
            source: Source string

        Returns:
            Location string for error messages and load results
        """
        return source


@dataclass(frozen=True, slots=True)
class SearchPathResourceLoader:
    """Loads relative names from an ordered list of root directories.

    Resources are looked up root by root and the first root that
    contains the name wins. With no explicit roots, the current working
    directory is searched first, then every sys.path directory.

    Security:
        Names must be relative and must not contain '..'. Every resolved
        path is verified to stay inside its root.

    Example:
        >>> loader = SearchPathResourceLoader(roots=("resources",))
        >>> data = loader.load("cp://l10n/translator.xml")
        # Reads: resources/l10n/translator.xml

    Attributes:
        roots: Root directories in priority order (empty: cwd + sys.path)
        max_size: Maximum document size in bytes
    """

    roots: tuple[str | Path, ...] = ()
    max_size: int = MAX_SOURCE_SIZE

    def search_roots(self) -> tuple[Path, ...]:
        """Root directories in search order."""
        if self.roots:
            return tuple(Path(root) for root in self.roots)
        # "" in sys.path stands for the current directory, already first
        return (Path.cwd(), *(Path(entry) for entry in sys.path if entry))

    @staticmethod
    def _name_of(source: Source) -> str:
        kind, name = parse_source(source)
        if kind is not SourceKind.SEARCH_PATH:
            diagnostic = Diagnostic(
                code=DiagnosticCode.UNSUPPORTED_SCHEME,
                message=f"Not a search-path source: {source!r}",
                source=source,
            )
            raise SourceError(diagnostic)
        return name

    @staticmethod
    def _validate_name(source: Source, name: str) -> None:
        """Reject absolute names and traversal sequences.

        Raises:
            SourceError: If name could escape its root
        """
        if Path(name).is_absolute() or name.startswith(("/", "\\")):
            reason = "absolute paths are not allowed"
        elif ".." in Path(name).parts:
            reason = "path traversal sequences are not allowed"
        else:
            return
        diagnostic = Diagnostic(
            code=DiagnosticCode.UNSAFE_SOURCE_PATH,
            message=f"Unsafe search-path name {name!r}: {reason}",
            source=source,
            hint="Use file:// URLs for documents outside the search path",
        )
        raise SourceError(diagnostic)

    @staticmethod
    def _is_safe_path(base_dir: Path, full_path: Path) -> bool:
        """Check if full_path is safely within base_dir (after resolving both)."""
        try:
            full_path.resolve().relative_to(base_dir.resolve())
            return True
        except ValueError:
            return False

    def find(self, source: Source) -> Path | None:
        """Locate the file for source on the search path.

        Args:
            source: cp:// or scheme-less source string

        Returns:
            Path of the first matching file, or None if no root has it

        Raises:
            SourceError: If source is not a safe search-path name
        """
        name = self._name_of(source)
        self._validate_name(source, name)
        for root in self.search_roots():
            candidate = root / name
            if candidate.is_file() and self._is_safe_path(root, candidate):
                return candidate
        return None

    def describe_path(self, source: Source) -> str:
        """Return the file the source resolves to, or the source itself."""
        try:
            path = self.find(source)
        except SourceError:
            return source
        return str(path) if path is not None else source

    def load(self, source: Source) -> bytes:
        """Load a document from the search path.

        Args:
            source: cp:// or scheme-less source string

        Returns:
            Raw document bytes

        Raises:
            SourceError: If the name is unsafe, missing from every root,
                unreadable, or too large
        """
        path = self.find(source)
        if path is None:
            name = self._name_of(source)
            diagnostic = Diagnostic(
                code=DiagnosticCode.SOURCE_NOT_FOUND,
                message=f"Can't load translations {name!r} from the search path",
                source=source,
                hint="Check that the file exists under one of the search roots",
            )
            raise SourceError(diagnostic)
        logger.debug("Loading %s from %s", source, path)
        return _read_file(source, path, self.max_size)


@dataclass(frozen=True, slots=True)
class URLResourceLoader:
    """Loads file:// URLs from disk and http(s):// URLs through httpx.

    Redirects are followed; any non-2xx status is an error (404 is
    reported as SOURCE_NOT_FOUND). Responses are streamed so the size
    limit is enforced without buffering oversized bodies.

    Example:
        >>> loader = URLResourceLoader(timeout=5.0)
        >>> data = loader.load("https://example.com/l10n/translator.xml")

    Attributes:
        client: httpx.Client to send requests with (module-level httpx
            functions when None)
        timeout: Request timeout in seconds
        max_size: Maximum document size in bytes
    """

    client: httpx.Client | None = field(default=None, compare=False)
    timeout: float = DEFAULT_FETCH_TIMEOUT
    max_size: int = MAX_SOURCE_SIZE

    def describe_path(self, source: Source) -> str:
        """Return the URL itself."""
        return source

    def load(self, source: Source) -> bytes:
        """Load a document by URL.

        Args:
            source: Absolute URL

        Returns:
            Raw document bytes

        Raises:
            SourceError: If the scheme is unsupported or the document
                cannot be fetched, read, or is too large
        """
        scheme = urlsplit(source).scheme.lower()
        match scheme:
            case "file":
                path = Path(url2pathname(urlsplit(source).path))
                logger.debug("Loading %s from %s", source, path)
                return _read_file(source, path, self.max_size)
            case "http" | "https":
                logger.debug("Fetching %s", source)
                return self._fetch(source)
            case _:
                diagnostic = Diagnostic(
                    code=DiagnosticCode.UNSUPPORTED_SCHEME,
                    message=f"Unsupported URL scheme {scheme!r}",
                    source=source,
                    hint="Supported schemes: cp, file, http, https",
                )
                raise SourceError(diagnostic)

    def _fetch(self, source: Source) -> bytes:
        stream = self.client.stream if self.client is not None else httpx.stream
        chunks: list[bytes] = []
        received = 0
        try:
            with stream("GET", source, timeout=self.timeout, follow_redirects=True) as response:
                response.raise_for_status()
                for chunk in response.iter_bytes():
                    received += len(chunk)
                    if received > self.max_size:
                        raise _too_large(source, received, self.max_size)
                    chunks.append(chunk)
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            code = (
                DiagnosticCode.SOURCE_NOT_FOUND
                if status == httpx.codes.NOT_FOUND
                else DiagnosticCode.SOURCE_UNREADABLE
            )
            diagnostic = Diagnostic(
                code=code,
                message=f"Fetching {source!r} failed with HTTP {status}",
                source=source,
            )
            raise SourceError(diagnostic) from e
        except httpx.HTTPError as e:
            diagnostic = Diagnostic(
                code=DiagnosticCode.SOURCE_UNREADABLE,
                message=f"Fetching {source!r} failed: {e}",
                source=source,
            )
            raise SourceError(diagnostic) from e
        return b"".join(chunks)


@dataclass(frozen=True, slots=True)
class DefaultResourceLoader:
    """Dispatches each source to the search-path or URL loader.

    Attributes:
        search_path: Loader for cp:// and scheme-less sources
        url: Loader for scheme://... sources
    """

    search_path: SearchPathResourceLoader = field(default_factory=SearchPathResourceLoader)
    url: URLResourceLoader = field(default_factory=URLResourceLoader)

    def _loader_for(self, source: Source) -> SearchPathResourceLoader | URLResourceLoader:
        kind, _ = parse_source(source)
        return self.search_path if kind is SourceKind.SEARCH_PATH else self.url

    def describe_path(self, source: Source) -> str:
        """Return the delegate loader's description of source."""
        try:
            return self._loader_for(source).describe_path(source)
        except SourceError:
            return source

    def load(self, source: Source) -> bytes:
        """Load source with the loader its address selects.

        Raises:
            SourceError: If the source is malformed or cannot be loaded
        """
        return self._loader_for(source).load(source)
