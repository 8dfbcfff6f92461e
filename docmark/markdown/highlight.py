"""Code block highlighters for the Markdown renderer.

Backends come in two shapes. In-process backends return highlighted HTML
directly; out-of-process backends report through a one-shot callback. Both are
wrapped in a :class:`Highlighter` so the renderer calls them the same way.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import threading
from abc import ABC, abstractmethod
from typing import Callable, Generic, TypeVar

from .names import HighlighterName

logger = logging.getLogger(__name__)

HighlightCallback = Callable[[BaseException | None, str | None], None]
SyncBackend = Callable[[str, str], str]
AsyncBackend = Callable[[str, str, HighlightCallback], None]

BackendT = TypeVar("BackendT")


class HighlightError(RuntimeError):
    """Raised when a single code block cannot be highlighted."""


class HighlighterUnavailableError(HighlightError):
    """Raised when a highlighter backend cannot be loaded."""


class Completion:
    """One-shot receiver for an asynchronous highlight result."""

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._error: BaseException | None = None
        self._html: str | None = None

    @property
    def done(self) -> bool:
        return self._event.is_set()

    def __call__(self, error: BaseException | None, html: str | None = None) -> None:
        with self._lock:
            if self._event.is_set():
                raise HighlightError("Highlight callback was invoked more than once.")
            self._error = error
            self._html = html
            self._event.set()

    def wait(self) -> str:
        # No timeout: a backend that never calls back stalls the render.
        self._event.wait()
        if self._error is not None:
            if isinstance(self._error, HighlightError):
                raise self._error
            raise HighlightError(str(self._error)) from self._error
        return self._html or ""


class Highlighter(ABC, Generic[BackendT]):
    """Load a backend on first use and highlight code blocks with it.

    Calling the highlighter returns highlighted HTML, or an empty string when
    the block should be left for the engine to escape as plain code. A backend
    that fails to load is reported once and never retried.
    """

    def __init__(self, name: HighlighterName, loader: Callable[[], BackendT]) -> None:
        self.name = name
        self._loader = loader
        self._backend: BackendT | None = None
        self.disabled = False

    def __call__(self, code: str, lang: str = "") -> str:
        backend = self._load()
        if backend is None:
            return ""
        try:
            return self._invoke(backend, code, lang)
        except HighlightError as exc:
            logger.error("Could not highlight %s code block: %s", lang or "unlabelled", exc)
            return ""

    def _load(self) -> BackendT | None:
        if self.disabled:
            return None
        if self._backend is None:
            try:
                self._backend = self._loader()
            except HighlighterUnavailableError as exc:
                self.disabled = True
                logger.error("%s Highlighting disabled.", exc)
                logger.debug("%s load failure", self.name.value, exc_info=True)
                return None
        return self._backend

    @abstractmethod
    def _invoke(self, backend: BackendT, code: str, lang: str) -> str:
        """Run ``backend`` on one code block."""


class DirectHighlighter(Highlighter[SyncBackend]):
    """Highlighter whose backend returns its result."""

    def _invoke(self, backend: SyncBackend, code: str, lang: str) -> str:
        return backend(code, lang)


class DeferredHighlighter(Highlighter[AsyncBackend]):
    """Highlighter whose backend completes through a callback."""

    def _invoke(self, backend: AsyncBackend, code: str, lang: str) -> str:
        completion = Completion()
        backend(code, lang, completion)
        return completion.wait()


def load_pygments() -> SyncBackend:
    """Return an in-process highlighter backed by the Pygments library."""
    try:
        from pygments import highlight
        from pygments.formatters import HtmlFormatter
        from pygments.lexers import get_lexer_by_name, guess_lexer
        from pygments.util import ClassNotFound
    except ImportError as exc:
        raise HighlighterUnavailableError("Could not find Pygments.") from exc

    formatter = HtmlFormatter(nowrap=True)

    def _highlight(code: str, lang: str) -> str:
        try:
            lexer = get_lexer_by_name(lang) if lang else guess_lexer(code)
        except ClassNotFound as exc:
            raise HighlightError(f"No lexer found for language '{lang}'.") from exc
        return highlight(code, lexer, formatter)

    return _highlight


def load_pygmentize() -> AsyncBackend:
    """Return a highlighter that runs the ``pygmentize`` executable on a worker thread."""
    executable = shutil.which("pygmentize")
    if not executable:
        raise HighlighterUnavailableError("Could not find pygmentize.")

    def _highlight(code: str, lang: str, callback: HighlightCallback) -> None:
        def _work() -> None:
            # Every path must complete the callback or the render waits forever.
            try:
                result = _run_pygmentize(executable, code, lang)
            except Exception as exc:
                callback(HighlightError(f"Failed to execute pygmentize: {exc}"), None)
                return
            if result.returncode != 0:
                message = (result.stderr or "").strip() or f"pygmentize exited with {result.returncode}"
                callback(HighlightError(message), None)
                return
            callback(None, result.stdout)

        threading.Thread(target=_work, name="pygmentize", daemon=True).start()

    return _highlight


def _run_pygmentize(executable: str, code: str, lang: str) -> subprocess.CompletedProcess[str]:
    args = [executable, "-f", "html", "-O", "nowrap,encoding=utf-8"]
    args.extend(["-l", lang] if lang else ["-g"])
    return subprocess.run(
        args,
        input=code,
        capture_output=True,
        encoding="utf-8",
        errors="replace",
        check=False,
    )


def create_highlighter(name: HighlighterName) -> Highlighter:
    """Build the highlighter for a canonical backend name."""
    if name is HighlighterName.PYGMENTIZE:
        return DeferredHighlighter(name, load_pygmentize)
    return DirectHighlighter(name, load_pygments)
