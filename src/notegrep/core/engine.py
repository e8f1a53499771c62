"""Search pipeline: run a query, publish its report, and the user-facing entry points."""

from collections.abc import Callable
from pathlib import Path

from loguru import logger

from notegrep.config import (
    DOCUMENT_EXTENSION,
    RESULT_PAGE_SAVED,
    RESULT_PAGE_VIRTUAL,
    VERSION,
    GrepConfig,
    load_config,
)
from notegrep.core.report.formatter import group_matches, rank_results, render_report
from notegrep.core.report.virtual import (
    FileMeta,
    ReportDocument,
    VirtualDocument,
    VirtualDocumentRegistry,
    VirtualFile,
)
from notegrep.core.search.case_policy import is_case_sensitive
from notegrep.core.search.filters import folder_for_page, is_excluded
from notegrep.core.search.parser import parse_grep_output
from notegrep.core.search.refiner import compile_matcher, refine_hits
from notegrep.errors import ExternalToolError, NoResultsError, PatternError
from notegrep.models.match import Match, Query, Report
from notegrep.protocols import (
    NotifierProtocol,
    SearchBackendProtocol,
    SessionProtocol,
    ShellProtocol,
)

Prompt = Callable[[str], str | None]


class GrepEngine:
    """Run searches over a space and publish their reports.

    Reports are either saved to the result page in the space, or kept
    virtual: the query is remembered and the report page renders it
    again on every read.
    """

    def __init__(
        self,
        space: str | Path,
        backend: SearchBackendProtocol,
        notifier: NotifierProtocol,
        session: SessionProtocol,
        *,
        config_loader: Callable[[Path], GrepConfig] = load_config,
    ) -> None:
        self.space = Path(space)
        self.backend = backend
        self.notifier = notifier
        self.session = session
        self._config_loader = config_loader

        self.documents = VirtualDocumentRegistry()
        self.documents.register(
            RESULT_PAGE_VIRTUAL, ReportDocument(RESULT_PAGE_VIRTUAL, self.render_current)
        )

    @property
    def result_path(self) -> Path:
        return self.space / (RESULT_PAGE_SAVED + DOCUMENT_EXTENSION)

    def load_config(self) -> GrepConfig | None:
        """Load the space config, notifying the user if it is broken."""
        try:
            return self._config_loader(self.space)
        except ValueError as e:
            self.notifier.flash(f"Invalid grep configuration: {e}", "error")
            return None

    def build_report(self, query: Query, config: GrepConfig) -> Report:
        """Run the full pipeline for one query.

        Raises:
            PatternError: the pattern does not compile.
            ExternalToolError: the search tool failed.
            NoResultsError: nothing matched outside of ignored folders.
        """
        logger.debug(
            "grep({!r}, literal={}, folder={!r})", query.pattern, query.literal, query.folder
        )
        case_sensitive = is_case_sensitive(config, query.pattern)
        matcher = compile_matcher(query, case_sensitive=case_sensitive)

        output = self.backend.search(query, case_sensitive=case_sensitive)

        per_document: list[tuple[str, list[Match]]] = []
        for page, hits in parse_grep_output(output):
            if is_excluded(page, config.ignore_folders):
                logger.debug("Skipping excluded page {!r}", page)
                continue
            per_document.append(
                (
                    page,
                    refine_hits(
                        hits, matcher, left=config.surround_left, right=config.surround_right
                    ),
                )
            )

        results = rank_results(group_matches(per_document))
        if not results:
            msg = f"No matches for {query.pattern!r} outside of ignored folders"
            raise NoResultsError(msg)

        report = Report(
            query=query,
            document_results=tuple(results),
            generated_text=render_report(query, results),
        )
        logger.debug(
            "Found {} matches in {} documents", report.match_count, len(report.document_results)
        )
        return report

    def grep(self, query: Query, config: GrepConfig) -> str | None:
        """Render the report for a query, or notify the user why there is none."""
        kind = "Text" if query.literal else "Pattern"
        try:
            return self.build_report(query, config).generated_text
        except NoResultsError:
            self.notifier.flash(f'{kind} "{query.pattern}" produced no results')
        except PatternError as e:
            self.notifier.flash(str(e), "error")
        except ExternalToolError as e:
            logger.debug("Search tool failed: {}", e)
            self.notifier.flash(
                f"Error running search tool, make sure Git is in PATH ({e})", "error"
            )
        return None

    def open_grep(self, query: Query) -> str | None:
        """Run a query and publish its report.

        The report is published only once fully rendered: on failure neither
        the result page nor the remembered query change.

        Returns:
            The report text, or None if there is nothing to show.
        """
        config = self.load_config()
        if config is None:
            return None

        text = self.grep(query, config)
        if text is None:
            return None

        if config.save_results:
            self.save_report(text)
        else:
            self.session.remember(query)
            logger.info("Results are available in {!r}", RESULT_PAGE_VIRTUAL)
        return text

    def save_report(self, text: str) -> None:
        """Overwrite the result page with the report."""
        path = self.result_path
        tmp = path.with_name(path.name + ".tmp")
        tmp.write_text(f"#meta\n\n{text}", encoding="utf-8")
        tmp.replace(path)
        logger.info("Saved results to {}", path)

    def render_current(self) -> str | None:
        """Replay the remembered query against the current tree.

        Raises MalformedSessionError if there is no usable query.
        """
        query = self.session.current()
        config = self.load_config()
        if config is None:
            return None
        return self.grep(query, config)

    def _document(self, name: str) -> VirtualDocument:
        document = self.documents.get(name)
        if document is None:
            msg = f"No virtual document named {name!r}, known: {self.documents.names()}"
            raise KeyError(msg)
        return document

    def read_document(self, name: str) -> VirtualFile:
        """Read a registered virtual document."""
        return self._document(name).read()

    def write_document(self, name: str, data: bytes) -> FileMeta:
        """Hand a write to a registered virtual document, which may discard it."""
        return self._document(name).write(data)


def search_text(engine: GrepEngine, prompt: Prompt) -> str | None:
    """Search literal text in the whole space."""
    pattern = prompt("Literal text:")
    if not pattern:
        return None
    return engine.open_grep(Query(pattern=pattern, literal=True))


def search_regex(engine: GrepEngine, prompt: Prompt) -> str | None:
    """Search a regular expression in the whole space."""
    pattern = prompt("Regular expression pattern:")
    if not pattern:
        return None
    return engine.open_grep(Query(pattern=pattern, literal=False))


def search_text_in_folder(engine: GrepEngine, prompt: Prompt, current_page: str) -> str | None:
    """Search literal text in the folder of the current page."""
    folder = folder_for_page(current_page)
    pattern = prompt("Literal text:")
    if not pattern:
        return None
    return engine.open_grep(Query(pattern=pattern, literal=True, folder=folder))


def search_regex_in_folder(engine: GrepEngine, prompt: Prompt, current_page: str) -> str | None:
    """Search a regular expression in the folder of the current page."""
    folder = folder_for_page(current_page)
    pattern = prompt("Regular expression pattern:")
    if not pattern:
        return None
    return engine.open_grep(Query(pattern=pattern, literal=False, folder=folder))


def show_version(shell: ShellProtocol, notifier: NotifierProtocol) -> str | None:
    """Notify our version next to the version of git."""
    try:
        result = shell.run("git", ["--version"])
    except ExternalToolError:
        notifier.flash("Could not run 'git' command, make sure Git is in PATH", "error")
        return None
    if result.returncode != 0:
        notifier.flash("Could not run 'git' command, make sure Git is in PATH", "error")
        return None

    # Version info is in the first line
    git_version = result.stdout.split("\n")[0]
    message = f"notegrep {VERSION} {git_version}"
    notifier.flash(message)
    return message
