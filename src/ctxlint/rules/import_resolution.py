"""Import directive resolution with cycle and depth checking.

Validates that `@path/to/file` directives:
- Point to files that actually exist
- Don't create circular inclusion chains
- Respect the maximum chain depth

Cycle detection uses the chain of documents on the current traversal path,
not a global visited set: a file reachable through two separate branches is
not a cycle. Only re-entry into the current chain is.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ctxlint.document import Document, DocumentLoadError
from ctxlint.markdown import MarkdownScanner
from ctxlint.model import Location, Severity, Violation
from ctxlint.rules.base import BaseRule

logger = logging.getLogger(__name__)

RULE_ID = "import-resolution"
DEFAULT_MAX_DEPTH = 5
CHAIN_SEPARATOR = " → "


@dataclass(frozen=True)
class ImportEdge:
    """A directive in one document pointing at another file.

    Attributes:
        source_path: Absolute path of the including document.
        import_path: The path exactly as written after `@`.
        resolved_path: Absolute path the directive resolves to.
        location: Position of the directive in the including document.
    """

    source_path: Path
    import_path: str
    resolved_path: Path
    location: Location


def resolve_import_path(import_path: str, source_path: Path) -> Path:
    """Resolve a directive path against the document that contains it.

    Handles:
    - Home-relative paths (`~/...`), resolved against the user's home
    - Absolute paths, resolved as-is
    - Relative paths (`./...`, `../...` or bare), resolved against the
      directory of the including document

    Args:
        import_path: Path as written in the directive.
        source_path: Absolute path of the including document.

    Returns:
        Absolute, normalized path.
    """
    if import_path.startswith("~/"):
        return (Path.home() / import_path[2:]).resolve()
    candidate = Path(import_path)
    if candidate.is_absolute():
        return candidate.resolve()
    return (source_path.parent / candidate).resolve()


def _format_chain(chain: list[Path], last: Path) -> str:
    return CHAIN_SEPARATOR.join(str(p) for p in [*chain, last])


def _target_exists(path: Path) -> bool:
    """Path.exists that treats stat errors such as ENAMETOOLONG as missing."""
    try:
        return path.exists()
    except OSError as e:
        logger.debug("Cannot stat import target %s: %s", path, e)
        return False


class ImportResolver:
    """Depth-first walk over the import graph of a root document.

    Attributes:
        max_depth: Maximum number of hops allowed from the root document.
    """

    def __init__(
        self,
        max_depth: int = DEFAULT_MAX_DEPTH,
        loader: Callable[[Path], Document] = Document.load,
        rule_id: str = RULE_ID,
    ) -> None:
        if max_depth < 0:
            raise ValueError("max_depth must be non-negative")
        self.max_depth = max_depth
        self.loader = loader
        self.rule_id = rule_id

    def edges(self, document: Document, source_path: Path | None = None) -> list[ImportEdge]:
        """List the live import edges leaving a document."""
        source = source_path or document.path.resolve()
        return [
            ImportEdge(
                source_path=source,
                import_path=directive.path,
                resolved_path=resolve_import_path(directive.path, source),
                location=directive.location,
            )
            for directive in MarkdownScanner.extract_imports(document.lines)
        ]

    def resolve(self, document: Document) -> list[Violation]:
        """Check every import chain reachable from the document.

        Violations for nested documents are reported at the location of the
        root-level directive that leads to them.

        Args:
            document: Root document.

        Returns:
            Error violations for missing targets, cycles and depth overruns.
        """
        root = document.path.resolve()
        violations: list[Violation] = []
        self._walk(document, root, 0, [root], {root}, None, violations)
        return violations

    def _walk(
        self,
        document: Document,
        path: Path,
        depth: int,
        chain: list[Path],
        visited: set[Path],
        anchor: Location | None,
        violations: list[Violation],
    ) -> None:
        for edge in self.edges(document, path):
            location = anchor or edge.location
            target = edge.resolved_path
            origin = "" if depth == 0 else f" (imported from {edge.source_path})"

            if not _target_exists(target):
                violations.append(
                    self._error(
                        f'Import "@{edge.import_path}"{origin} resolves to '
                        f'"{target}" which does not exist',
                        location,
                    )
                )
                continue

            if target in visited:
                violations.append(
                    self._error(
                        f"Circular import detected: {_format_chain(chain, target)}",
                        location,
                    )
                )
                continue

            if depth + 1 > self.max_depth:
                violations.append(
                    self._error(
                        f"Import chain exceeds maximum depth of {self.max_depth} hops: "
                        f"{_format_chain(chain, target)}",
                        location,
                    )
                )
                continue

            try:
                nested = self.loader(target)
            except DocumentLoadError as e:
                logger.debug("Not following import %s: %s", target, e)
                continue

            chain.append(target)
            visited.add(target)
            try:
                self._walk(nested, target, depth + 1, chain, visited, location, violations)
            finally:
                chain.pop()
                visited.discard(target)

    def _error(self, message: str, location: Location) -> Violation:
        return Violation(self.rule_id, message, Severity.ERROR, location)


class ImportResolutionRule(BaseRule):
    """Rule wrapper that runs the resolver on each linted document."""

    id = RULE_ID
    description = (
        "Validates that imports resolve to existing files and detects circular dependencies"
    )

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.resolver = ImportResolver(max_depth=max_depth, rule_id=self.id)

    def evaluate(self, document: Document) -> list[Violation]:
        return self.resolver.resolve(document)
