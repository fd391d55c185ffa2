"""ctxlint - lint and fix Markdown context files."""

__version__ = "0.1.0"
