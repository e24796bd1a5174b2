"""Legal document generator: DOCX placeholder extraction and substitution."""

__version__ = "0.1.0"
