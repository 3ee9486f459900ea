"""Cover Letter Genius: résumé + job description in, cover-letter PDF out."""

__version__ = "0.1.0"
