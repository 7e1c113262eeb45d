"""csvdesk: load, filter, page through, edit and export CSV datasets."""

__version__ = "0.1.0"
