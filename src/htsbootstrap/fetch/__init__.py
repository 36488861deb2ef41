"""Source retrieval for htslib and its pinned dependencies."""

from __future__ import annotations

from htsbootstrap.fetch.git import fetch_library, write_config_header
from htsbootstrap.fetch.http import fetch_archive

__all__ = ["fetch_archive", "fetch_library", "write_config_header"]
