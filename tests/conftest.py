"""Shared test fixtures."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import pytest

from htsbootstrap.models import BZIP2, ZLIB, DependencySpec
from tests.helpers import BZIP2_MAKEFILE, FakeRunner, write_tarball


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def dependency_archives(tmp_path: Path) -> tuple[DependencySpec, ...]:
    """zlib and bzip2 specs pointing at local tarballs with prebuilt archives."""
    zlib_tar = write_tarball(
        tmp_path / "archives" / "zlib-1.2.11.tar.gz",
        {
            "zlib-1.2.11/configure": b"#!/bin/sh\n",
            "zlib-1.2.11/zlib.h": b"/* zlib */\n",
            "zlib-1.2.11/libz.a": b"!<arch>\nzlib\n",
        },
    )
    bzip2_tar = write_tarball(
        tmp_path / "archives" / "bzip2-1.0.6.tar.gz",
        {
            "bzip2-1.0.6/Makefile": BZIP2_MAKEFILE.encode(),
            "bzip2-1.0.6/bzlib.h": b"/* bzlib */\n",
            "bzip2-1.0.6/libbz2.a": b"!<arch>\nbzip2\n",
        },
    )
    return (
        replace(ZLIB, archive_url=zlib_tar.as_uri()),
        replace(BZIP2, archive_url=bzip2_tar.as_uri()),
    )
