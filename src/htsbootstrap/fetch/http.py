"""HTTP/file fetch and extraction of pinned dependency archives."""

from __future__ import annotations

import io
import shutil
import tarfile
import tempfile
from pathlib import Path
from urllib.error import HTTPError, URLError
from urllib.request import urlopen

from htsbootstrap.errors import ErrorReason, FetchError
from htsbootstrap.models import DependencySpec


def fetch_archive(spec: DependencySpec, dest_dir: Path) -> Path:
    """Download ``spec``'s tarball and extract it into ``dest_dir``.

    Returns ``dest_dir/<name>-<version>``. Only that directory is taken from
    the archive; a stale copy of it is replaced.
    """
    payload = _download(spec)
    source_dir = dest_dir / spec.source_dirname

    temp_root = Path(tempfile.mkdtemp(prefix=f".{spec.source_dirname}-", dir=str(dest_dir)))
    try:
        try:
            with tarfile.open(fileobj=io.BytesIO(payload), mode="r:*") as archive:
                archive.extractall(temp_root, filter="data")
        except (tarfile.TarError, OSError) as exc:
            raise FetchError(
                "Dependency archive could not be extracted.",
                reason=ErrorReason.ARCHIVE_INVALID,
                hint="Verify the archive URL points to a gzip-compressed tarball.",
                context={
                    "operation": "fetch_archive",
                    "url": spec.archive_url,
                    "error": str(exc),
                },
            ) from exc

        extracted = temp_root / spec.source_dirname
        if not extracted.is_dir():
            raise FetchError(
                "Dependency archive has an unexpected layout.",
                reason=ErrorReason.ARCHIVE_INVALID,
                hint=f"Expected a top-level `{spec.source_dirname}` directory.",
                context={"operation": "fetch_archive", "url": spec.archive_url},
            )
        if source_dir.exists():
            shutil.rmtree(source_dir)
        shutil.move(str(extracted), source_dir)
    finally:
        shutil.rmtree(temp_root, ignore_errors=True)
    return source_dir


def _download(spec: DependencySpec) -> bytes:
    try:
        with urlopen(spec.archive_url) as response:  # noqa: S310 - pinned dependency URLs
            return response.read()
    except HTTPError as exc:
        reason = (
            ErrorReason.VERSION_NOT_FOUND if exc.code == 404 else ErrorReason.NETWORK_UNAVAILABLE
        )
        raise FetchError(
            "Dependency archive download failed.",
            reason=reason,
            context={
                "operation": "fetch_archive",
                "url": spec.archive_url,
                "status": str(exc.code),
            },
        ) from exc
    except URLError as exc:
        raise FetchError(
            "Dependency archive host is unreachable.",
            reason=ErrorReason.NETWORK_UNAVAILABLE,
            hint="Check network access or mirror the archive locally.",
            context={
                "operation": "fetch_archive",
                "url": spec.archive_url,
                "error": str(exc.reason),
            },
        ) from exc
