from pathlib import Path

import pytest

from htsbootstrap.environment import RawInputs, raw_inputs_from_environ, resolve
from htsbootstrap.errors import ConfigError, ErrorReason


def test_resolve_applies_defaults(tmp_path: Path) -> None:
    env = resolve(RawInputs(output_dir=str(tmp_path)))

    assert env.output_dir == tmp_path
    assert env.library_version == "1.9"
    assert env.target_triple == ""
    assert env.library_mode == "shared"
    assert env.staged_path == tmp_path / "htslib"
    assert env.is_musl is False


@pytest.mark.parametrize("triple", ["", "x86_64-linux-gnu", "arm-linux-musleabi"])
@pytest.mark.parametrize("mode", ["static", "shared", ""])
def test_empty_version_always_resolves_to_default(tmp_path: Path, triple: str, mode: str) -> None:
    env = resolve(
        RawInputs(
            output_dir=str(tmp_path),
            library_version="",
            target_triple=triple,
            library_mode=mode,
        ),
    )
    assert env.library_version == "1.9"


def test_resolve_keeps_explicit_version_and_triple(tmp_path: Path) -> None:
    env = resolve(
        RawInputs(
            output_dir=str(tmp_path),
            library_version="1.10.2",
            target_triple="x86_64-linux-musl",
            library_mode="static",
        ),
    )

    assert env.library_version == "1.10.2"
    assert env.target_triple == "x86_64-linux-musl"
    assert env.library_mode == "static"
    assert env.is_musl is True


@pytest.mark.parametrize("mode", ["Static", "dynamic", "both", " static"])
def test_resolve_rejects_unknown_mode(tmp_path: Path, mode: str) -> None:
    with pytest.raises(ConfigError) as excinfo:
        resolve(RawInputs(output_dir=str(tmp_path), library_mode=mode))

    assert excinfo.value.reason is ErrorReason.INVALID_MODE
    assert excinfo.value.code == "E_CONFIG"


def test_resolve_makes_relative_output_dir_absolute(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    (tmp_path / "build").mkdir()
    monkeypatch.chdir(tmp_path)

    env = resolve(RawInputs(output_dir="build"))

    assert env.output_dir.is_absolute()
    assert env.output_dir == tmp_path / "build"
    assert env.staged_path == tmp_path / "build" / "htslib"


def test_resolve_requires_output_dir() -> None:
    with pytest.raises(ConfigError) as excinfo:
        resolve(RawInputs())

    assert excinfo.value.reason is ErrorReason.MISSING_OUTPUT_DIR


def test_resolve_rejects_missing_output_dir(tmp_path: Path) -> None:
    with pytest.raises(ConfigError) as excinfo:
        resolve(RawInputs(output_dir=str(tmp_path / "absent")))

    assert excinfo.value.reason is ErrorReason.MISSING_OUTPUT_DIR
    assert excinfo.value.context["output_dir"] == str(tmp_path / "absent")


def test_resolve_rejects_file_as_output_dir(tmp_path: Path) -> None:
    target = tmp_path / "file"
    target.write_text("", encoding="utf-8")

    with pytest.raises(ConfigError) as excinfo:
        resolve(RawInputs(output_dir=str(target)))

    assert excinfo.value.reason is ErrorReason.MISSING_OUTPUT_DIR


def test_resolve_rejects_unwritable_output_dir(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr("htsbootstrap.environment.os.access", lambda *_: False)

    with pytest.raises(ConfigError) as excinfo:
        resolve(RawInputs(output_dir=str(tmp_path)))

    assert excinfo.value.reason is ErrorReason.OUTPUT_DIR_NOT_WRITABLE


def test_raw_inputs_read_script_variables() -> None:
    raw = raw_inputs_from_environ(
        {
            "OUT_DIR": "/tmp/build",
            "HTSLIB_VERSION": "1.9",
            "TARGET": "x86_64-linux-musl",
            "HTSLIB": "static",
        },
    )

    assert raw == RawInputs(
        output_dir="/tmp/build",
        library_version="1.9",
        target_triple="x86_64-linux-musl",
        library_mode="static",
    )


def test_raw_inputs_default_to_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OUT_DIR", "/srv/out")
    monkeypatch.delenv("HTSLIB_VERSION", raising=False)
    monkeypatch.delenv("TARGET", raising=False)
    monkeypatch.delenv("HTSLIB", raising=False)

    raw = raw_inputs_from_environ()

    assert raw.output_dir == "/srv/out"
    assert raw.library_version == ""
