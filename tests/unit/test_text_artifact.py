from pathlib import Path

from app.export.text_artifact import (
    TEXT_CONTENT_TYPE,
    ArtifactKind,
    build_text_artifact,
    write_text_artifact,
)


class TestBuildTextArtifact:
    def test_extracted_defaults(self) -> None:
        artifact = build_text_artifact("Hello World")
        assert artifact.filename == "extracted.txt"
        assert artifact.content_type == TEXT_CONTENT_TYPE
        assert artifact.data == b"Hello World"

    def test_translated_is_utf8(self) -> None:
        artifact = build_text_artifact("こんにちは", ArtifactKind.TRANSLATED)
        assert artifact.filename == "translated.txt"
        assert artifact.data.decode("utf-8") == "こんにちは"

    def test_kind_as_string_and_custom_name(self) -> None:
        artifact = build_text_artifact("x", "translated", filename="out.txt")
        assert artifact.filename == "out.txt"

    def test_empty_text_is_allowed(self) -> None:
        assert build_text_artifact("").data == b""


class TestWriteTextArtifact:
    def test_creates_directory_and_writes_bytes(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "out"
        path = write_text_artifact(build_text_artifact("line 1\nline 2"), target)
        assert path == target / "extracted.txt"
        assert path.read_text(encoding="utf-8") == "line 1\nline 2"

    def test_ignores_directory_components_in_filename(self, tmp_path: Path) -> None:
        artifact = build_text_artifact("x", filename="../escape.txt")
        path = write_text_artifact(artifact, tmp_path)
        assert path == tmp_path / "escape.txt"
