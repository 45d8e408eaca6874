from dataclasses import dataclass
from enum import Enum
from pathlib import Path

TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"


class ArtifactKind(str, Enum):
    EXTRACTED = "extracted"
    TRANSLATED = "translated"


DEFAULT_FILENAMES: dict[ArtifactKind, str] = {
    ArtifactKind.EXTRACTED: "extracted.txt",
    ArtifactKind.TRANSLATED: "translated.txt",
}


@dataclass(frozen=True)
class TextArtifact:
    """Plain-text download of extracted or translated content."""

    filename: str
    content_type: str
    data: bytes


def build_text_artifact(
    text: str,
    kind: ArtifactKind | str = ArtifactKind.EXTRACTED,
    filename: str | None = None,
) -> TextArtifact:
    artifact_kind = ArtifactKind(kind)
    return TextArtifact(
        filename=filename or DEFAULT_FILENAMES[artifact_kind],
        content_type=TEXT_CONTENT_TYPE,
        data=text.encode("utf-8"),
    )


def write_text_artifact(artifact: TextArtifact, directory: Path) -> Path:
    """Write the artifact under directory, creating it if needed."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / Path(artifact.filename).name
    path.write_bytes(artifact.data)
    return path
