import argparse
import asyncio
import mimetypes
from pathlib import Path

import uvicorn

from app.config.settings import Settings
from app.documents.models import Document
from app.errors.classifier import ClassifiedError
from app.export.text_artifact import ArtifactKind, build_text_artifact, write_text_artifact
from app.logging.logger import Log
from app.pipeline.coordinator import build_coordinator
from app.web.app import create_app


def _print_progress(percent: int) -> None:
    print(f"\rExtracting... {percent:3d}%", end="", flush=True)


def _report_failure(stage: str, error: ClassifiedError) -> int:
    print(f"{stage} failed ({error.category.value}): {error.message}")
    return 1


async def run_extract(
    settings: Settings,
    image_path: Path,
    *,
    ocr_language: str | None,
    target_language: str | None,
    out_dir: Path,
) -> int:
    """Extract (and optionally translate) one image and save the text files."""
    data = image_path.read_bytes()
    mime_type = mimetypes.guess_type(image_path.name)[0] or "application/octet-stream"
    document = Document.from_bytes(data, mime_type, filename=image_path.name)

    saved: list[Path] = []
    async with build_coordinator(settings, on_progress=_print_progress) as coordinator:
        snapshot = await coordinator.run_extraction(document, ocr_language)
        print()
        if snapshot.error is not None:
            return _report_failure("Extraction", snapshot.error)
        saved.append(
            write_text_artifact(build_text_artifact(snapshot.text, ArtifactKind.EXTRACTED), out_dir)
        )

        if target_language:
            snapshot = await coordinator.run_translation(snapshot.text, target_language)
            if snapshot.error is not None:
                return _report_failure("Translation", snapshot.error)
            saved.append(
                write_text_artifact(
                    build_text_artifact(snapshot.translated_text, ArtifactKind.TRANSLATED),
                    out_dir,
                )
            )

    for path in saved:
        print(f"saved: {path}")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Extract text from images and translate it.")
    commands = parser.add_subparsers(dest="command")

    commands.add_parser("serve", help="Run the HTTP API (default)")

    extract = commands.add_parser("extract", help="Extract text from a local image")
    extract.add_argument("image", type=Path, help="Path to the input image")
    extract.add_argument("--ocr-lang", type=str, default=None, help="Recognition language code (e.g. en, ja)")
    extract.add_argument("--translate", "-t", type=str, default=None, help="Target language code for translation")
    extract.add_argument("--out-dir", "-o", type=Path, default=Path("."), help="Directory for extracted.txt / translated.txt")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> configure logging -> serve or run one extraction."""
    args = _build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    if args.command == "extract":
        return asyncio.run(
            run_extract(
                settings,
                args.image,
                ocr_language=args.ocr_lang,
                target_language=args.translate,
                out_dir=args.out_dir,
            )
        )

    uvicorn.run(
        create_app(settings),
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
