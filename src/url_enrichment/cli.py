"""
CLI entrypoint:
  url-enrichment extract https://example.com [--output site.json]
  url-enrichment audio --script "Meet Example. It is fast." [--style lo-fi] [--duration 30]
  url-enrichment run https://example.com --script "..." [--style jazz] [--duration 30]
"""

import argparse
import contextlib
import json
import sys
from typing import Any, Dict, Optional, Sequence

from url_enrichment.application.audio import AudioOrchestrator
from url_enrichment.application.beats import BeatDetector
from url_enrichment.application.branding import BrandingAssembler
from url_enrichment.application.content import ContentExtractor
from url_enrichment.application.extraction import ExtractionOrchestrator
from url_enrichment.application.logos import LogoResolver
from url_enrichment.application.narration import DEFAULT_MUSIC_STYLE, MUSIC_STYLE_PROMPTS
from url_enrichment.application.pipeline import VideoPipeline


def build_extractor(adapters: Dict[str, Any]) -> ExtractionOrchestrator:
    return ExtractionOrchestrator(
        content_extractor=ContentExtractor(adapters["structured_extractor"]),
        branding_assembler=BrandingAssembler(LogoResolver(adapters["logo_sources"])),
        browser=adapters["browser"],
        asset_store=adapters["asset_store"],
        fetcher=adapters["fetcher"],
    )


def build_audio(adapters: Dict[str, Any]) -> AudioOrchestrator:
    return AudioOrchestrator(
        narration_providers=adapters["narration_providers"],
        music_providers=adapters["music_providers"],
        beat_detector=BeatDetector(adapters["beat_strategies"]),
        asset_store=adapters["asset_store"],
    )


def _write_result(data: Dict[str, Any], output: Optional[str]) -> None:
    text = json.dumps(data, indent=2, ensure_ascii=False)
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        print(f"\n✓ Result written to: {output}", file=sys.stderr)
    else:
        print(text)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="url-enrichment",
        description="Turn a URL into content, branding, audio and beats for a promo video",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    extract = sub.add_parser("extract", help="Extract content and branding from a URL")
    extract.add_argument("url")

    audio = sub.add_parser("audio", help="Generate narration, music and beats")
    run = sub.add_parser("run", help="Extract, generate audio and assemble renderer props")
    run.add_argument("url")

    for p in (audio, run):
        p.add_argument("--script", required=True, help="Narration script")
        p.add_argument(
            "--style",
            default=DEFAULT_MUSIC_STYLE,
            help=f"Music style: {', '.join(MUSIC_STYLE_PROMPTS)} (default {DEFAULT_MUSIC_STYLE})",
        )
        p.add_argument("--duration", type=float, default=30, help="Video length in seconds (default 30)")

    for p in (extract, audio, run):
        p.add_argument("--output", "-o", help="Write the JSON result to this file instead of stdout")
    return parser


def main(argv: Optional[Sequence[str]] = None, adapters: Optional[Dict[str, Any]] = None) -> int:
    args = _parser().parse_args(argv)

    # Progress lines go to stderr so stdout carries only the JSON result
    try:
        with contextlib.redirect_stdout(sys.stderr):
            if adapters is None:
                from url_enrichment.adapters import default_adapters
                adapters = default_adapters()
            result = _run_command(args, adapters)
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2

    _write_result(result, args.output)
    return 0


def _run_command(args: argparse.Namespace, adapters: Dict[str, Any]) -> Dict[str, Any]:
    if args.command == "extract":
        return build_extractor(adapters).extract_url_content(args.url).to_dict()
    if args.command == "audio":
        return build_audio(adapters).generate_audio(args.style, args.script, args.duration).to_dict()
    pipeline = VideoPipeline(
        extractor=build_extractor(adapters),
        audio=build_audio(adapters),
        video_renderer=adapters.get("video_renderer"),
    )
    return pipeline.run(args.url, args.script, args.style, args.duration)


if __name__ == "__main__":
    sys.exit(main())
