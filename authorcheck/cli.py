from __future__ import annotations

import argparse
import asyncio
import json
import logging
import mimetypes
import sys
from pathlib import Path

from authorcheck.core.config import get_settings
from authorcheck.core.errors import GatewayError
from authorcheck.core.logging import configure_logging
from authorcheck.services.orchestrator import AnalysisOrchestrator, HttpGatewayClient
from authorcheck.utils.files import extract_text


def _load_text(text: str | None, input_file: str | None) -> str:
    if text and input_file:
        raise ValueError("Use either --text or --input-file, not both.")
    if text is None and not input_file:
        raise ValueError("Provide --text or --input-file.")
    if text is not None:
        return text

    path = Path(input_file)
    content_type = mimetypes.guess_type(path.name)[0] or "text/plain"
    return extract_text(path.read_bytes(), content_type)


def _save_json(payload: dict, path: str | Path) -> None:
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(payload, ensure_ascii=True, indent=2) + "\n", encoding="utf-8")


def _add_analyze_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--text", default=None, help="Text to analyze.")
    parser.add_argument("--input-file", default=None, help="File to analyze (.txt, .md, .pdf, .docx, ...).")
    parser.add_argument("--gateway-url", default=None, help="Analysis gateway URL (defaults to GATEWAY_URL).")
    parser.add_argument("--timeout", type=int, default=None, help="Model timeout in milliseconds.")
    parser.add_argument("--no-ai", action="store_true", help="Skip the gateway and report local statistics only.")
    parser.add_argument(
        "--fallback-mode",
        choices=["default", "heuristic"],
        default=None,
        help="What to use when the gateway fails (defaults to AI_FALLBACK_MODE).",
    )
    parser.add_argument("--output-file", default=None, help="Optional JSON output path.")


def _add_serve_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="authorcheck", description="Text statistics and AI-assisted writing analysis.")
    sub = parser.add_subparsers(dest="command", required=True)

    p_analyze = sub.add_parser("analyze", help="Analyze a text and print the merged result as JSON.")
    _add_analyze_args(p_analyze)

    p_serve = sub.add_parser("serve", help="Run the HTTP service.")
    _add_serve_args(p_serve)
    return parser


async def _analyze_from_args(args: argparse.Namespace) -> dict:
    settings = get_settings()
    text = _load_text(args.text, args.input_file)

    client = None if args.no_ai else HttpGatewayClient(args.gateway_url or settings.gateway_url)
    orchestrator = AnalysisOrchestrator.from_settings(settings, client)
    if args.timeout is not None:
        orchestrator.timeout_ms = args.timeout
    if args.fallback_mode is not None:
        orchestrator.fallback_mode = args.fallback_mode

    result = await orchestrator.analyze(text)
    return result.model_dump(by_alias=True)


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "serve":
        import uvicorn

        # The app configures its own logging on import.
        uvicorn.run("authorcheck.main:app", host=args.host, port=args.port, reload=args.reload)
        return

    configure_logging(level=logging.WARNING, stream=sys.stderr)

    try:
        result = asyncio.run(_analyze_from_args(args))
    except GatewayError as exc:
        parser.exit(2, f"authorcheck: error: {exc.error}\n")
    except (ValueError, OSError) as exc:
        parser.exit(2, f"authorcheck: error: {exc}\n")

    if args.output_file:
        _save_json(result, args.output_file)
    print(json.dumps(result, ensure_ascii=True, indent=2))


if __name__ == "__main__":
    main()
