# SPDX-License-Identifier: MIT
"""wip-grok command-line interface.

Thin front end: argv -> operations -> stdout. Errors go to stderr with a
non-zero exit code. The API key is resolved by the first operation that
needs it, after its input has been validated.
"""

import argparse
import sys
from collections.abc import Awaitable, Callable

import anyio
from dotenv import load_dotenv

from . import __version__
from .download import download_url, save_b64
from .exceptions import GrokError
from .formatting import format_json, format_search_result
from .tools import image as image_tools
from .tools import search as search_tools
from .tools import video as video_tools
from .types import GeneratedImage, SavedFile
from .utils import indexed_output_path

Handler = Callable[[argparse.Namespace], Awaitable[None]]


def _csv(value: str) -> list[str]:
    """Parse ``a,b,c`` into a list, dropping blanks."""
    return [item.strip() for item in value.split(",") if item.strip()]


def _describe_saved(saved: SavedFile) -> str:
    if saved["dimensions"]:
        width, height = saved["dimensions"]
        return f"Saved to {saved['path']} ({width}x{height} {saved['format'] or 'image'})"
    return f"Saved to {saved['path']}"


# ==================== HANDLERS ====================
async def _search_web(args: argparse.Namespace) -> None:
    result = await search_tools.search_web(
        args.query,
        model=args.model,
        allowed_domains=args.domains,
        excluded_domains=args.exclude,
        enable_image_understanding=args.images,
    )
    print(format_search_result(result, indent="  "))


async def _search_x(args: argparse.Namespace) -> None:
    result = await search_tools.search_x(
        args.query,
        model=args.model,
        allowed_x_handles=args.handles,
        excluded_x_handles=args.exclude_handles,
        from_date=args.from_date,
        to_date=args.to_date,
        enable_image_understanding=args.images,
        enable_video_understanding=args.videos,
    )
    print(format_search_result(result, indent="  "))


async def _emit_images(images: list[GeneratedImage], output: str | None) -> None:
    """Print or save each returned image."""
    for i, img in enumerate(images):
        if output and (img["url"] or img["b64_json"]):
            path = indexed_output_path(output, i, len(images))
            if img["url"]:
                saved = await download_url(img["url"], path)
            else:
                saved = await save_b64(img["b64_json"] or "", path)
            print(_describe_saved(saved))
        else:
            print(img["url"] or "[base64 data]")
        if img["revised_prompt"]:
            print(f"Revised prompt: {img['revised_prompt']}")


async def _imagine(args: argparse.Namespace) -> None:
    result = await image_tools.generate_image(
        args.prompt,
        n=args.n,
        aspect_ratio=args.aspect,
        response_format=args.format,
        model=args.model,
    )
    await _emit_images(result["images"], args.output)


async def _edit(args: argparse.Namespace) -> None:
    result = await image_tools.edit_image(
        args.prompt,
        args.image,
        n=args.n,
        response_format=args.format,
        model=args.model,
    )
    await _emit_images(result["images"], args.output)


async def _video(args: argparse.Namespace) -> None:
    submission = await video_tools.generate_video(
        args.prompt,
        duration=args.duration,
        resolution=args.resolution,
        aspect_ratio=args.aspect,
        image=args.image,
        model=args.model,
    )
    request_id = submission["request_id"]
    print(f"Video generation started. Request ID: {request_id}")

    if not (args.wait or args.output):
        print(f"Check status: wip-grok video-status {request_id}")
        return

    print("Waiting for completion...")
    status = await video_tools.wait_for_video(request_id, interval=args.interval, timeout=args.timeout)
    print(f"Status: {status['status']}")
    if status["url"]:
        if args.output:
            saved = await download_url(status["url"], args.output, is_image=False)
            print(_describe_saved(saved))
        else:
            print(f"URL: {status['url']}")


async def _video_status(args: argparse.Namespace) -> None:
    status = await video_tools.poll_video(args.request_id)
    print(format_json(status))


# ==================== PARSER ====================
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wip-grok",
        description="xAI Grok API. Sensor (search) + Actuator (generate).",
        epilog="Environment: XAI_API_KEY (or 1Password reference in XAI_OP_REFERENCE)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    p = sub.add_parser("search-web", help="Search the web")
    p.add_argument("query")
    p.add_argument("--domains", type=_csv, help="Only these domains, comma-separated (max 5)")
    p.add_argument("--exclude", type=_csv, help="Exclude these domains, comma-separated (max 5)")
    p.add_argument("--images", action="store_true", help="Analyze images in results")
    p.add_argument("--model")
    p.set_defaults(handler=_search_web)

    p = sub.add_parser("search-x", help="Search X (Twitter)")
    p.add_argument("query")
    p.add_argument("--handles", type=_csv, help="Only these handles, comma-separated, no @ (max 10)")
    p.add_argument("--exclude-handles", type=_csv, help="Exclude these handles (max 10)")
    p.add_argument("--from", dest="from_date", metavar="YYYY-MM-DD")
    p.add_argument("--to", dest="to_date", metavar="YYYY-MM-DD")
    p.add_argument("--images", action="store_true", help="Analyze images in posts")
    p.add_argument("--videos", action="store_true", help="Analyze videos in posts")
    p.add_argument("--model")
    p.set_defaults(handler=_search_x)

    p = sub.add_parser("imagine", help="Generate images from text")
    p.add_argument("prompt")
    p.add_argument("--n", type=int, default=1, help="Number of images (1-10)")
    p.add_argument("--aspect", help="Aspect ratio, e.g. 16:9")
    p.add_argument("--format", choices=["url", "b64_json"], default="url")
    p.add_argument("--output", help="Save to file (several images get -1, -2... suffixes)")
    p.add_argument("--model")
    p.set_defaults(handler=_imagine)

    p = sub.add_parser("edit", help="Edit an image with a text instruction")
    p.add_argument("prompt")
    p.add_argument(
        "--image",
        action="append",
        required=True,
        help="Source image URL, data URI, or file path (repeatable, max 3; only the first is sent)",
    )
    p.add_argument("--n", type=int, default=1)
    p.add_argument("--format", choices=["url", "b64_json"], default="url")
    p.add_argument("--output")
    p.add_argument("--model")
    p.set_defaults(handler=_edit)

    p = sub.add_parser("video", help="Generate a video")
    p.add_argument("prompt")
    p.add_argument("--duration", type=int, default=5, help="Seconds (1-15)")
    p.add_argument("--resolution", choices=["480p", "720p"], default="720p")
    p.add_argument("--aspect", help="Aspect ratio, e.g. 16:9")
    p.add_argument("--image", help="Seed image URL for image-to-video")
    p.add_argument("--wait", action="store_true", help="Wait for completion")
    p.add_argument("--output", help="Save the finished video (implies --wait)")
    p.add_argument("--interval", type=float, default=video_tools.DEFAULT_POLL_INTERVAL, help="Poll interval (s)")
    p.add_argument("--timeout", type=float, default=video_tools.DEFAULT_WAIT_TIMEOUT, help="Max wait (s)")
    p.add_argument("--model")
    p.set_defaults(handler=_video)

    p = sub.add_parser("video-status", help="Check a video job")
    p.add_argument("request_id")
    p.set_defaults(handler=_video_status)

    return parser


def main(argv: list[str] | None = None) -> None:
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help(sys.stderr)
        sys.exit(1)

    handler: Handler = args.handler
    try:
        anyio.run(handler, args)
    except (GrokError, RuntimeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
