"""Command-line interface for colorant.

Provides the main entry point for running the targeting loop and for
checking the capture region and HSV window against the live screen.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal
from pathlib import Path

from colorant.domain.models import Action

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="colorant",
        description="Color-window target acquisition loop",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/colorant.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    run_parser = subparsers.add_parser("run", help="Run the targeting loop")
    run_parser.add_argument(
        "--action", choices=[a.value for a in Action], default=None,
        help="Action to perform each cycle (default: loop.action from config)",
    )
    run_parser.add_argument(
        "--cycles", type=int, default=None,
        help="Stop after this many processed cycles",
    )

    test_parser = subparsers.add_parser(
        "capture-test", help="Grab one frame, run detection, and save a debug image",
    )
    test_parser.add_argument(
        "--output", type=Path, default=Path("capture_test.png"),
        help="Where to save the annotated frame",
    )

    return parser.parse_args(argv)


async def _run_engine(settings, args) -> None:
    """Build the engine and drive it until interrupted."""
    from colorant.config.settings import build_engine_config
    from colorant.engine import CycleRunner, LoggingObserver, TargetingEngine
    from colorant.output.http_backend import HttpPointerOutput

    config = build_engine_config(settings)
    output = HttpPointerOutput(
        base_url=settings.output.http_base_url,
        timeout=settings.output.http_timeout,
    )

    engine = await TargetingEngine.create(
        config,
        output=output,
        observers=[LoggingObserver()],
        frame_timeout=settings.capture.frame_timeout,
        poll_interval=settings.capture.poll_interval,
    )
    async with engine:
        runner = CycleRunner(
            engine,
            action=args.action or settings.loop.action,
            cycle_delay=settings.loop.cycle_delay,
            max_consecutive_errors=settings.loop.max_consecutive_errors,
        )

        loop = asyncio.get_running_loop()
        # SIGUSR1 toggles the engine where the platform supports it
        if hasattr(signal, "SIGUSR1"):
            loop.add_signal_handler(signal.SIGUSR1, engine.toggle)

        if settings.loop.start_enabled:
            engine.set_enabled(True)
        else:
            logger.info("Engine starts disabled; send SIGUSR1 to toggle")

        try:
            await runner.run(max_cycles=args.cycles)
        finally:
            if hasattr(signal, "SIGUSR1"):
                loop.remove_signal_handler(signal.SIGUSR1)


async def _capture_test(settings, output: Path) -> None:
    """Grab one frame, run detection, and save an annotated image."""
    from colorant.capture.screen import ScreenCapture
    from colorant.config.settings import build_engine_config
    from colorant.utils.imaging import save_debug_image
    from colorant.vision.detector import hsv_mask, scan_frame

    config = build_engine_config(settings)
    with ScreenCapture.with_region(config.x, config.y, config.x_fov, config.y_fov) as capture:
        capture.resume()
        loop = asyncio.get_running_loop()
        frame = await loop.run_in_executor(None, capture.next_frame, 1.0)

    if frame is None:
        print("No frame captured within 1s")
        return

    result = scan_frame(
        frame.image, config.lower_hsv, config.upper_hsv, config.min_cluster, config.hue_wrap,
    )
    mask = hsv_mask(frame.image, config.lower_hsv, config.upper_hsv, config.hue_wrap)
    save_debug_image(frame.image, mask, result.centroid, output)

    print(f"Region:  {config.x_fov}x{config.y_fov} at ({config.x}, {config.y})")
    print(f"Window:  {config.lower_hsv} .. {config.upper_hsv}")
    print(f"Matched: {result.matched_pixels} px (min_cluster={config.min_cluster})")
    if result.centroid is None:
        print("Target:  none")
    else:
        cx, cy = config.center
        print(
            f"Target:  ({result.centroid.x}, {result.centroid.y}), "
            f"offset ({result.centroid.x - cx:+.1f}, {result.centroid.y - cy:+.1f})"
        )
    print(f"Saved debug image to {output}")


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the colorant CLI."""
    args = parse_args(argv)

    if args.command is None:
        parse_args(["--help"])
        return

    from colorant.config.settings import load_settings
    from colorant.utils.logging import setup_logging

    settings = load_settings(args.config)

    if args.verbose:
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging)

    if args.command == "run":
        logger.info("Starting targeting loop")
        try:
            asyncio.run(_run_engine(settings, args))
        except KeyboardInterrupt:
            logger.info("Interrupted")

    elif args.command == "capture-test":
        logger.info("Running capture test")
        asyncio.run(_capture_test(settings, args.output))


if __name__ == "__main__":
    main()
