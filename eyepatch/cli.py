"""CLI entrypoints."""
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import cv2
import typer
from PIL import Image
from rich.console import Console
from rich.table import Table

from .canvas import FrameCanvas
from .config import Config, load_config
from .logging_utils import configure_logging
from .patches import EyePatchResult, PatchStatus
from .tracker import FaceMeshEyeTracker
from .utils.io import read_rgb, write_json
from .viz.export import save_image, save_patch

app = typer.Typer(help="Extract eye patches from face mesh landmarks.")
console = Console()

FAILURE_MESSAGES = {
    PatchStatus.NOT_READY: "Frame buffer is empty",
    PatchStatus.NO_FACE_DETECTED: "No face detected",
    PatchStatus.DEGENERATE_BOX: "An eye box had zero width or height",
}


def build_tracker(cfg: Config) -> FaceMeshEyeTracker:
    return FaceMeshEyeTracker.from_config(cfg)


def _setup(config: Optional[Path]) -> Config:
    cfg = load_config(config)
    configure_logging(cfg.logging.level, cfg.logging.json_format)
    return cfg


def _patch_table(result: EyePatchResult) -> Table:
    table = Table(title="Eye patches")
    table.add_column("Eye", style="cyan")
    table.add_column("imagex", justify="right")
    table.add_column("imagey", justify="right")
    table.add_column("width", justify="right")
    table.add_column("height", justify="right")
    for eye, patch in result.patches.to_dict().items():
        table.add_row(eye, str(patch.imagex), str(patch.imagey), str(patch.width), str(patch.height))
    return table


@app.command()
def extract(
    image: Path = typer.Argument(..., exists=True, dir_okay=False, help="Image file to process"),
    out: Path = typer.Option(Path("runs/eyes"), help="Output directory"),
    config: Optional[Path] = typer.Option(None, help="YAML config file"),
    overlay: bool = typer.Option(False, "--overlay", help="Also write the landmark overlay"),
):
    """Extract both eye patches from a single image."""
    cfg = _setup(config)
    cfg.detector.static_image_mode = True
    tracker = build_tracker(cfg)

    rgb = read_rgb(image)
    canvas = FrameCanvas(rgb)
    result = asyncio.run(tracker.get_eye_patches(rgb, canvas))

    if not result:
        console.print(f"[bold red]{FAILURE_MESSAGES[result.status]}[/]")
        raise typer.Exit(code=1)

    save_patch(result.patches.left, out / "left_eye.png")
    save_patch(result.patches.right, out / "right_eye.png")
    write_json(
        out / "boxes.json",
        {
            eye: {"imagex": p.imagex, "imagey": p.imagey, "width": p.width, "height": p.height}
            for eye, p in result.patches.to_dict().items()
        },
    )
    if overlay:
        drawn = tracker.draw_face_overlay(rgb.copy())
        save_image(Image.fromarray(drawn), out / "overlay.png")

    console.print(_patch_table(result))
    console.print(f"[bold green]Output written to: {out}[/]")


async def _track(tracker: FaceMeshEyeTracker, capture, frames: int, show: bool) -> int:
    canvas = FrameCanvas()
    processed = 0
    while frames <= 0 or processed < frames:
        ok, bgr = capture.read()
        if not ok:
            break
        canvas.draw_frame(bgr, color_order="bgr")
        rgb = canvas.to_rgb()
        result = await tracker.get_eye_patches(rgb, canvas)
        processed += 1

        if result:
            left, right = result.patches.left, result.patches.right
            console.print(
                f"frame {processed}: left=({left.imagex},{left.imagey},{left.width}x{left.height}) "
                f"right=({right.imagex},{right.imagey},{right.width}x{right.height})"
            )
        else:
            console.print(f"frame {processed}: {result.status.value}")

        if show:
            cv2.imshow("eyepatch", cv2.cvtColor(tracker.draw_face_overlay(rgb), cv2.COLOR_RGB2BGR))
            if cv2.waitKey(1) & 0xFF == ord("q"):
                break
    return processed


@app.command()
def track(
    camera: int = typer.Option(0, help="Video capture device index"),
    frames: int = typer.Option(0, help="Stop after this many frames (0 = until the stream ends)"),
    config: Optional[Path] = typer.Option(None, help="YAML config file"),
    show: bool = typer.Option(False, "--show", help="Display the landmark overlay"),
):
    """Run the tracking loop on a camera stream."""
    cfg = _setup(config)
    tracker = build_tracker(cfg)

    capture = cv2.VideoCapture(camera)
    if not capture.isOpened():
        console.print(f"[bold red]Could not open camera {camera}[/]")
        raise typer.Exit(code=1)
    try:
        processed = asyncio.run(_track(tracker, capture, frames, show))
    finally:
        capture.release()
        if show:
            cv2.destroyAllWindows()
    console.print(f"[bold green]Processed {processed} frames[/]")


def main() -> None:
    """CLI entry point."""
    app()
