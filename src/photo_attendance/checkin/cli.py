from __future__ import annotations

import click
import cv2
from flask import Flask

from ..capture.camera import CameraConstraints, CameraStream
from ..container import Container
from ..core.exceptions import DomainError, SourceNotReady
from .kiosk import KioskCheckInFlow

PREVIEW_WINDOW = "Check-in (SPACE to capture, ESC to cancel)"
KEY_SPACE = 32
KEY_ESC = 27


def show_preview(stream: CameraStream) -> bool:
    """Render the live feed until SPACE (capture) or ESC/q (cancel)."""
    try:
        for frame in stream.frames():
            cv2.imshow(PREVIEW_WINDOW, frame)
            key = cv2.waitKey(1) & 0xFF
            if key == KEY_SPACE:
                return True
            if key in (KEY_ESC, ord("q")):
                return False
        return False
    finally:
        cv2.destroyAllWindows()


def warm_up(stream: CameraStream, frames: int) -> None:
    # Auto-exposure settles over the first few frames.
    for _ in range(max(0, frames)):
        if stream.read() is None:
            break


def register(app: Flask, container: Container) -> None:
    @app.cli.command("kiosk-checkin")
    @click.option("--email", required=True, help="Email of the profile checking in.")
    @click.option("--note", default="", help="Optional note stored with the check-in.")
    @click.option("--device", type=int, default=None, help="Camera device index.")
    @click.option("--preview/--no-preview", default=False, help="Show a live preview window.")
    @click.option("--warmup", type=int, default=5, show_default=True, help="Frames to discard before capturing.")
    def kiosk_checkin(email: str, note: str, device: int | None, preview: bool, warmup: int) -> None:
        """Capture a photo with a local camera and submit a check-in."""
        profile = container.auth_service.find_by_email(email)
        if not profile:
            raise click.ClickException(f"No profile found for {email}")

        constraints = CameraConstraints(device_index=container.camera_device if device is None else device)
        flow = KioskCheckInFlow(
            container.camera,
            container.checkin_service.new_pipeline(),
            jpeg_quality=container.jpeg_quality,
        )

        try:
            with flow:
                stream = flow.start_camera(constraints)
                if preview:
                    if not show_preview(stream):
                        click.echo("Cancelled.")
                        return
                else:
                    warm_up(stream, warmup)

                while True:
                    try:
                        image = flow.capture()
                        break
                    except SourceNotReady as e:
                        if not click.confirm(f"{e.message} Retry?", default=True):
                            click.echo("Cancelled.")
                            return

                click.echo(f"Photo captured ({image.width}x{image.height}).")
                flow.pipeline.note = note
                record = flow.submit(profile.id)
        except DomainError as e:
            raise click.ClickException(e.message)

        click.echo(f"Check-in recorded for {profile.display_name} at {record.check_in_time:%Y-%m-%d %H:%M:%S}")
        click.echo(f"Photo: {record.photo_url}")
