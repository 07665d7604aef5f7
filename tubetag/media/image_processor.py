"""
Trims the borders of downloaded thumbnails before they are embedded.
"""

import logging
import shutil
import subprocess
from pathlib import Path

from rich.markup import escape

log = logging.getLogger(__name__)


class ImageProcessor:
    """Runs an external image editing program over the working directory's images."""

    PROGRAM_NAME = "mogrify"
    ARGUMENTS = ["-trim", "-fuzz", "10%"]

    def __init__(self, working_directory: Path):
        self.working_directory = working_directory

    def run(self) -> bool:
        """
        Trims every JPEG image in the working directory in place.

        Returns:
            True if the program ran successfully, False otherwise. Failures are
            never fatal since the untrimmed images remain usable.
        """
        images = sorted(
            p for p in self.working_directory.iterdir()
            if p.is_file() and p.suffix.lower() == ".jpg"
        )
        if not images:
            log.debug("No images to trim were found.")
            return True

        program = shutil.which(self.PROGRAM_NAME)
        if program is None:
            log.warning(
                f"[yellow]⚠ '{self.PROGRAM_NAME}' was not found, "
                "so images will not be trimmed.[/yellow]"
            )
            return False

        log.debug(f"Trimming {len(images)} image(s) with {self.PROGRAM_NAME}...")
        try:
            result = subprocess.run(
                [program, *self.ARGUMENTS, *(p.name for p in images)],
                cwd=self.working_directory,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            log.warning(f"[yellow]⚠ Could not run {self.PROGRAM_NAME}:[/yellow] {escape(str(e))}")
            return False

        if result.returncode != 0:
            log.warning(
                f"[yellow]⚠ {self.PROGRAM_NAME} exited with code "
                f"{result.returncode}:[/yellow] {escape(result.stderr.strip())}"
            )
            return False

        return True
