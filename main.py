"""Entry point for the spring rope."""

import sys

from springrope.config import settings
from springrope.simulation.loop import run, run_headless


if __name__ == "__main__":
    runtime_settings = settings.load_runtime_settings(sys.argv[1:])
    settings.apply_runtime_settings(runtime_settings)
    headless_frames = settings.parse_args(sys.argv[1:]).headless_frames
    if headless_frames is not None:
        run_headless(runtime_settings, headless_frames)
    else:
        run(runtime_settings)
