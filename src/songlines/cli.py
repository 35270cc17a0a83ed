"""
CLI entry point for the Songlines sketch.

Usage:
    songlines <audio_file> [<audio_file> ...] [options]
    python -m songlines <audio_file> [options]
"""

import argparse
import sys
import time
from pathlib import Path

import pygame

from songlines.config import SketchConfig, SpectrumConfig
from songlines.io.tracks import Track
from songlines.sketch import Sketch


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="songlines",
        description="Audio-reactive circle motifs that swell and glow with the notes C to B",
    )

    parser.add_argument(
        "audio",
        type=Path,
        nargs="+",
        help="Audio files forming the playlist (wav, mp3, flac, ogg)",
    )

    # Window
    parser.add_argument("--size", type=int, default=800, help="Canvas edge in pixels (default: 800)")
    parser.add_argument("-f", "--fps", type=int, default=60, help="Frames per second (default: 60)")

    # Analysis
    parser.add_argument(
        "--sample-rate", type=int, default=44100,
        help="Decode and playback sample rate (default: 44100)",
    )

    # Behaviour
    parser.add_argument("--seed", type=int, default=None, help="Seed for layout randomness")
    parser.add_argument("--autoplay", action="store_true", help="Start the first track immediately")
    parser.add_argument("--debug", action="store_true", help="Show circle indices and canvas bounds")

    return parser


def main(argv: list[str] | None = None):
    args = build_parser().parse_args(argv)

    missing = [path for path in args.audio if not path.exists()]
    if missing:
        for path in missing:
            print(f"Error: Audio file not found: {path}", file=sys.stderr)
        sys.exit(1)

    try:
        config = SketchConfig(
            size=args.size,
            fps=args.fps,
            debug=args.debug,
            autoplay=args.autoplay,
            spectrum=SpectrumConfig(sample_rate=args.sample_rate),
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    pygame.init()
    try:
        pygame.mixer.init(frequency=args.sample_rate, size=-16, channels=2, buffer=1024)
    except pygame.error as e:
        print(f"Audio output unavailable ({e}); visuals will follow a silent clock.")
    else:
        # A paused track keeps its channel, so every track needs its own
        pygame.mixer.set_num_channels(max(pygame.mixer.get_num_channels(), len(args.audio)))

    print(f"Loading {len(args.audio)} track(s)")
    t0 = time.time()
    tracks = []
    for path in args.audio:
        track = Track.load(path, sample_rate=args.sample_rate)
        print(f"  {track.name}: {track.duration:.1f}s")
        tracks.append(track)
    print(f"  Decoding took {time.time() - t0:.1f}s")

    sketch = Sketch(tracks, config, seed=args.seed)
    try:
        sketch.run()
    finally:
        pygame.quit()


if __name__ == "__main__":
    main()
