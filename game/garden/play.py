"""
Play a garden game in an arcade window

Usage:
    python -m game.garden.play butterfly_obstacles
    python -m game.garden.play lane_dodge --seed 7
"""

import argparse
import logging

import arcade

from .render import font_size_for
from .variants import VARIANT_CONFIGS, make_variant
from .window import GardenWindow


def main():
    parser = argparse.ArgumentParser(description="Play an emoji garden game")
    parser.add_argument(
        "variant",
        choices=list(VARIANT_CONFIGS),
        help="Which game to open",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for entity placement (default: random)",
    )
    parser.add_argument(
        "--large",
        action="store_true",
        help="Use the large touch-screen sprite size",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log game events",
    )

    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    game = make_variant(args.variant)
    game.reset(seed=args.seed)

    print(f"Starting {args.variant}... close the window to quit.")
    GardenWindow(game, font_size=font_size_for(args.large), interactive=True)
    arcade.run()


if __name__ == "__main__":
    main()
