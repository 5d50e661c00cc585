import argparse
import logging
import os
import sys

import pygame
from PIL import Image

from .app import PuzzleApp


def main(argv=None):
    parser = argparse.ArgumentParser(description="Play a jigsaw puzzle cut from an image")
    parser.add_argument("image", help="Path to the input image file")
    parser.add_argument("-r", "--rows", type=int, default=4,
                        help="Number of rows in the puzzle (default: 4)")
    parser.add_argument("-c", "--cols", type=int, default=4,
                        help="Number of columns in the puzzle (default: 4)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for the edge pattern and the scatter")
    parser.add_argument("--log-level", default="INFO",
                        help="Logging level (default: INFO)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if not os.path.exists(args.image):
        print(f"Error: Input file '{args.image}' not found!")
        sys.exit(1)
    try:
        with Image.open(args.image) as img:
            img.verify()
    except Exception as e:
        print(f"Error: Unable to open '{args.image}' as an image: {e}")
        sys.exit(1)
    if args.rows <= 0 or args.cols <= 0:
        print("Error: rows and cols must be positive")
        sys.exit(1)

    pygame.init()
    try:
        PuzzleApp(args.image, args.rows, args.cols, seed=args.seed).run()
    finally:
        pygame.quit()


if __name__ == "__main__":
    main()
