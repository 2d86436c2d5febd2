import argparse
import sys
from typing import List, Optional

from hexconv.engine.converter import run_conversion
from hexconv.shared.config import MODES, ConverterConfig
from hexconv.shared.errors import HexConvError

EPILOG = """\
Examples:
  hexconv map.png -t 16 17 -o output.map
      Convert map.png to output.map with a tile pitch of 16x17
  hexconv map.png -b 8 -d tiles.dat
      Blur map.png with radius 8 before looking up centre colours
  hexconv map.png --mode template -d templates.tsv --threshold 5
      Match whole tiles against the template images listed in templates.tsv
"""


def _int_arg(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got '{text}'")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hexconv",
        description="Convert a graphic hex based map into a Battle for Wesnoth compatible map.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", nargs="?", help="Source map image.")
    parser.add_argument("-o", dest="output_path", metavar="OUTPUT", help='Output file. Default "map".')
    parser.add_argument("-d", dest="data_path", metavar="DATA", help='Tile definition file. Default "tiles.dat".')
    parser.add_argument("-t", dest="pitch", nargs=2, type=_int_arg, metavar=("W", "H"),
                        help="Tile pitch (distance between tile centres). Default 32 34.")
    parser.add_argument("-i", dest="offset", nargs=2, type=_int_arg, metavar=("X", "Y"),
                        help="Centre of the top-left tile. Default 26 23.")
    parser.add_argument("-m", dest="major_tile_start", action="store_const", const=True,
                        help="Top-left tile is a major (upper) tile, not a minor one.")
    parser.add_argument("-b", dest="blur_radius", type=_int_arg, metavar="R",
                        help="Blur radius applied before colour lookup. Default 0 (pre-filtered image).")
    parser.add_argument("-s", "--tile-size", dest="tile_size", nargs=2, type=_int_arg, metavar=("W", "H"),
                        help="Size of the region compared against templates. Default: the tile pitch.")
    parser.add_argument("--mode", choices=MODES, help="Classification strategy. Default colour.")
    parser.add_argument("--threshold", type=_int_arg, metavar="T",
                        help="Per-channel colour distance for template matching. Default 3.")
    parser.add_argument("--config", metavar="PATH", help="TOML settings file. Default ./hexconv.toml if present.")
    parser.add_argument("--dump-dir", dest="dump_dir", metavar="DIR",
                        help="Save the pre-processed source image here for inspection.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = ConverterConfig.load(args.config)
        config.apply_overrides(
            input_path=args.input,
            output_path=args.output_path,
            data_path=args.data_path,
            dump_dir=args.dump_dir,
            pitch=args.pitch,
            offset=args.offset,
            tile_size=args.tile_size,
            major_tile_start=args.major_tile_start,
            mode=args.mode,
            blur_radius=args.blur_radius,
            threshold=args.threshold,
        )

        if config.input_path is None:
            parser.print_help(sys.stderr)
            return 1

        run_conversion(config)
    except HexConvError as e:
        print(f"[hexconv] Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
