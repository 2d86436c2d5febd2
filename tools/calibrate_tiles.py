import argparse
import sys

from hexconv.core.tiles import TableKind
from hexconv.engine.calibration import calibrate_table
from hexconv.io.tile_loader import TileTableLoader, save_colour_table
from hexconv.shared.errors import HexConvError

# Builds a colour table from template images, so maps can be converted with
# the fast centre-pixel lookup (`hexconv -b R`) instead of template matching.

def main():
    parser = argparse.ArgumentParser(description="Colour Table Calibrator")
    parser.add_argument("templates", help="Template tile definition file (.dat or .tsv).")
    parser.add_argument("-o", "--output", default="tiles.dat", help="Colour table to write (.dat or .tsv).")
    parser.add_argument("-b", "--radius", type=int, default=None,
                        help="Blur radius. Default: distance from tile centre to the nearest edge.")
    args = parser.parse_args()

    print("--- Calibrating colour table ---")
    try:
        templates = TileTableLoader().load(args.templates, TableKind.TEMPLATE)
        colours = calibrate_table(templates, args.radius)
        save_colour_table(colours, args.output)
    except (HexConvError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    print("--- Done! ---")

if __name__ == "__main__":
    main()
