import polars as pl
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from hexconv.core.paths import ProjectPaths
from hexconv.core.raster import load_raster, rgb_to_hex, unpack_rgb
from hexconv.core.tiles import (
    ColourTileDefinition,
    TableKind,
    TemplateTileDefinition,
    TileDefinitionTable,
)
from hexconv.shared.errors import ResourceError

class TileTableLoader:
    """
    Reads tile-definition files into TileDefinitionTables.

    Two layouts are understood:
    - '.tsv': header row with 'hex' (colour) or 'path' (template) plus 'code'.
    - anything else: whitespace separated '<key> <code>' pairs, the classic
      'tiles.dat' layout.

    Bad records are skipped with a warning. A table may well end up empty;
    the classifiers then hand out the default code for every tile.
    """

    def load(self, path: Union[str, Path], kind: TableKind) -> TileDefinitionTable:
        path = Path(path)
        if not path.is_file():
            raise ResourceError(f"Tile definition file not found: {path}")

        print(f"[TileLoader] Loading {kind.value} table from {path}")
        records = self._read_tsv(path, kind) if path.suffix.lower() == ".tsv" else self._read_tokens(path)

        if kind is TableKind.COLOUR:
            table = TileDefinitionTable(self._colour_definitions(records, path), kind)
        else:
            table = TileDefinitionTable(self._template_definitions(records, path), kind)

        if len(table) == 0:
            print(f"[TileLoader] Warning: {path.name} holds no usable tiles. Every tile will get the default code.")
        else:
            print(f"[TileLoader] Loaded {len(table)} tiles.")
        return table

    def load_default(self, path: Union[str, Path], kind: TableKind) -> TileDefinitionTable:
        """
        Like load(), but a missing colour table falls back to the bundled one.
        Used when the operator did not name a data file explicitly.
        """
        path = Path(path)
        if not path.is_file() and kind is TableKind.COLOUR:
            bundled = ProjectPaths.bundled_tiles()
            if bundled.is_file():
                print(f"[TileLoader] {path} not found, using bundled table.")
                return self.load(bundled, kind)
        return self.load(path, kind)

    # --- Readers ---

    def _read_tokens(self, path: Path) -> Iterator[Tuple[str, str]]:
        try:
            tokens = path.read_text(encoding="utf-8").split()
        except (OSError, UnicodeDecodeError) as e:
            raise ResourceError(f"Could not read {path}: {e}") from e

        if len(tokens) % 2:
            print(f"[TileLoader] Warning: ignoring dangling key '{tokens[-1]}' in {path.name}")

        return zip(tokens[0::2], tokens[1::2])

    def _read_tsv(self, path: Path, kind: TableKind) -> List[Tuple[Optional[str], Optional[str]]]:
        key_col = "hex" if kind is TableKind.COLOUR else "path"
        try:
            # Everything as strings; 'hex' values such as '000100' must not become ints
            df = pl.read_csv(path, separator="\t", infer_schema_length=0)
        except pl.exceptions.NoDataError:
            # Same as an empty '.dat': no tiles, every tile gets the default code
            return []
        except (OSError, pl.exceptions.PolarsError) as e:
            raise ResourceError(f"Could not read {path}: {e}") from e

        valid_cols = [c for c in df.columns if not c.startswith("_")]
        missing = {key_col, "code"} - set(valid_cols)
        if missing:
            raise ResourceError(f"{path.name} is missing column(s): {', '.join(sorted(missing))}")

        return list(df.select([key_col, "code"]).iter_rows())

    # --- Record conversion ---

    def _colour_definitions(self, records, path: Path) -> List[ColourTileDefinition]:
        definitions = []
        for key, code in records:
            value = parse_hex_colour(key)
            if value is None or not code:
                print(f"[TileLoader] Warning: skipping malformed record '{key} {code}' in {path.name}")
                continue
            definitions.append(ColourTileDefinition(unpack_rgb(value), code.strip()))
        return definitions

    def _template_definitions(self, records, path: Path) -> List[TemplateTileDefinition]:
        definitions = []
        for key, code in records:
            if not key or not code:
                print(f"[TileLoader] Warning: skipping incomplete record in {path.name}")
                continue

            image_path = Path(key.strip())
            if not image_path.is_absolute():
                image_path = path.parent / image_path

            # Templates load eagerly: a broken one aborts before any traversal
            image = load_raster(image_path)
            definitions.append(TemplateTileDefinition(image, code.strip(), image_path))
        return definitions


def parse_hex_colour(token: Optional[str]) -> Optional[int]:
    """'7193bf', '#7193bf' or '0x7193bf' -> int. None when it is not a 24-bit hex value."""
    if token is None:
        return None
    text = token.strip().lstrip('#')
    try:
        value = int(text, 16)
    except ValueError:
        return None
    if not 0 <= value <= 0xFFFFFF:
        return None
    return value


def save_colour_table(table: TileDefinitionTable, path: Union[str, Path]) -> Path:
    """Writes a colour table as '.tsv' (hex/code columns) or whitespace '.dat'."""
    if table.kind is not TableKind.COLOUR:
        raise ValueError("Only colour tables can be written")

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    keys = [rgb_to_hex(d.colour) for d in table]

    print(f"[TileLoader] Saving {len(table)} tiles to {path}...")
    if path.suffix.lower() == ".tsv":
        pl.DataFrame({"hex": keys, "code": list(table.codes)}).write_csv(path, separator="\t")
    else:
        lines = [f"{key} {code}\n" for key, code in zip(keys, table.codes)]
        path.write_text("".join(lines), encoding="utf-8")
    return path
