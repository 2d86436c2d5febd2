from typing import List, Optional

from hexconv.core.tiles import validate_code

MAP_HEADER = "border_size=1\nusage=map\n\n"
CODE_SEPARATOR = ", "


class MapSerializer:
    """
    Collects terrain codes in traversal order and renders the map file.
    A new line starts whenever the row index changes.
    """

    def __init__(self):
        self._rows: List[List[str]] = []
        self._current_row: Optional[int] = None

    def add(self, row: int, code: str):
        validate_code(code)
        if row != self._current_row:
            self._rows.append([])
            self._current_row = row
        self._rows[-1].append(code)

    @property
    def row_count(self) -> int:
        return len(self._rows)

    def render(self) -> str:
        body = "".join(CODE_SEPARATOR.join(codes) + "\n" for codes in self._rows)
        return MAP_HEADER + body
