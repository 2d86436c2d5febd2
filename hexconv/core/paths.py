from pathlib import Path

class ProjectPaths:
    """
    Resolves files shipped inside the hexconv package.
    Paths are anchored on this module, so they hold for editable and regular installs alike.
    """

    @classmethod
    def package_root(cls) -> Path:
        """Returns the absolute path to the installed 'hexconv' directory."""
        # hexconv/core/paths.py -> hexconv/
        return Path(__file__).resolve().parents[1]

    @classmethod
    def data(cls) -> Path:
        """Returns path to: hexconv/data"""
        return cls.package_root() / "data"

    @classmethod
    def bundled_tiles(cls) -> Path:
        """Default colour table shipped with the converter."""
        return cls.data() / "tiles.dat"
