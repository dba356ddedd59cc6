"""S147 territory map: draw zones on a map image and paint them with alliance colors."""

__version__ = "0.1.0"
