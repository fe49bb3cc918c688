"""Map files and result serialisation."""

from .map_io import format_map, load_map, parse_map, save_map
from .serializer import path_to_dict, result_to_dict, save_result

__all__ = [
    "format_map",
    "load_map",
    "parse_map",
    "path_to_dict",
    "result_to_dict",
    "save_map",
    "save_result",
]
