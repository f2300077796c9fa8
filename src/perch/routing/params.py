"""Path parameter converters for patterns like ``{id:int}``.

Captured values are always handed to handlers as strings; the converter
only decides which segments match.
"""

# Segment regex for each supported converter
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "path": r".+",
}
