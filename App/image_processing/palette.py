"""Palette resource loading.

AIDEV-NOTE: A palette file is a JSON object with two parallel lists:
"rgb" (float triples in 0-1) and "name" (strings). Sources may be local
paths or http(s) URLs; bundled palettes live in the palettes/ directory
next to this module.
"""

import json
import numbers
from pathlib import Path

import requests

from models import DEFAULT_PALETTE, Palette, ResourceLoadError

PALETTE_DIR = Path(__file__).parent / "palettes"

# Seconds to wait for a remote palette
FETCH_TIMEOUT = 30


def parse_palette(data: object) -> Palette:
    """Validate decoded palette JSON and build a Palette.

    Raises:
        ResourceLoadError: If the structure or values are invalid
    """
    if not isinstance(data, dict):
        raise ResourceLoadError("Palette JSON must be an object with 'rgb' and 'name'")

    rgb = data.get("rgb")
    names = data.get("name")
    if not isinstance(rgb, list) or not isinstance(names, list):
        raise ResourceLoadError("Palette JSON needs 'rgb' and 'name' lists")
    if len(rgb) != len(names):
        raise ResourceLoadError(
            f"Palette 'rgb' has {len(rgb)} entries but 'name' has {len(names)}"
        )
    if not rgb:
        raise ResourceLoadError("Palette is empty")

    colors = []
    for i, triple in enumerate(rgb):
        if (
            not isinstance(triple, (list, tuple))
            or len(triple) != 3
            or not all(
                isinstance(c, numbers.Real) and not isinstance(c, bool) for c in triple
            )
        ):
            raise ResourceLoadError(f"Palette entry {i} is not an RGB triple: {triple!r}")
        if not all(0.0 <= c <= 1.0 for c in triple):
            raise ResourceLoadError(f"Palette entry {i} has channels outside 0-1: {triple!r}")
        colors.append((float(triple[0]), float(triple[1]), float(triple[2])))

    for i, name in enumerate(names):
        if not isinstance(name, str):
            raise ResourceLoadError(f"Palette name {i} is not a string: {name!r}")

    return Palette(colors=tuple(colors), names=tuple(names))


def is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def fetch_palette_text(source: str) -> str:
    """Read raw palette JSON text from a URL or file path."""
    if is_url(source):
        try:
            response = requests.get(
                source, timeout=FETCH_TIMEOUT, headers={"Cache-Control": "no-store"}
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise ResourceLoadError(f"Could not fetch palette {source}: {e}") from e
        return response.text

    try:
        return Path(source).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ResourceLoadError(f"Could not read palette {source}: {e}") from e


def load_palette(source: "str | Path | None" = None) -> Palette:
    """Fetch and parse a palette.

    Args:
        source: File path, http(s) URL, bundled palette name, or None for
            the default bundled palette

    Returns:
        Parsed Palette

    Raises:
        ResourceLoadError: On fetch, decode or validation failure
    """
    source = resolve_palette_source(source)
    text = fetch_palette_text(source)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ResourceLoadError(f"Palette {source} is not valid JSON: {e}") from e
    return parse_palette(data)


def resolve_palette_source(source: "str | Path | None") -> str:
    """Map empty values and bundled palette names to concrete paths."""
    if not source:
        source = DEFAULT_PALETTE
    source = str(source)
    if is_url(source):
        return source
    bundled = PALETTE_DIR / f"{source}.json"
    if "/" not in source and "\\" not in source and bundled.exists():
        return str(bundled)
    return source


def bundled_palettes() -> "list[str]":
    """Names of the palettes shipped with the application."""
    names = sorted(p.stem for p in PALETTE_DIR.glob("*.json"))
    # Default first
    if DEFAULT_PALETTE in names:
        names.remove(DEFAULT_PALETTE)
        names.insert(0, DEFAULT_PALETTE)
    return names
