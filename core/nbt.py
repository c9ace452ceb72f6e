"""core/nbt.py — NBT storage for room tile maps.

Rooms are saved as a small NBT compound via `nbtlib`:

  - name:     TAG_String
  - width:    TAG_Int
  - height:   TAG_Int
  - outdoor:  TAG_Byte (0/1)
  - tiles:    TAG_Byte_Array (row-major, row 0 = bottom row)
  - spawns:   TAG_List of TAG_Compound { name:TAG_String, x:TAG_Int, y:TAG_Int }
              (optional named tiles, e.g. where a clue may be hidden)
"""
from __future__ import annotations
from pathlib import Path

import nbtlib
from nbtlib import tag


def save_room_nbt(name: str, tiles: list[list[int]], *, outdoor: bool = False,
                  spawns: dict[str, tuple[int, int]] | None = None,
                  dir_path: Path | str = Path("rooms")) -> Path:
    """Write *tiles* (``tiles[y][x]``) to ``<dir_path>/<name>.nbt``."""
    dir_path = Path(dir_path)
    dir_path.mkdir(parents=True, exist_ok=True)

    h = len(tiles)
    w = len(tiles[0]) if h else 0
    flat = bytearray()
    for row in tiles:
        for v in row:
            flat.append(int(v) & 0xFF)

    root = nbtlib.Compound()
    root["name"] = tag.String(name)
    root["width"] = tag.Int(w)
    root["height"] = tag.Int(h)
    root["outdoor"] = tag.Byte(1 if outdoor else 0)
    root["tiles"] = tag.ByteArray(flat)
    if spawns:
        spawn_list = nbtlib.List[nbtlib.Compound]()
        for spawn_name, (x, y) in spawns.items():
            comp = nbtlib.Compound()
            comp["name"] = tag.String(spawn_name)
            comp["x"] = tag.Int(int(x))
            comp["y"] = tag.Int(int(y))
            spawn_list.append(comp)
        root["spawns"] = spawn_list

    out_path = dir_path / f"{_file_stem(name)}.nbt"
    if out_path.exists():
        out_path.unlink()
    nbtlib.File(root).save(out_path)
    return out_path


def load_room_nbt(path: Path | str) -> dict:
    """Load a room NBT file.

    Returns a dict with keys ``name``, ``tiles``, ``outdoor`` and
    ``spawns`` (``{name: (x, y)}``).  Raises ``ValueError`` when the
    tile array does not match the stored dimensions.
    """
    path = Path(path)
    root = nbtlib.load(path)
    name = str(root.get("name") or path.stem)
    w = int(root.get("width") or 0)
    h = int(root.get("height") or 0)
    raw = bytes(int(b) & 0xFF for b in root.get("tiles", []))
    if len(raw) != w * h:
        raise ValueError(f"{path}: expected {w}x{h} tiles, found {len(raw)}")
    tiles = [[raw[r * w + c] for c in range(w)] for r in range(h)]

    spawns: dict[str, tuple[int, int]] = {}
    for comp in root.get("spawns", []):
        spawns[str(comp["name"])] = (int(comp["x"]), int(comp["y"]))

    return {
        "name": name,
        "tiles": tiles,
        "outdoor": bool(int(root.get("outdoor") or 0)),
        "spawns": spawns,
    }


def _file_stem(name: str) -> str:
    return "".join(ch if ch.isalnum() else "_" for ch in name).strip("_").lower()
