"""Loading Tiled map-editor exports.

Turns ``.tmx`` files (and the ``.tsx`` tilesets they reference) into Scene
instances. Any problem with the file is reported as a LoadError naming it.
"""

import base64
import gzip
import logging
import struct
import xml.etree.ElementTree as ET
import zlib
from pathlib import Path
from typing import Optional

from ..errors import LoadError
from .models import (
    GID_MASK,
    ObjectGroup,
    Scene,
    SceneObject,
    TileLayer,
    TilesetRef,
)


class TmxLoader:
    """Loads Tiled maps from XML.

    Supports orthogonal, finite maps with embedded or external tilesets and
    layer data encoded as CSV, base64 (optionally zlib/gzip compressed) or
    plain ``<tile>`` elements.
    """

    SUPPORTED_COMPRESSION = {"", "zlib", "gzip"}

    def __init__(self):
        """Initialize the loader."""
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def load(self, path: Path) -> Scene:
        """Load a scene from a ``.tmx`` file.

        Args:
            path: Path to the map-editor export

        Returns:
            Parsed Scene

        Raises:
            LoadError: If the file is missing, malformed or unsupported
        """
        path = Path(path)
        if not path.is_file():
            raise LoadError(path, "file not found")

        self.logger.debug(f"Loading scene from: {path}")
        root = self._parse_xml(path)
        if root.tag != "map":
            raise LoadError(path, f"root element is <{root.tag}>, expected <map>")

        try:
            scene = self._build_scene(path, root)
        except ValueError as e:
            raise LoadError(path, f"malformed value: {e}") from e

        self.logger.debug(
            f"Loaded scene '{scene.name}' {scene.width}x{scene.height} with "
            f"{len(scene.layers)} tile layer(s), {len(scene.object_groups)} object group(s)"
        )
        return scene

    def _parse_xml(self, path: Path) -> ET.Element:
        try:
            return ET.parse(path).getroot()
        except ET.ParseError as e:
            raise LoadError(path, f"invalid XML: {e}") from e
        except OSError as e:
            raise LoadError(path, str(e)) from e

    def _build_scene(self, path: Path, root: ET.Element) -> Scene:
        orientation = root.get("orientation", "orthogonal")
        if orientation != "orthogonal":
            raise LoadError(path, f"unsupported orientation '{orientation}'")
        if root.get("infinite", "0") == "1":
            raise LoadError(path, "infinite maps are not supported")

        scene = Scene(
            path=path,
            width=int(root.get("width", 0)),
            height=int(root.get("height", 0)),
            tile_width=int(root.get("tilewidth", 0)),
            tile_height=int(root.get("tileheight", 0)),
            orientation=orientation,
            properties=self._read_properties(root),
        )
        if scene.width <= 0 or scene.height <= 0:
            raise LoadError(path, f"invalid map size {scene.width}x{scene.height}")

        for tileset_elem in root.findall("tileset"):
            scene.tilesets.append(self._read_tileset(path, tileset_elem))

        for layer_elem in root.iter("layer"):
            scene.layers.append(self._read_layer(path, layer_elem, scene))

        for group_elem in root.iter("objectgroup"):
            scene.object_groups.append(self._read_object_group(group_elem))

        return scene

    def _read_properties(self, elem: ET.Element) -> dict[str, str]:
        """Read a ``<properties>`` child into a plain dict."""
        properties: dict[str, str] = {}
        props_elem = elem.find("properties")
        if props_elem is None:
            return properties
        for prop in props_elem.findall("property"):
            name = prop.get("name")
            if not name:
                continue
            # Multi-line string properties store their value as text
            properties[name] = prop.get("value", prop.text or "")
        return properties

    def _read_tileset(self, map_path: Path, elem: ET.Element) -> TilesetRef:
        first_gid = int(elem.get("firstgid", 1))
        source = elem.get("source")

        if source:
            tsx_path = (map_path.parent / source).resolve()
            if not tsx_path.is_file():
                raise LoadError(map_path, f"external tileset not found: {source}")
            tileset_elem = self._parse_xml(tsx_path)
            if tileset_elem.tag != "tileset":
                raise LoadError(tsx_path, f"root element is <{tileset_elem.tag}>, expected <tileset>")
            # Image paths inside a .tsx are relative to the .tsx, rebase them on the map
            image_base = tsx_path.parent
        else:
            tileset_elem = elem
            image_base = map_path.parent

        image_source = None
        image_width = None
        image_height = None
        image_elem = tileset_elem.find("image")
        if image_elem is not None and image_elem.get("source"):
            image_path = (image_base / image_elem.get("source", "")).resolve()
            image_source = self._relative_to(image_path, map_path.parent)
            image_width = self._optional_int(image_elem.get("width"))
            image_height = self._optional_int(image_elem.get("height"))

        return TilesetRef(
            first_gid=first_gid,
            name=tileset_elem.get("name", ""),
            tile_width=int(tileset_elem.get("tilewidth", 0)),
            tile_height=int(tileset_elem.get("tileheight", 0)),
            image_source=image_source,
            image_width=image_width,
            image_height=image_height,
            tile_count=self._optional_int(tileset_elem.get("tilecount")),
            columns=self._optional_int(tileset_elem.get("columns")),
        )

    def _read_layer(self, path: Path, elem: ET.Element, scene: Scene) -> TileLayer:
        name = elem.get("name", "")
        width = int(elem.get("width", scene.width))
        height = int(elem.get("height", scene.height))

        data_elem = elem.find("data")
        if data_elem is None:
            raise LoadError(path, f"layer '{name}' has no data element")
        if data_elem.find("chunk") is not None:
            raise LoadError(path, f"layer '{name}' uses chunks, which are not supported")

        encoding = data_elem.get("encoding", "")
        compression = data_elem.get("compression", "")
        if encoding == "csv":
            raw = self._decode_csv(data_elem.text or "")
        elif encoding == "base64":
            raw = self._decode_base64(path, name, data_elem.text or "", compression)
        elif encoding == "":
            raw = [int(tile.get("gid", 0)) for tile in data_elem.findall("tile")]
        else:
            raise LoadError(path, f"layer '{name}' has unsupported encoding '{encoding}'")

        expected = width * height
        if len(raw) != expected:
            raise LoadError(
                path, f"layer '{name}' has {len(raw)} tile(s), expected {expected}"
            )

        return TileLayer(
            name=name,
            width=width,
            height=height,
            gids=[gid & GID_MASK for gid in raw],
        )

    def _decode_csv(self, text: str) -> list[int]:
        return [int(value) for value in text.replace("\n", ",").split(",") if value.strip()]

    def _decode_base64(
        self, path: Path, layer_name: str, text: str, compression: str
    ) -> list[int]:
        if compression not in self.SUPPORTED_COMPRESSION:
            raise LoadError(
                path, f"layer '{layer_name}' has unsupported compression '{compression}'"
            )
        try:
            data = base64.b64decode(text.strip(), validate=False)
            if compression == "zlib":
                data = zlib.decompress(data)
            elif compression == "gzip":
                data = gzip.decompress(data)
        except (ValueError, zlib.error, OSError) as e:
            raise LoadError(path, f"layer '{layer_name}' data could not be decoded: {e}") from e

        if len(data) % 4:
            raise LoadError(path, f"layer '{layer_name}' data is not a whole number of gids")
        return list(struct.unpack(f"<{len(data) // 4}I", data))

    def _read_object_group(self, elem: ET.Element) -> ObjectGroup:
        group = ObjectGroup(name=elem.get("name", ""))
        for obj in elem.findall("object"):
            group.objects.append(
                SceneObject(
                    id=int(obj.get("id", 0)),
                    name=obj.get("name", ""),
                    # Tiled 1.9 renamed 'type' to 'class'
                    type=obj.get("type") or obj.get("class") or "",
                    x=float(obj.get("x", 0)),
                    y=float(obj.get("y", 0)),
                    width=float(obj.get("width", 0)),
                    height=float(obj.get("height", 0)),
                    properties=self._read_properties(obj),
                )
            )
        return group

    @staticmethod
    def _optional_int(value: Optional[str]) -> Optional[int]:
        return int(value) if value not in (None, "") else None

    @staticmethod
    def _relative_to(path: Path, base: Path) -> str:
        try:
            return path.relative_to(base.resolve()).as_posix()
        except ValueError:
            return path.as_posix()
