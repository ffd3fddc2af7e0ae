"""TTP animation file format parser.

TTP files describe a short animation: a canvas size and a list of frames,
each naming a sprite, a sound effect and a textbox resource. Key
characteristics:
- Little-endian, no magic
- Header: kind tag, frame count, canvas width, canvas height (u32 each)
- Names are a u32 byte length followed by Shift-JIS bytes, no terminator
- Each frame ends with a block of u32 values (5 in current files) whose
  meaning is not known; they are carried through unchanged
- Kind 3 files end with one extra flag byte
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Tuple, Union

from ..utils.binary import BinaryReader, BinaryWriter
from ..utils.text import decode, encode

# Files of this kind carry a trailing flag byte
KIND_WITH_TRAILING_FLAG = 3

DEFAULT_VALUE_COUNT = 5

U32_MAX = 0xFFFFFFFF


def read_resource_name(reader: BinaryReader) -> str:
    """Read a length-prefixed Shift-JIS name."""
    length = reader.read_u32()
    return decode(reader.read_bytes(length, what="resource name"))


def write_resource_name(writer: BinaryWriter, name: str) -> None:
    """Write a length-prefixed Shift-JIS name."""
    encoded = encode(name)
    writer.write_u32(len(encoded))
    writer.write(encoded)


@dataclass(frozen=True)
class TTPFrame:
    """A single animation frame."""

    sprite_name: str
    se_name: str
    textbox_name: str
    values: Tuple[int, ...] = field(default=(0,) * DEFAULT_VALUE_COUNT)

    def __post_init__(self):
        object.__setattr__(self, "values", tuple(self.values))
        for value in self.values:
            if not 0 <= value <= U32_MAX:
                raise ValueError(f"Frame value out of u32 range: {value}")

    @classmethod
    def read(cls, reader: BinaryReader, value_count: int = DEFAULT_VALUE_COUNT) -> "TTPFrame":
        sprite_name = read_resource_name(reader)
        se_name = read_resource_name(reader)
        textbox_name = read_resource_name(reader)
        values = tuple(reader.read_u32() for _ in range(value_count))
        return cls(sprite_name, se_name, textbox_name, values)

    def write(self, writer: BinaryWriter) -> None:
        write_resource_name(writer, self.sprite_name)
        write_resource_name(writer, self.se_name)
        write_resource_name(writer, self.textbox_name)
        for value in self.values:
            writer.write_u32(value)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sprite_name": self.sprite_name,
            "se_name": self.se_name,
            "textbox_name": self.textbox_name,
            "values": list(self.values),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TTPFrame":
        return cls(
            sprite_name=data["sprite_name"],
            se_name=data["se_name"],
            textbox_name=data["textbox_name"],
            values=tuple(data["values"]),
        )


@dataclass(frozen=True)
class TTPFile:
    """Parsed TTP animation."""

    kind_tag: int
    canvas_width: int
    canvas_height: int
    frames: Tuple[TTPFrame, ...] = ()
    trailing_flag: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "frames", tuple(self.frames))

        for name in ("kind_tag", "canvas_width", "canvas_height"):
            value = getattr(self, name)
            if not 0 <= value <= U32_MAX:
                raise ValueError(f"{name} out of u32 range: {value}")

        if self.kind_tag == KIND_WITH_TRAILING_FLAG:
            if self.trailing_flag is None:
                raise ValueError(f"Kind {self.kind_tag} TTP files require a trailing flag")
            if not 0 <= self.trailing_flag <= 0xFF:
                raise ValueError(f"Trailing flag out of u8 range: {self.trailing_flag}")
        elif self.trailing_flag is not None:
            raise ValueError(f"Kind {self.kind_tag} TTP files have no trailing flag")

        if len({len(frame.values) for frame in self.frames}) > 1:
            raise ValueError("All frames must carry the same number of values")

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    @property
    def has_trailing_flag(self) -> bool:
        return self.kind_tag == KIND_WITH_TRAILING_FLAG

    @classmethod
    def parse(
        cls, data: Union[bytes, BinaryReader], value_count: int = DEFAULT_VALUE_COUNT
    ) -> "TTPFile":
        """Parse TTP data.

        Args:
            data: Raw file bytes or a reader positioned at the start of the file
            value_count: Number of u32 values closing each frame

        Raises:
            TruncatedError: If the data ends inside a structure
            EncodingError: If a name is not valid Shift-JIS
        """
        reader = data if isinstance(data, BinaryReader) else BinaryReader(data)

        kind_tag = reader.read_u32()
        frame_count = reader.read_u32()
        canvas_width = reader.read_u32()
        canvas_height = reader.read_u32()

        frames = tuple(TTPFrame.read(reader, value_count) for _ in range(frame_count))

        trailing_flag = None
        if kind_tag == KIND_WITH_TRAILING_FLAG:
            trailing_flag = reader.read_u8()

        return cls(
            kind_tag=kind_tag,
            canvas_width=canvas_width,
            canvas_height=canvas_height,
            frames=frames,
            trailing_flag=trailing_flag,
        )

    def serialize(self) -> bytes:
        """Encode back to TTP bytes."""
        writer = BinaryWriter()
        writer.write_u32(self.kind_tag)
        writer.write_u32(self.frame_count)
        writer.write_u32(self.canvas_width)
        writer.write_u32(self.canvas_height)

        for frame in self.frames:
            frame.write(writer)

        if self.has_trailing_flag:
            writer.write_u8(self.trailing_flag)

        return writer.getvalue()

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "kind_tag": self.kind_tag,
            "frame_count": self.frame_count,
            "canvas_width": self.canvas_width,
            "canvas_height": self.canvas_height,
            "frames": [frame.to_dict() for frame in self.frames],
        }
        if self.trailing_flag is not None:
            data["trailing_flag"] = self.trailing_flag
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TTPFile":
        frames = [TTPFrame.from_dict(frame) for frame in data["frames"]]
        if "frame_count" in data and data["frame_count"] != len(frames):
            raise ValueError(
                f"frame_count is {data['frame_count']} but {len(frames)} frames are listed"
            )
        return cls(
            kind_tag=data["kind_tag"],
            canvas_width=data["canvas_width"],
            canvas_height=data["canvas_height"],
            frames=frames,
            trailing_flag=data.get("trailing_flag"),
        )

    def to_json(self, indent: int = 2) -> str:
        """Export to JSON format."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str) -> "TTPFile":
        return cls.from_dict(json.loads(text))

    def save_json(self, path: Path) -> None:
        """Save to JSON file."""
        Path(path).write_text(self.to_json(), encoding="utf-8")

    def save(self, path: Path) -> None:
        """Save to TTP file."""
        Path(path).write_bytes(self.serialize())

    @classmethod
    def from_file(cls, path: Path, value_count: int = DEFAULT_VALUE_COUNT) -> "TTPFile":
        """Load a TTP file from disk."""
        return cls.parse(Path(path).read_bytes(), value_count)

    @classmethod
    def from_bytes(cls, data: bytes, value_count: int = DEFAULT_VALUE_COUNT) -> "TTPFile":
        """Load a TTP file from bytes."""
        return cls.parse(data, value_count)

    def __len__(self) -> int:
        return len(self.frames)

    def __iter__(self) -> Iterator[TTPFrame]:
        return iter(self.frames)

    def __repr__(self) -> str:
        return (
            f"TTPFile(kind={self.kind_tag}, canvas={self.canvas_width}x{self.canvas_height}, "
            f"frames={self.frame_count})"
        )
