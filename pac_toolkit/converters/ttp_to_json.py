"""TTP <-> JSON converter."""

from pathlib import Path
from typing import Optional

from ..formats.ttp import DEFAULT_VALUE_COUNT, TTPFile


def convert_ttp_to_json(
    input_path: Path,
    output_path: Optional[Path] = None,
    value_count: int = DEFAULT_VALUE_COUNT,
) -> Path:
    """Convert a TTP file to editable JSON.

    Args:
        input_path: Path to TTP file
        output_path: Optional output path (defaults to same name with .json extension)
        value_count: Number of u32 values closing each frame

    Returns:
        Path to the created JSON file
    """
    input_path = Path(input_path)

    if output_path is None:
        output_path = input_path.with_suffix(".json")

    ttp = TTPFile.from_file(input_path, value_count)
    ttp.save_json(output_path)

    return Path(output_path)


def convert_json_to_ttp(input_path: Path, output_path: Optional[Path] = None) -> Path:
    """Convert a JSON document produced by ``convert_ttp_to_json`` back to TTP.

    Returns:
        Path to the created TTP file
    """
    input_path = Path(input_path)

    if output_path is None:
        output_path = input_path.with_suffix(".ttp")

    ttp = TTPFile.from_json(input_path.read_text(encoding="utf-8"))
    ttp.save(output_path)

    return Path(output_path)
