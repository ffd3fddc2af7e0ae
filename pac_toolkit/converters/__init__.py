"""Format converters."""

from .ttp_to_json import convert_json_to_ttp, convert_ttp_to_json

__all__ = ["convert_ttp_to_json", "convert_json_to_ttp"]
