"""
Codec modules для decimath

Текстовый разбор, форматирование и структурное декодирование/кодирование.
"""

# Parsing
from decimath.core.codec.parsing import parse_decimal

# Formatting
from decimath.core.codec.formatting import (
    PLAIN,
    FormatOptions,
    format_decimal,
    format_units,
    format_with_options,
)

# Wire
from decimath.core.codec.wire import (
    DECODE_ORDER,
    DecodeAttempt,
    DecodeStrategy,
    decimal_to_units_scale,
    decode_json,
    decode_json_array,
    decode_units_scale,
    encode_value,
    load_json,
    run_attempts,
    to_json_literal,
)

__all__ = [
    # Parsing
    "parse_decimal",
    # Formatting
    "FormatOptions",
    "PLAIN",
    "format_units",
    "format_decimal",
    "format_with_options",
    # Wire
    "DecodeStrategy",
    "DecodeAttempt",
    "DECODE_ORDER",
    "decimal_to_units_scale",
    "run_attempts",
    "decode_units_scale",
    "load_json",
    "decode_json",
    "decode_json_array",
    "encode_value",
    "to_json_literal",
]
