from .record_codec import (
    DELIMITER,
    decode_record,
    encode_record,
    escape_field,
    split_fields,
    unescape_field,
)

__all__ = [
    "DELIMITER",
    "decode_record",
    "encode_record",
    "escape_field",
    "split_fields",
    "unescape_field",
]
