from .access import END, MapAccess, SeqAccess
from .decoder import (
    DEFAULT_MAX_DEPTH,
    INT64_MAX,
    INT64_MIN,
    Decoder,
    decode_from_bytes,
    decode_from_text,
)
from .encoder import Encoder, MapSerializer, SeqSerializer, encode_to_bytes, encode_to_text
from .errors import (
    BencodeError,
    BencodeSyntaxError,
    BufferTooShort,
    Custom,
    ExpectedColon,
    ExpectedI,
    ExpectedInteger,
    ExpectedList,
    ExpectedListEnd,
    ExpectedMap,
    ExpectedMapEnd,
    IntegerOutOfRange,
    InvalidText,
    LeadingZero,
    NestingTooDeep,
    TrailingCharacters,
    UnexpectedCharacter,
    UnexpectedEndOfInput,
    UnsupportedKind,
)
from .read import SliceReader, TextReader
from .shapes import target_for
from .visitor import Deserialize, Serialize, Visitor

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "END",
    "INT64_MAX",
    "INT64_MIN",
    "BencodeError",
    "BencodeSyntaxError",
    "BufferTooShort",
    "Custom",
    "Decoder",
    "Deserialize",
    "Encoder",
    "ExpectedColon",
    "ExpectedI",
    "ExpectedInteger",
    "ExpectedList",
    "ExpectedListEnd",
    "ExpectedMap",
    "ExpectedMapEnd",
    "IntegerOutOfRange",
    "InvalidText",
    "LeadingZero",
    "MapAccess",
    "MapSerializer",
    "NestingTooDeep",
    "SeqAccess",
    "SeqSerializer",
    "Serialize",
    "SliceReader",
    "TextReader",
    "TrailingCharacters",
    "UnexpectedCharacter",
    "UnexpectedEndOfInput",
    "UnsupportedKind",
    "Visitor",
    "decode_from_bytes",
    "decode_from_text",
    "encode_to_bytes",
    "encode_to_text",
    "target_for",
]
