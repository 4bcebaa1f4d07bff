"""pyairq - Authenticated decoding of air-quality sensor telemetry frames."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyairq")
except PackageNotFoundError:
    __version__ = "0+local"
from pyairq.config import AirqConfig
from pyairq.decoder import AlternateSchemeDecoder, DefaultSchemeDecoder, FrameDecoder
from pyairq.dispatch import EncodingScheme, decode_frame, decoder_for, resolve_scheme
from pyairq.exceptions import (
    AirqConfigError,
    AirqError,
    AirqFrameError,
    DeviceRejectedError,
    KeyDecodeError,
    MalformedFrameError,
    SignatureInvalidError,
    UnsupportedSchemeError,
)
from pyairq.ingestion import DeviceRegistry, LedgerWriter, ingest_message, rejection_message
from pyairq.models import (
    DecodedRecord,
    DecodeFailure,
    DecodeResult,
    DecodeSuccess,
    DeviceIdentity,
    FailureReason,
)

__all__ = [
    "__version__",
    "AirqConfig",
    "AirqConfigError",
    "AirqError",
    "AirqFrameError",
    "AlternateSchemeDecoder",
    "DecodeFailure",
    "DecodeResult",
    "DecodeSuccess",
    "DecodedRecord",
    "DefaultSchemeDecoder",
    "DeviceIdentity",
    "DeviceRegistry",
    "DeviceRejectedError",
    "EncodingScheme",
    "FailureReason",
    "FrameDecoder",
    "KeyDecodeError",
    "LedgerWriter",
    "MalformedFrameError",
    "SignatureInvalidError",
    "UnsupportedSchemeError",
    "decode_frame",
    "decoder_for",
    "ingest_message",
    "rejection_message",
    "resolve_scheme",
]
