"""Infrastructure layer — external system integration.

This layer wraps all interaction with yt-dlp (Python API and
executable), the operating system and temporary files.  Every raw
third-party exception must be caught here and re-raised as a
:class:`~ytd_extract.exceptions.YtdExtractError` subclass.

Rules
-----
* No imports from ``cli`` or ``plugin``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from ytd_extract.infra.audio_stream import TempAudioStream
from ytd_extract.infra.stream_provisioner import YtDlpStreamProvisioner
from ytd_extract.infra.ytdlp_binary import BinaryStatus, detect_binary, detect_ytdlp, require_ytdlp
from ytd_extract.infra.ytdlp_catalog import YtDlpCatalogProvider

__all__: list[str] = [
    "BinaryStatus",
    "TempAudioStream",
    "YtDlpCatalogProvider",
    "YtDlpStreamProvisioner",
    "detect_binary",
    "detect_ytdlp",
    "require_ytdlp",
]
