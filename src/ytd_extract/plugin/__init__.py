"""Plugin layer — the object the host media player installs.

Wires the core services to the infrastructure adapters.  May import
from ``core``, ``infra`` and ``utils``; nothing imports from ``plugin``
except ``cli``.
"""

from ytd_extract.plugin.extractor import PROTOCOLS, YouTubeExtractor, YtDlpExtractor

__all__: list[str] = ["PROTOCOLS", "YouTubeExtractor", "YtDlpExtractor"]
