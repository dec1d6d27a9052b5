"""ytd-extract — yt-dlp backed YouTube audio extractor for media players.

Resolves search queries and YouTube links into normalized tracks and
streams their audio through the yt-dlp command-line tool.
"""

from ytd_extract.plugin.extractor import YouTubeExtractor, YtDlpExtractor
from ytd_extract.version import __version__

__all__: list[str] = ["YouTubeExtractor", "YtDlpExtractor", "__version__"]
