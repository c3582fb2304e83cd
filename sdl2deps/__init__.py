'''Fetches prebuilt SDL2, SDL2_image and SDL2_ttf libraries for Windows builds.'''

from .classify import classify
from .config import DOWNLOADS, BuildConfig, DownloadSpec
from .download import DownloadResult, Downloader, download
from .errors import (ArchiveReadError, ConfigurationError, Error,
    FilesystemError, NetworkError, PathParsingError)
from .extract import TarGzExtractor, ZipExtractor, extractor_for
from .utils import fetch

__version__ = '0.1.0'
