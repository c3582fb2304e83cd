import sys

from .config import BuildConfig
from .errors import Error
from .extract import extractor_for
from .utils import copy_dlls, fetch, mkdir_p

LINK_SEARCH_DIRECTIVE = 'cargo:rustc-link-search=all=%s\n'


class DownloadResult(object):
    def __init__(self, skipped=False):
        self.skipped = skipped
        # (DownloadSpec, exception) pairs for archives that could not be
        # fetched or extracted
        self.failures = []
        # label -> list of extracted file paths
        self.extracted = {}
        self.lib_path = None
        self.dll_path = None
        self.copied = []

    @property
    def ok(self):
        return not self.failures

    def __repr__(self):
        return '<DownloadResult skipped=%s failures=%d copied=%d>' % (
            self.skipped, len(self.failures), len(self.copied))


class Downloader(object):
    '''Fetches and unpacks the prebuilt SDL2 libraries for a Windows build.

    Every archive in config.downloads is handled independently: a failure
    to fetch or extract one of them is recorded in the result and the
    remaining archives are still processed. Failures that mean the build
    environment itself is broken (the downloads directory cannot be
    created, the dll directory cannot be read) are raised.
    '''

    def __init__(self, config, stream=None, err_stream=None):
        self.config = config
        self.stream = stream
        self.err_stream = err_stream

    @property
    def out(self):
        return self.stream if self.stream is not None else sys.stdout

    @property
    def err(self):
        return self.err_stream if self.err_stream is not None else sys.stderr

    def run(self):
        config = self.config
        if not config.is_windows:
            return DownloadResult(skipped=True)

        result = DownloadResult()
        mkdir_p(config.downloads_path)
        for spec in config.downloads:
            try:
                result.extracted[spec.label] = self.fetch_extract(spec)
            except Error as e:
                self.report_failure(spec, e)
                result.failures.append((spec, e))

        result.lib_path = config.lib_path
        result.dll_path = config.dll_path
        self.emit_link_search(result.lib_path)
        result.copied = copy_dlls(result.dll_path, config.dll_output_root)
        return result

    def fetch_extract(self, spec):
        config = self.config
        archive_path = fetch(spec.url, config.downloads_path,
            timeout=config.timeout, verbose=config.verbose)
        extractor = extractor_for(archive_path, config)
        return extractor.extract(archive_path, config.toolchain_path(spec.toolchain))

    def emit_link_search(self, lib_path):
        self.out.write(LINK_SEARCH_DIRECTIVE % lib_path)
        self.out.flush()

    def report_failure(self, spec, exc):
        self.err.write('warning: %s: %s\n' % (spec.label, exc))
        self.err.flush()


def download(environ=None, stream=None, **kwargs):
    '''Entry point for build scripts.

    Reads the target triple and build root from the environment and
    fetches everything needed for that target.
    '''
    config = BuildConfig.from_environ(environ, **kwargs)
    return Downloader(config, stream=stream).run()
