import os
from collections import namedtuple
from urllib.parse import urlsplit

from .errors import ConfigurationError

# which versions of the libraries to use, will be downloaded from internet
SDL2_VERSION = '2.0.6'
SDL2_IMAGE_VERSION = '2.0.1'
SDL2_TTF_VERSION = '2.0.14'

TOOLCHAINS = ('msvc', 'gnu-mingw')
BITNESSES = (32, 64)

# network transfer limits, in seconds
CONNECT_TIMEOUT = 30
DEFAULT_TIMEOUT = 300


class DownloadSpec(namedtuple('DownloadSpec', 'url label toolchain')):
    '''One prebuilt archive to fetch, and the toolchain its binaries target.'''

    __slots__ = ()

    @property
    def archive_basename(self):
        return os.path.basename(urlsplit(self.url).path)


def _devel_downloads(name, url_template, version):
    return [
        DownloadSpec(url_template % dict(version=version, suffix='VC.zip'),
            '%s VC' % name, 'msvc'),
        DownloadSpec(url_template % dict(version=version, suffix='mingw.tar.gz'),
            '%s mingw' % name, 'gnu-mingw'),
    ]


DOWNLOADS = tuple(
    _devel_downloads('sdl2',
        'http://www.libsdl.org/release/SDL2-devel-%(version)s-%(suffix)s',
        SDL2_VERSION) +
    _devel_downloads('sdl2_image',
        'http://www.libsdl.org/projects/SDL_image/release/SDL2_image-devel-%(version)s-%(suffix)s',
        SDL2_IMAGE_VERSION) +
    _devel_downloads('sdl2_ttf',
        'http://www.libsdl.org/projects/SDL_ttf/release/SDL2_ttf-devel-%(version)s-%(suffix)s',
        SDL2_TTF_VERSION)
)

TARGET_ENV = 'TARGET'
ROOT_ENV = 'CARGO_MANIFEST_DIR'


class BuildConfig:
    '''Parameters for fetching dependencies for one build.

    The target triple decides whether anything is fetched at all, and
    which toolchain and bitness the link and runtime paths point at.
    Downloaded archives and extracted trees live under output_root;
    runtime dlls are copied into dll_output_root.
    '''

    def __init__(self, target_triple, output_root, dll_output_root=None,
            downloads=DOWNLOADS, extract_tar_entries=True,
            timeout=DEFAULT_TIMEOUT, verbose=False):
        self.target_triple = target_triple
        self.output_root = output_root
        if dll_output_root is None:
            dll_output_root = output_root
        self.dll_output_root = dll_output_root
        self.downloads = tuple(downloads)
        self.extract_tar_entries = extract_tar_entries
        self.timeout = timeout
        self.verbose = verbose

    @classmethod
    def from_environ(cls, environ=None, **kwargs):
        if environ is None:
            environ = os.environ
        values = []
        for key in (TARGET_ENV, ROOT_ENV):
            value = environ.get(key)
            if not value:
                raise ConfigurationError('Environment variable %s is not set' % key)
            values.append(value)
        return cls(*values, **kwargs)

    @property
    def is_windows(self):
        return 'pc-windows' in self.target_triple

    @property
    def toolchain_tag(self):
        if 'msvc' in self.target_triple:
            return 'msvc'
        return 'gnu-mingw'

    @property
    def bitness(self):
        if 'x86_64' in self.target_triple:
            return 64
        return 32

    @property
    def downloads_path(self):
        return os.path.join(self.output_root, 'target', 'downloads')

    def toolchain_path(self, toolchain):
        return os.path.join(self.output_root, toolchain)

    @property
    def lib_path(self):
        return os.path.join(self.toolchain_path(self.toolchain_tag), 'lib', str(self.bitness))

    @property
    def dll_path(self):
        return os.path.join(self.toolchain_path(self.toolchain_tag), 'dll', str(self.bitness))
