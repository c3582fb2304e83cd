import os

from setuptools.command import build_ext as _build_ext

from .config import DOWNLOADS, BuildConfig
from .download import Downloader

# setuptools platform names of windows builds and their target triples
PLATFORM_TARGETS = {
    'win32': 'i686-pc-windows-msvc',
    'win-amd64': 'x86_64-pc-windows-msvc',
}


def target_triple(plat_name):
    return PLATFORM_TARGETS.get(plat_name, plat_name)


class build_ext(_build_ext.build_ext):
    '''build_ext that makes the SDL2 libraries available before compiling.

    On windows platforms the import libraries are added to library_dirs
    and the runtime dlls are copied next to the built extensions.
    '''

    sdl2_downloads = DOWNLOADS

    def run(self):
        self.fetch_sdl2()
        _build_ext.build_ext.run(self)

    def sdl2_config(self):
        # per-file extraction lines only with --verbose, setuptools defaults to 1
        return BuildConfig(target_triple(self.plat_name), os.getcwd(),
            dll_output_root=self.build_lib, downloads=self.sdl2_downloads,
            verbose=self.verbose > 1)

    def fetch_sdl2(self):
        config = self.sdl2_config()
        if config.is_windows:
            self.mkpath(self.build_lib)
        # the link directive is for cargo, library_dirs does its job here
        with open(os.devnull, 'w') as devnull:
            result = Downloader(config, stream=devnull).run()
        for spec, exc in result.failures:
            self.warn('could not fetch %s: %s' % (spec.label, exc))
        if result.lib_path is not None:
            self.library_dirs.append(result.lib_path)
        return result
