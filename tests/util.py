# -*- coding: utf-8 -*-
# vi:ts=4:et

import contextlib
import io
import os
import os.path
import shutil
import struct
import tarfile
import tempfile
import unittest
import zipfile

from sdl2deps.config import DownloadSpec

# Layout of the VC development zips: binaries under lib/<arch>/.
SDL2_VC_ENTRIES = {
    'SDL2-2.0.6/': None,
    'SDL2-2.0.6/README-SDL.txt': b'readme',
    'SDL2-2.0.6/include/SDL.h': b'/* header */',
    'SDL2-2.0.6/lib/x64/SDL2.dll': b'sdl2 dll 64',
    'SDL2-2.0.6/lib/x64/SDL2.lib': b'sdl2 lib 64',
    'SDL2-2.0.6/lib/x64/SDL2main.lib': b'sdl2main lib 64',
    'SDL2-2.0.6/lib/x86/SDL2.dll': b'sdl2 dll 32',
    'SDL2-2.0.6/lib/x86/SDL2.lib': b'sdl2 lib 32',
    'SDL2-2.0.6/lib/x86/SDL2main.lib': b'sdl2main lib 32',
}

SDL2_IMAGE_VC_ENTRIES = {
    'SDL2_image-2.0.1/lib/x64/SDL2_image.dll': b'image dll 64',
    'SDL2_image-2.0.1/lib/x64/SDL2_image.lib': b'image lib 64',
    'SDL2_image-2.0.1/lib/x64/libpng16-16.dll': b'png dll 64',
    'SDL2_image-2.0.1/lib/x64/LICENSE.png.txt': b'license',
    'SDL2_image-2.0.1/lib/x86/SDL2_image.dll': b'image dll 32',
    'SDL2_image-2.0.1/lib/x86/SDL2_image.lib': b'image lib 32',
}

# Layout of the mingw development tarballs: per-triple directories,
# dlls under bin/ and import libraries named lib*.dll.a.
SDL2_MINGW_ENTRIES = {
    'SDL2-2.0.6/x86_64-w64-mingw32/bin/SDL2.dll': b'mingw dll 64',
    'SDL2-2.0.6/x86_64-w64-mingw32/lib/libSDL2.dll.a': b'mingw implib 64',
    'SDL2-2.0.6/i686-w64-mingw32/bin/SDL2.dll': b'mingw dll 32',
    'SDL2-2.0.6/i686-w64-mingw32/lib/libSDL2.dll.a': b'mingw implib 32',
}

# A tarball that does use the VC layout, to exercise tar extraction.
SDL2_TAR_VC_LAYOUT_ENTRIES = {
    'SDL2-2.0.6/lib/x64/SDL2.dll': b'tar dll 64',
    'SDL2-2.0.6/lib/x86/SDL2.lib': b'tar lib 32',
    'SDL2-2.0.6/docs/README.md': b'docs',
}

def make_zip(path, entries, compression=zipfile.ZIP_DEFLATED):
    '''Writes a zip archive; entries map names to bytes, None for directories.'''
    with zipfile.ZipFile(path, 'w', compression) as zip:
        for name, data in entries.items():
            if data is None:
                zip.writestr(zipfile.ZipInfo(name), b'')
            else:
                zip.writestr(name, data)
    return path

def patch_zip_headers(path, flag_bits=0, compress_type=None):
    '''Rewrites the general purpose flags and compression method of every
    local and central directory header in a zip archive.

    Used to produce archives zipfile can list but not read, such as
    encrypted members or deflate64 compressed ones.
    '''
    data = bytearray(read_file(path))
    # signature, offset of the flags, offset of the compression method
    for sig, flag_off, method_off in ((b'PK\x03\x04', 6, 8), (b'PK\x01\x02', 8, 10)):
        pos = data.find(sig)
        while pos != -1:
            flags = struct.unpack_from('<H', data, pos + flag_off)[0] | flag_bits
            struct.pack_into('<H', data, pos + flag_off, flags)
            if compress_type is not None:
                struct.pack_into('<H', data, pos + method_off, compress_type)
            pos = data.find(sig, pos + 4)
    write_file(path, bytes(data))
    return path

def make_tar_gz(path, entries):
    with tarfile.open(path, 'w:gz') as tar:
        for name, data in entries.items():
            info = tarfile.TarInfo(name)
            if data is None:
                info.type = tarfile.DIRTYPE
                tar.addfile(info)
            else:
                info.size = len(data)
                tar.addfile(info, io.BytesIO(data))
    return path

def zip_bytes(entries):
    buf = io.BytesIO()
    make_zip(buf, entries)
    return buf.getvalue()

def tar_gz_bytes(entries):
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode='w:gz') as tar:
        for name, data in entries.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            tar.addfile(info, io.BytesIO(data))
    return buf.getvalue()

def read_file(path):
    with open(path, 'rb') as f:
        return f.read()

def write_file(path, data):
    with open(path, 'wb') as f:
        f.write(data)

def list_files(root):
    '''Returns all files under root as sorted forward-slash relative paths.'''
    found = []
    for dirpath, dirnames, filenames in os.walk(root):
        for filename in filenames:
            rel = os.path.relpath(os.path.join(dirpath, filename), root)
            found.append(rel.replace(os.sep, '/'))
    return sorted(found)

def unreachable_specs():
    '''Download specs that would fail if anything tried to fetch them.'''
    base = 'http://127.0.0.1:1/'
    return [
        DownloadSpec(base + 'SDL2-devel-2.0.6-VC.zip', 'sdl2 VC', 'msvc'),
        DownloadSpec(base + 'SDL2-devel-2.0.6-mingw.tar.gz', 'sdl2 mingw', 'gnu-mingw'),
        DownloadSpec(base + 'SDL2_image-devel-2.0.1-VC.zip', 'sdl2_image VC', 'msvc'),
    ]

def seed_downloads(downloads_path):
    '''Places fixture archives where fetch() will find them already present.'''
    os.makedirs(downloads_path, exist_ok=True)
    make_zip(os.path.join(downloads_path, 'SDL2-devel-2.0.6-VC.zip'), SDL2_VC_ENTRIES)
    make_tar_gz(os.path.join(downloads_path, 'SDL2-devel-2.0.6-mingw.tar.gz'), SDL2_MINGW_ENTRIES)
    make_zip(os.path.join(downloads_path, 'SDL2_image-devel-2.0.1-VC.zip'), SDL2_IMAGE_VC_ENTRIES)

@contextlib.contextmanager
def in_dir(dir):
    old_cwd = os.getcwd()
    try:
        os.chdir(dir)
        yield
    finally:
        os.chdir(old_cwd)

class TempDirTestCase(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmp)

    def path(self, *parts):
        return os.path.join(self.tmp, *parts)
