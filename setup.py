#! /usr/bin/env python
# -*- coding: utf-8 -*-
# vi:ts=4:et

"""Setup script for the sdl2deps distribution."""

PACKAGE = "sdl2deps"
VERSION = "0.1.0"

from setuptools import setup

setup_args = dict(
    name=PACKAGE,
    version=VERSION,
    description='sdl2deps -- Fetch prebuilt SDL2 libraries for Windows builds',
    long_description='''\
sdl2deps -- Fetch prebuilt SDL2 libraries for Windows builds
============================================================

sdl2deps downloads the official SDL2, SDL2_image and SDL2_ttf development
archives for Visual C++ and MinGW, unpacks their import libraries and dlls
into a fixed layout, and copies the runtime dlls of the toolchain and
bitness being built into the build output directory.

Downloads are made with PycURL_ and are cached: an archive that is
already present is not fetched again.

Layout produced under the build root::

    target/downloads/<archive>
    msvc/lib/{32,64}/*.lib
    msvc/dll/{32,64}/*.dll
    gnu-mingw/lib/{32,64}/*.lib
    gnu-mingw/dll/{32,64}/*.dll

Usage from a build script::

    import sdl2deps
    result = sdl2deps.download()

or, for setuptools extensions, use ``sdl2deps.build_ext.build_ext`` as the
``build_ext`` command class.

.. _PycURL: http://pycurl.io/
''',
    keywords=['sdl2', 'windows', 'build', 'download', 'msvc', 'mingw'],
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Operating System :: Microsoft :: Windows',
        'Operating System :: POSIX',
        'Programming Language :: Python :: 3',
        'Topic :: Software Development :: Build Tools',
    ],
    packages=[PACKAGE],
    install_requires=[
        'pycurl',
        'setuptools',
    ],
    extras_require={
        'test': [
            'pytest',
            'flaky',
            'flask',
            'bottle',
        ],
    },
    python_requires='>=3.8',
)

if __name__ == "__main__":
    setup(**setup_args)
