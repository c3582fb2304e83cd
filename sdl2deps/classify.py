import os
from pathlib import PurePosixPath

# Patterns are matched from the right, one path component per '*'.
# The dll pattern must be checked first: both end in lib/*/ but only
# one of them names an import library.
KIND_PATTERNS = (
    ('dll', '*/lib/*/*.dll'),
    ('lib', '*/lib/*/*.lib'),
)

BITNESS_DIRS = (
    ('x64', '64'),
    ('x86', '32'),
)


def artifact_kind(path):
    for kind, pattern in KIND_PATTERNS:
        if path.match(pattern):
            return kind
    return None


def bitness_dir(path):
    # only directory components count, never the file name itself
    dirs = path.parts[:-1]
    for segment, bitness in BITNESS_DIRS:
        if segment in dirs:
            return bitness
    return None


def classify(entry_path, destination_root):
    '''Map an archive entry path to where it should be extracted.

    Returns destination_root/{dll,lib}/{32,64}/<basename> for import
    libraries and dlls found under a lib/<arch>/ directory, and None for
    everything else. Entries with no x64 or x86 directory in their path
    are dropped, not given a default bitness.
    '''
    path = PurePosixPath(entry_path.replace('\\', '/'))
    kind = artifact_kind(path)
    if kind is None:
        return None
    bitness = bitness_dir(path)
    if bitness is None:
        return None
    return os.path.join(destination_root, kind, bitness, path.name)
