import contextlib, os, os.path, sys, tarfile, zipfile, zlib

from .classify import classify
from .errors import ArchiveReadError, FilesystemError
from .utils import mkdir_p

# errors the archive readers raise for malformed or truncated containers;
# zipfile raises RuntimeError for encrypted members and NotImplementedError
# for compression methods it does not support
READ_ERRORS = (zipfile.BadZipFile, tarfile.TarError, zlib.error, EOFError,
    RuntimeError, NotImplementedError)

COPY_BUFSIZE = 64 * 1024


@contextlib.contextmanager
def archive_errors(archive_path):
    try:
        yield
    except READ_ERRORS as e:
        raise ArchiveReadError('Could not read %s: %s' % (archive_path, e)) from e


class Extractor(object):
    '''Extracts the wanted binaries of one archive into a destination root.

    Every entry is passed through classify(); entries it maps to a
    destination are written there, all others are ignored. Destination
    files are created exclusively: extracting over the result of an
    earlier extraction is an error, not an overwrite.
    '''

    def __init__(self, verbose=False):
        self.verbose = verbose

    def extract(self, archive_path, destination_root):
        raise NotImplementedError

    def open_archive(self, archive_path):
        raise NotImplementedError

    @contextlib.contextmanager
    def opened(self, archive_path):
        with archive_errors(archive_path):
            try:
                archive = self.open_archive(archive_path)
            except OSError as e:
                raise ArchiveReadError('Could not open %s: %s' % (archive_path, e)) from e
        with archive:
            yield archive

    def read_chunk(self, src, target_path, archive_path):
        with archive_errors(archive_path):
            try:
                return src.read(COPY_BUFSIZE)
            except OSError as e:
                raise ArchiveReadError('Could not read %s from %s: %s' % (
                    os.path.basename(target_path), archive_path, e)) from e

    def write_entry(self, src, target_path, archive_path):
        mkdir_p(os.path.dirname(target_path))
        try:
            f = open(target_path, 'xb')
        except OSError as e:
            raise FilesystemError('Could not create %s: %s' % (target_path, e)) from e
        try:
            with f:
                while True:
                    chunk = self.read_chunk(src, target_path, archive_path)
                    if not chunk:
                        break
                    try:
                        f.write(chunk)
                    except OSError as e:
                        raise FilesystemError('Could not write %s: %s' % (target_path, e)) from e
        except (ArchiveReadError, FilesystemError):
            os.remove(target_path)
            raise
        if self.verbose:
            sys.stdout.write('Extracted %s\n' % target_path)
            sys.stdout.flush()


class ZipExtractor(Extractor):
    def open_archive(self, archive_path):
        return zipfile.ZipFile(archive_path)

    def extract(self, archive_path, destination_root):
        written = []
        with self.opened(archive_path) as zip:
            # classify everything before reading any member data
            wanted = []
            for info in zip.infolist():
                if info.is_dir():
                    continue
                target_path = classify(info.filename, destination_root)
                if target_path is not None:
                    wanted.append((info, target_path))

            for info, target_path in wanted:
                with archive_errors(archive_path):
                    src = zip.open(info)
                with src:
                    self.write_entry(src, target_path, archive_path)
                written.append(target_path)
        return written


class TarGzExtractor(Extractor):
    '''Extractor for gzip compressed tarballs.

    The tarball is read as a stream, so each member is classified and
    written before the next one is read. With copy_entries false,
    members are only classified and nothing is written.
    '''

    def __init__(self, copy_entries=True, **kwargs):
        super(TarGzExtractor, self).__init__(**kwargs)
        self.copy_entries = copy_entries

    def open_archive(self, archive_path):
        return tarfile.open(archive_path, 'r|gz')

    def extract(self, archive_path, destination_root):
        written = []
        discarded = 0
        with self.opened(archive_path) as tar:
            with archive_errors(archive_path):
                for member in tar:
                    if not member.isfile():
                        continue
                    target_path = classify(member.name, destination_root)
                    if target_path is None:
                        continue
                    if not self.copy_entries:
                        discarded += 1
                        continue
                    src = tar.extractfile(member)
                    with src:
                        self.write_entry(src, target_path, archive_path)
                    written.append(target_path)
        if discarded and self.verbose:
            sys.stdout.write('Not extracting %d entries from %s\n' % (discarded, archive_path))
            sys.stdout.flush()
        return written


ZIP_SUFFIXES = ('.zip',)
TAR_GZ_SUFFIXES = ('.tar.gz', '.tgz', '.gz')


def extractor_for(archive_path, config=None):
    '''Returns an extractor instance suitable for archive_path's format.'''
    verbose = config is not None and config.verbose
    name = os.path.basename(archive_path).lower()
    if name.endswith(ZIP_SUFFIXES):
        return ZipExtractor(verbose=verbose)
    if name.endswith(TAR_GZ_SUFFIXES):
        copy_entries = config is None or config.extract_tar_entries
        return TarGzExtractor(copy_entries=copy_entries, verbose=verbose)
    raise ArchiveReadError('Unsupported archive format: %s' % archive_path)
