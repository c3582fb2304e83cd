import os, os.path, shutil, sys
from urllib.parse import urlsplit

import pycurl

from .config import CONNECT_TIMEOUT, DEFAULT_TIMEOUT
from .errors import FilesystemError, NetworkError, PathParsingError

DLL_SUFFIX = '.dll'


def mkdir_p(path):
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        raise FilesystemError('Could not create directory %s: %s' % (path, e)) from e


def url_basename(url):
    '''Returns the last segment of the url's path.

    Raises PathParsingError if there is no such segment, e.g. for
    http://example.com/ or for a path ending in a slash.
    '''
    path = urlsplit(url).path
    basename = path.rsplit('/', 1)[-1]
    if not basename:
        raise PathParsingError('Could not determine file name from url %s' % url)
    return basename


def curl_to_file(url, f, timeout=DEFAULT_TIMEOUT):
    curl = pycurl.Curl()
    try:
        curl.setopt(pycurl.URL, url)
        curl.setopt(pycurl.WRITEDATA, f)
        curl.setopt(pycurl.FOLLOWLOCATION, 1)
        curl.setopt(pycurl.MAXREDIRS, 5)
        # treat http error responses as transfer failures
        curl.setopt(pycurl.FAILONERROR, 1)
        curl.setopt(pycurl.NOSIGNAL, 1)
        curl.setopt(pycurl.CONNECTTIMEOUT, CONNECT_TIMEOUT)
        # 0 means no limit
        curl.setopt(pycurl.TIMEOUT, timeout)
        curl.perform()
    except pycurl.error as e:
        code, message = e.args
        raise NetworkError(url, code, message) from e
    finally:
        curl.close()


# Retrieves the file at the given url into download_dir and returns its
# local path. Does nothing if a file with the url's basename already exists.
def fetch(url, download_dir, timeout=DEFAULT_TIMEOUT, verbose=False):
    path = os.path.join(download_dir, url_basename(url))
    if os.path.exists(path):
        return path
    if verbose:
        sys.stdout.write("Fetching %s\n" % url)
        sys.stdout.flush()
    tmp_path = os.path.join(download_dir, '.%s.part' % os.path.basename(path))
    try:
        # exclusive, a leftover part file means another fetch is in progress
        f = open(tmp_path, 'xb')
    except OSError as e:
        raise FilesystemError('Could not create %s: %s' % (tmp_path, e)) from e
    try:
        with f:
            curl_to_file(url, f, timeout)
    except BaseException:
        os.remove(tmp_path)
        raise
    try:
        os.rename(tmp_path, path)
    except OSError as e:
        raise FilesystemError('Could not rename %s to %s: %s' % (tmp_path, path, e)) from e
    return path


def copy_dlls(src_dir, dest_dir):
    '''Copies every dll directly inside src_dir into dest_dir.

    Existing files in dest_dir are overwritten. Returns the list of
    destination paths.
    '''
    try:
        names = sorted(os.listdir(src_dir))
    except OSError as e:
        raise FilesystemError("Can't read dll dir %s: %s" % (src_dir, e)) from e
    copied = []
    for name in names:
        src = os.path.join(src_dir, name)
        if not name.endswith(DLL_SUFFIX) or not os.path.isfile(src):
            continue
        dest = os.path.join(dest_dir, name)
        try:
            shutil.copyfile(src, dest)
        except OSError as e:
            raise FilesystemError("Can't copy %s to %s: %s" % (src, dest, e)) from e
        copied.append(dest)
    return copied
