class Error(Exception):
    '''Base class for errors raised while fetching SDL2 dependencies.'''


class ConfigurationError(Error):
    pass


class PathParsingError(Error):
    pass


class NetworkError(Error):
    def __init__(self, url, code, message):
        super(NetworkError, self).__init__(url, code, message)
        self.url = url
        self.code = code
        self.message = message

    def __str__(self):
        return 'Failed to fetch %s: curl error %s: %s' % (
            self.url, self.code, self.message)


class ArchiveReadError(Error):
    pass


class FilesystemError(Error):
    pass
