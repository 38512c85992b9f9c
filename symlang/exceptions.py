class DemangleError(Exception):
    message = None

    def __init__(self, message):
        if isinstance(message, bytes):
            message = message.decode('utf-8', 'replace')
        Exception.__init__(self, message)
        self.message = message

    def __str__(self):
        return self.message


class LibraryNotFound(DemangleError):
    pass


class UnknownLanguage(DemangleError):
    pass


class StructureMismatch(DemangleError):
    pass


class UnknownEscape(DemangleError):
    pass
