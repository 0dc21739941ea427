class FitstructException(Exception):
    '''Base class to extend in order to throw exception in fitstruct.

    It takes as argument the byte offset into the stream where the
    problem was detected (None if it doesn't apply).
    '''

    def __init__(self, message='', offset=None):
        self.offset = offset
        super().__init__(message)

    def __str__(self):
        msg = super().__str__()
        if self.offset is None:
            return msg

        return f'{msg} (at offset {self.offset:#x})'


class ScanError(FitstructException):
    '''Stream-level failure: the offsets after this point cannot be trusted.

    The attribute "table" contains the units indexed before the failure.'''

    def __init__(self, message='', offset=None):
        super().__init__(message, offset=offset)
        self.table = None


class TruncatedStreamError(ScanError):
    pass


class UnterminatedHeaderError(TruncatedStreamError):
    '''The stream ended before the END card of the header starting at "header_offset".'''

    def __init__(self, message='', offset=None, header_offset=None):
        super().__init__(message, offset=offset)
        self.header_offset = header_offset


class MagicError(ScanError):
    pass


class MalformedCardError(ScanError):
    pass


class UnseekableStreamError(FitstructException):
    '''The operation needs to move around the stream but the source can only be read forward.'''


class MalformedCardWarning(UserWarning):
    pass
