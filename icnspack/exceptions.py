class IcnspackException(Exception):
    '''Base class to extend in order to throw exception in icnspack.

    Other than the message it takes an optional argument that represents the
    chain of the layers that caused the exception (innermost first).
    '''

    def __init__(self, message='', chain=None):
        self.message = message
        self.chain = chain if chain is not None else []
        super().__init__(message)

    def __str__(self):
        if not self.chain:
            return self.message

        return '%s (at %s)' % (self.message, '.'.join(reversed(self.chain)))


class NamingException(IcnspackException):
    '''The path given as input doesn't have the expected extension.'''
    pass


class FormatException(IcnspackException):
    '''The data doesn't respect the format.'''
    pass


class UnpackException(FormatException):
    pass


class PackException(FormatException):
    pass


class MagicException(FormatException):
    pass


class SizeException(FormatException):
    pass


class ChunkUnpackException(FormatException):
    pass


class UnrecoverableException(FormatException):
    '''This is useful when is not possible to let an unknown value
    slip through the parsing.'''
    pass
