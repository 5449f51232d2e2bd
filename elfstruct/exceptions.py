class ElfStructException(Exception):
    '''Base class to extend in order to throw exception in elfstruct.

    Beside the message it takes the chain of the layers that caused the
    exception: the innermost field name comes first, each enclosing chunk
    appends its own while the exception bubbles up.
    '''

    def __init__(self, message='', chain=None):
        self.chain = chain if chain is not None else []
        self.message = message
        super().__init__(message)

    @property
    def path(self):
        return '.'.join(self.chain[::-1])

    def __str__(self):
        if not self.chain:
            return self.message

        return f'{self.message} (at \'{self.path}\')'


class ParseError(ElfStructException):
    '''Anything that prevents parse() to return a document.'''
    pass


class TruncatedInput(ParseError):
    '''The buffer is shorter than the structure we are asked to decode.'''
    pass


class MalformedHeader(ParseError):
    '''The header is there but its values don't make sense together.'''
    pass


class MalformedStringTable(ParseError):
    '''A section name cannot be resolved from the string table.'''

    def __init__(self, message='', chain=None, index=None, name_offset=None):
        super().__init__(message, chain=chain)
        self.index = index
        self.name_offset = name_offset


class MagicException(ParseError):
    pass
