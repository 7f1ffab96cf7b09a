class SWTParserException(Exception):
    '''Base class to extend in order to throw exception in swtparser.

    Other than the message it takes an optional argument that represents
    the chain of the components (schema, record, field) that caused the exception.
    '''

    def __init__(self, message, chain=None):
        self.chain = chain if chain is not None else []
        super().__init__(message)

    def __str__(self):
        msg = super().__str__()
        if not self.chain:
            return msg

        return '%s [%s]' % (msg, ' > '.join(str(_) for _ in self.chain))


class ConfigurationException(SWTParserException):
    '''The structure files are missing or not well formed: this is
    a deployment problem, not something to recover from.'''
    pass


class SchemaNotFoundException(ConfigurationException):

    def __init__(self, name, tried):
        self.tried = tried
        super().__init__(f'structure file for \'{name}\' does not exist', chain=[name])


class SchemaSyntaxException(ConfigurationException):

    def __init__(self, message, path, lineno):
        self.path = path
        self.lineno = lineno
        super().__init__(f'{message} ({path}, line {lineno})')


class SchemaKindException(ConfigurationException):
    pass


class FormatException(SWTParserException):
    '''The data is not the expected file type (or version): an offset
    falls outside the buffer.'''
    pass
