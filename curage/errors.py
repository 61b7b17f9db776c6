class CurageError(Exception):
    """ Base class for all Curage errors"""
    pass

class CurageInvalidSymbol(CurageError):
    """ Raised when something other than a name token is bound"""
    pass

class CurageNameError(CurageError):
    """ Raised when a name is looked up before it is defined"""

class CurageConfigError(CurageError):
    """ Raised when an environment setting cannot be parsed"""

class CurageRenameError(CurageError):
    """ Raised when a rename target is not a valid name"""

# Syntax and semantic problems in user documents are never raised: they are
# reported as Diagnostic values (see curage.types.diagnostic).
