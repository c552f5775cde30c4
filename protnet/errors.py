"""
Exception types raised by the protein graph engine
"""


class ProteinGraphError(Exception):
    """Base class for all graph engine failures"""


class InvalidArgument(ProteinGraphError, ValueError):
    """A parameter is missing or has the wrong type"""


class NotFound(ProteinGraphError, LookupError):
    """A node reference does not resolve to a live node"""


class InvalidGraph(ProteinGraphError, TypeError):
    """The object given to union() is not a compatible graph"""
