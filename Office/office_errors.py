class OfficeCheckError(Exception):
    """Base class for everything the Office checker raises on purpose."""


class FetchError(OfficeCheckError):
    """A source page or the Elastic index could not be reached (network, HTTP, bad JSON)."""


class ParseError(OfficeCheckError):
    """The fetched page does not have the table/row/cell shape we expect."""


class NotFoundError(ParseError):
    """No <table> exists at the requested index."""


class UnsupportedFamilyError(OfficeCheckError):
    """Requested version family is neither legacy nor current."""


class InvalidInputError(OfficeCheckError):
    """An installed-software observation failed shape validation."""
