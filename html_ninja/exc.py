
class HtmlNinjaError(Exception):
    """Base class for any html-ninja custom exceptions"""
    pass

class HtmlNinjaFetchError(HtmlNinjaError):
    """Raised when the HTML source cannot be read from disk or fetched over HTTP."""
    pass

class HtmlNinjaParsingError(HtmlNinjaError):
    """Raised when the underlying HTML parser fails."""
    pass

class HtmlNinjaWriteError(HtmlNinjaError):
    """Raised when a CSV file cannot be written to the output directory."""
    pass
