# stormfetch/errors.py


class StormfetchError(Exception):
    """Base class for errors that abort a stormfetch run."""


class ConfigError(StormfetchError):
    pass


class TemplateDirectiveError(StormfetchError, ValueError):
    """Raised when the `#/` color directive of an ascii template is malformed."""

    def __init__(self, segment: str, directive_line: str):
        self.segment = segment
        self.directive_line = directive_line
        super().__init__(f"Invalid color '{segment}' in ascii directive '{directive_line}'")


class FetchScriptError(StormfetchError):
    pass
