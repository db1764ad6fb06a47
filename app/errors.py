class StringAnalyzerError(Exception):
    """Base class for errors raised by the analysis and query engine."""


class EmptyInput(StringAnalyzerError):
    pass


class AlreadyExists(StringAnalyzerError):
    def __init__(self, record):
        super().__init__(record.content_hash)
        self.record = record


class NotFound(StringAnalyzerError):
    def __init__(self, content_hash: str):
        super().__init__(content_hash)
        self.content_hash = content_hash


class Unrecognized(StringAnalyzerError):
    def __init__(self, query: str):
        super().__init__(query)
        self.query = query
