# src/auditor/exceptions.py


class ParseFailure(Exception):
    """
    The HTML parser raised on input it could not tolerate at all.
    Carries the original exception as __cause__.
    """

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Could not parse HTML from {url}: {reason}")
