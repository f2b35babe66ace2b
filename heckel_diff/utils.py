class LineNormalizer:
    """
    Turns raw reader output into the content the engine compares.
    """

    def __init__(self, ignore_whitespace: bool = False, ignore_case: bool = False):
        self.ignore_whitespace = ignore_whitespace
        self.ignore_case = ignore_case

    @staticmethod
    def strip_terminator(line: str) -> str:
        """
        Drops a trailing "\\n" or "\\r\\n". The terminator is never part of
        the line content.
        """
        if line.endswith("\n"):
            line = line[:-1]
            if line.endswith("\r"): line = line[:-1]
        return line

    def normalize(self, line: str) -> str:
        line = self.strip_terminator(line)
        if self.ignore_whitespace:
            line = " ".join(line.split())
        if self.ignore_case:
            line = line.lower()
        return line
