class ReadError(OSError):
    """
    Raised when the old or new input cannot be read in full.

    Attributes:
        side (str): Which input failed, "old" or "new".
    """

    def __init__(self, side: str, message: str):
        super().__init__(f"cannot read {side} input: {message}")
        self.side = side
        self.message = message
