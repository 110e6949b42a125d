class InvalidArgument(ValueError):
    """
    Raised for any input the library refuses to work with.

    :param message: human readable description
    :param kind: short machine readable name of the violated rule,
        e.g. ``"alphabet"`` or ``"digits_range"``
    """

    def __init__(self, message: str, kind: str) -> None:
        super().__init__(message)
        self.kind = kind
